from flask import Blueprint, request, jsonify
from sqlalchemy.exc import SQLAlchemyError
from doktolib.models import Doctor
from doktolib.extensions import db
from doktolib.errors import NotFound, PersistenceError

doctor_bp = Blueprint('doctor', __name__, url_prefix='/api/v1/doctors')


@doctor_bp.route('', methods=['GET'])
def list_doctors():
    """
    List doctors, best rated first.
    Query params:
        specialty: case-insensitive substring (optional)
        location: case-insensitive substring (optional)
    """
    specialty = request.args.get('specialty', type=str)
    location = request.args.get('location', type=str)

    query = Doctor.query
    if specialty:
        query = query.filter(Doctor.specialty.ilike(f'%{specialty}%'))
    if location:
        query = query.filter(Doctor.location.ilike(f'%{location}%'))

    try:
        doctors = query.order_by(Doctor.rating.desc(), Doctor.name.asc()).all()
    except SQLAlchemyError as e:
        db.session.rollback()
        raise PersistenceError('Failed to fetch doctors') from e

    return jsonify({
        'success': True,
        'data': [d.to_dict() for d in doctors]
    }), 200


@doctor_bp.route('/<doctor_id>', methods=['GET'])
def get_doctor(doctor_id):
    try:
        doctor = db.session.get(Doctor, doctor_id)
    except SQLAlchemyError as e:
        db.session.rollback()
        raise PersistenceError('Failed to fetch doctor') from e

    if not doctor:
        raise NotFound('Doctor not found')

    return jsonify({
        'success': True,
        'data': doctor.to_dict()
    }), 200
