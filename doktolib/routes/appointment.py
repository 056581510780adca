from datetime import datetime, timedelta, timezone

from flask import Blueprint, request, jsonify
from sqlalchemy.exc import SQLAlchemyError

from doktolib.models import Appointment, Prescription
from doktolib.models.base import utcnow
from doktolib.extensions import db
from doktolib.errors import ClientInputError, PersistenceError
from doktolib.utils.validation import get_json_body, require_fields, require_strings

import logging

logger = logging.getLogger(__name__)

appointment_bp = Blueprint('appointment', __name__, url_prefix='/api/v1/appointments')

DATE_FILTERS = ('past', 'today', 'future')


def parse_date_time(value):
    """
    Parse an ISO-8601 timestamp into naive UTC.
    Values without an offset are read as UTC; a trailing "Z" is accepted.
    """
    if not isinstance(value, str):
        raise ClientInputError('Invalid date format')
    text = value.strip()
    if text.endswith(('Z', 'z')):
        text = text[:-1] + '+00:00'
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise ClientInputError('Invalid date format') from None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def date_filter_bounds(date_filter, now):
    """
    (start, end) bounds on date_time for a doctor's appointment filter, UTC days.
        past:   before the start of today
        today:  from the start of today to the start of tomorrow
        future: from the start of tomorrow
    Any other value means no restriction: (None, None).
    """
    today = now.replace(hour=0, minute=0, second=0, microsecond=0)
    tomorrow = today + timedelta(days=1)

    if date_filter == 'past':
        return None, today
    if date_filter == 'today':
        return today, tomorrow
    if date_filter == 'future':
        return tomorrow, None
    return None, None


@appointment_bp.route('', methods=['POST'])
def create_appointment():
    """
    Book an appointment.
    Body: doctor_id, patient_name, patient_email, date_time (ISO-8601), duration_minutes
    The doctor is not looked up and overlapping bookings are not checked.
    """
    data = get_json_body()
    require_fields(data, ['doctor_id', 'patient_name', 'patient_email', 'date_time', 'duration_minutes'])
    require_strings(data, ['doctor_id', 'patient_name', 'patient_email', 'date_time'])

    duration = data['duration_minutes']
    if isinstance(duration, bool) or not isinstance(duration, int) or duration <= 0:
        raise ClientInputError('duration_minutes must be a positive integer')

    appointment_time = parse_date_time(data['date_time'])
    if appointment_time < utcnow():
        raise ClientInputError('Cannot book appointments in the past')

    appointment = Appointment(
        doctor_id=data['doctor_id'],
        patient_name=data['patient_name'],
        patient_email=data['patient_email'],
        date_time=appointment_time,
        duration_minutes=duration,
        status='confirmed',
    )

    try:
        db.session.add(appointment)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        raise PersistenceError('Failed to create appointment') from e

    logger.info(f"Appointment {appointment.id} booked with doctor {appointment.doctor_id}")

    return jsonify({
        'success': True,
        'data': appointment.to_dict(),
        'message': 'Appointment created successfully'
    }), 201


@appointment_bp.route('', methods=['GET'])
def list_appointments():
    """
    List appointments, earliest first.
    Query params:
        doctor_id: exact doctor filter (optional)
    """
    doctor_id = request.args.get('doctor_id', type=str)

    query = Appointment.query
    if doctor_id:
        query = query.filter(Appointment.doctor_id == doctor_id)

    try:
        appointments = query.order_by(Appointment.date_time.asc()).all()
    except SQLAlchemyError as e:
        db.session.rollback()
        raise PersistenceError('Failed to fetch appointments') from e

    return jsonify({
        'success': True,
        'data': [a.to_dict() for a in appointments]
    }), 200


@appointment_bp.route('/doctor/<doctor_id>', methods=['GET'])
def list_doctor_appointments(doctor_id):
    """
    A doctor's appointments, latest first, each with its prescription (or null).
    Query params:
        filter: past | today | future (optional, anything else lists all)
    """
    date_filter = request.args.get('filter', type=str)
    start, end = date_filter_bounds(date_filter, utcnow())

    query = db.session.query(Appointment, Prescription).outerjoin(
        Prescription, Prescription.appointment_id == Appointment.id
    ).filter(Appointment.doctor_id == doctor_id)

    if start is not None:
        query = query.filter(Appointment.date_time >= start)
    if end is not None:
        query = query.filter(Appointment.date_time < end)

    try:
        rows = query.order_by(Appointment.date_time.desc()).all()
    except SQLAlchemyError as e:
        db.session.rollback()
        raise PersistenceError('Failed to fetch appointments') from e

    result = []
    for appointment, prescription in rows:
        item = appointment.to_dict()
        item['prescription'] = prescription.to_dict() if prescription else None
        result.append(item)

    return jsonify({
        'success': True,
        'data': result,
        'filter': date_filter if date_filter in DATE_FILTERS else None
    }), 200
