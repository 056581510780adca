"""
Prescription API Routes
Handles prescription creation and per-doctor listing
"""

from flask import Blueprint, request, jsonify
from sqlalchemy.exc import SQLAlchemyError
from doktolib.extensions import db
from doktolib.models import Appointment, Prescription
from doktolib.models.base import isoformat
from doktolib.errors import NotFound, PersistenceError
from doktolib.utils.validation import get_json_body, require_fields, require_strings
import logging

logger = logging.getLogger(__name__)

prescription_bp = Blueprint("prescription", __name__, url_prefix="/api/v1/prescriptions")


@prescription_bp.route("", methods=["POST"])
def create_prescription():
    """
    Create a prescription for an existing appointment

    Body:
        appointment_id: Appointment ID (required)
        medications: Medication names and strengths (required)
        dosage: e.g. "1 tablet twice daily" (required)
        instructions: Additional instructions (optional)

    The doctor and patient are taken from the appointment.
    """
    data = get_json_body()
    require_fields(data, ["appointment_id", "medications", "dosage"])
    require_strings(data, ["appointment_id", "medications", "dosage", "instructions"])

    try:
        appointment = db.session.get(Appointment, data["appointment_id"])
    except SQLAlchemyError as e:
        db.session.rollback()
        raise PersistenceError("Failed to fetch appointment") from e

    if not appointment:
        raise NotFound("Appointment not found")

    prescription = Prescription(
        appointment_id=appointment.id,
        doctor_id=appointment.doctor_id,
        patient_name=appointment.patient_name,
        medications=data["medications"],
        dosage=data["dosage"],
        instructions=data.get("instructions") or "",
    )

    try:
        db.session.add(prescription)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        raise PersistenceError("Failed to create prescription") from e

    logger.info(
        f"Prescription {prescription.id} created for appointment {appointment.id} by doctor {prescription.doctor_id}"
    )

    return jsonify(
        {
            "success": True,
            "data": prescription.to_dict(),
            "message": "Prescription created successfully",
        }
    ), 201


@prescription_bp.route("/doctor/<doctor_id>", methods=["GET"])
def list_doctor_prescriptions(doctor_id):
    """
    A doctor's prescriptions, newest first, with the appointment they belong to

    Query params:
        patient: case-insensitive substring of the patient name (optional)
        medication: case-insensitive substring of the medications (optional)
    """
    patient = request.args.get("patient", type=str)
    medication = request.args.get("medication", type=str)

    query = (
        db.session.query(Prescription, Appointment)
        .outerjoin(Appointment, Prescription.appointment_id == Appointment.id)
        .filter(Prescription.doctor_id == doctor_id)
    )
    if patient:
        query = query.filter(Prescription.patient_name.ilike(f"%{patient}%"))
    if medication:
        query = query.filter(Prescription.medications.ilike(f"%{medication}%"))

    try:
        rows = query.order_by(Prescription.created_at.desc()).all()
    except SQLAlchemyError as e:
        db.session.rollback()
        raise PersistenceError("Failed to fetch prescriptions") from e

    result = []
    for prescription, appointment in rows:
        item = prescription.to_dict()
        item["appointment_date"] = isoformat(appointment.date_time) if appointment else None
        item["appointment_duration"] = appointment.duration_minutes if appointment else None
        item["appointment_status"] = appointment.status if appointment else None
        result.append(item)

    return jsonify({"success": True, "data": result}), 200
