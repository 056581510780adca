from doktolib.extensions import db
from .base import generate_id, isoformat, utcnow


class Prescription(db.Model):
    """
    Prescription written for one appointment.

    doctor_id and patient_name are copied from the appointment when the
    prescription is created, so doctor listings need no join to filter them.
    """

    __tablename__ = "prescriptions"

    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    appointment_id = db.Column(
        db.String(36), db.ForeignKey("appointments.id"), nullable=False, index=True
    )

    # Denormalized from the appointment
    doctor_id = db.Column(db.String(36), nullable=False, index=True)
    patient_name = db.Column(db.String(255), nullable=False)

    medications = db.Column(db.Text, nullable=False)  # e.g. "Amoxicillin 500mg"
    dosage = db.Column(db.String(255), nullable=False)  # e.g. "1 capsule twice daily"
    instructions = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    appointment = db.relationship(
        "Appointment", backref=db.backref("prescriptions", lazy="dynamic"), lazy=True
    )

    def __repr__(self):
        return f"<Prescription {self.id} - Appointment: {self.appointment_id}>"

    def to_dict(self):
        """Convert to dictionary for API responses."""
        return {
            "id": self.id,
            "appointment_id": self.appointment_id,
            "doctor_id": self.doctor_id,
            "patient_name": self.patient_name,
            "medications": self.medications,
            "dosage": self.dosage,
            "instructions": self.instructions or "",
            "created_at": isoformat(self.created_at),
        }
