from doktolib.extensions import db
from .base import generate_id, isoformat, utcnow


class Appointment(db.Model):
    __tablename__ = 'appointments'

    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    doctor_id = db.Column(db.String(36), db.ForeignKey('doctors.id'), nullable=False, index=True)

    patient_name = db.Column(db.String(255), nullable=False)
    patient_email = db.Column(db.String(255), nullable=False)
    date_time = db.Column(db.DateTime, nullable=False, index=True)  # naive UTC
    duration_minutes = db.Column(db.Integer, nullable=False)

    # Status: confirmed, completed, cancelled
    status = db.Column(db.String(30), nullable=False, default='confirmed')
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    def __repr__(self):
        return f"<Appointment {self.patient_name} - {self.doctor_id} on {self.date_time}>"

    def to_dict(self):
        return {
            'id': self.id,
            'doctor_id': self.doctor_id,
            'patient_name': self.patient_name,
            'patient_email': self.patient_email,
            'date_time': isoformat(self.date_time),
            'duration_minutes': self.duration_minutes,
            'status': self.status,
            'created_at': isoformat(self.created_at),
        }
