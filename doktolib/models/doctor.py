from doktolib.extensions import db
from .base import generate_id


class Doctor(db.Model):
    __tablename__ = 'doctors'

    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    name = db.Column(db.String(255), nullable=False)
    specialty = db.Column(db.String(100), nullable=False, index=True)
    location = db.Column(db.String(255), nullable=False, index=True)
    rating = db.Column(db.Float, nullable=False, default=0.0, index=True)
    price_per_hour = db.Column(db.Integer, nullable=False, default=0)
    avatar = db.Column(db.String(500))
    experience_years = db.Column(db.Integer, nullable=False, default=0)
    languages = db.Column(db.String(255))

    appointments = db.relationship('Appointment', backref='doctor', lazy='dynamic')

    def __repr__(self):
        return f"<Doctor {self.name} ({self.specialty})>"

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'specialty': self.specialty,
            'location': self.location,
            'rating': self.rating,
            'price_per_hour': self.price_per_hour,
            'avatar': self.avatar or '',
            'experience_years': self.experience_years,
            'languages': self.languages or '',
        }
