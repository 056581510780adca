"""
Demo seed data: generates doctors, appointments and prescriptions.

Exposed as `flask seed-doctors` and `flask seed-appointments`.
"""
import logging
import random
from datetime import timedelta

from doktolib.extensions import db
from doktolib.models import Appointment, Doctor, Prescription
from doktolib.models.base import utcnow

logger = logging.getLogger(__name__)

FIRST_NAMES = {
    'male': [
        'James', 'Robert', 'John', 'Michael', 'David', 'William', 'Richard', 'Thomas', 'Christopher', 'Charles',
        'Daniel', 'Matthew', 'Anthony', 'Mark', 'Steven', 'Paul', 'Andrew', 'Joshua', 'Kevin', 'Brian',
        'George', 'Timothy', 'Jason', 'Edward', 'Ryan', 'Jacob', 'Eric', 'Jonathan', 'Samuel', 'Benjamin',
    ],
    'female': [
        'Mary', 'Patricia', 'Jennifer', 'Linda', 'Elizabeth', 'Barbara', 'Susan', 'Jessica', 'Sarah', 'Karen',
        'Nancy', 'Lisa', 'Helen', 'Sandra', 'Donna', 'Carol', 'Ruth', 'Sharon', 'Michelle', 'Laura',
        'Kimberly', 'Deborah', 'Amy', 'Angela', 'Ashley', 'Brenda', 'Emma', 'Olivia', 'Janet', 'Frances',
    ],
}

LAST_NAMES = [
    'Smith', 'Johnson', 'Williams', 'Brown', 'Jones', 'Garcia', 'Miller', 'Davis', 'Rodriguez', 'Martinez',
    'Hernandez', 'Lopez', 'Gonzalez', 'Wilson', 'Anderson', 'Thomas', 'Taylor', 'Moore', 'Jackson', 'Martin',
    'Lee', 'Perez', 'Thompson', 'White', 'Harris', 'Sanchez', 'Clark', 'Ramirez', 'Lewis', 'Robinson',
    'Walker', 'Young', 'Allen', 'King', 'Wright', 'Scott', 'Torres', 'Nguyen', 'Hill', 'Flores',
]

SPECIALTIES = [
    'General Practitioner', 'Cardiologist', 'Dermatologist', 'Gynecologist', 'Pediatrician', 'Psychiatrist',
    'Neurologist', 'Ophthalmologist', 'ENT Specialist', 'Orthopedist', 'Rheumatologist', 'Endocrinologist',
    'Gastroenterologist', 'Pulmonologist', 'Urologist', 'Surgeon', 'Anesthesiologist', 'Radiologist',
    'Oncologist', 'Dentist', 'Allergist', 'Geriatrician', 'Nephrologist', 'Hematologist',
]

# Specialists charge more per hour
SPECIALIST_SPECIALTIES = {'Cardiologist', 'Neurologist', 'Surgeon', 'Oncologist', 'Ophthalmologist'}

CITIES = [
    'New York, NY', 'Los Angeles, CA', 'Chicago, IL', 'Houston, TX', 'Phoenix, AZ', 'Philadelphia, PA',
    'San Antonio, TX', 'San Diego, CA', 'Dallas, TX', 'San Jose, CA', 'Austin, TX', 'Jacksonville, FL',
    'Columbus, OH', 'Charlotte, NC', 'San Francisco, CA', 'Indianapolis, IN', 'Seattle, WA', 'Denver, CO',
    'Washington, DC', 'Boston, MA', 'Nashville, TN', 'Detroit, MI', 'Portland, OR', 'Las Vegas, NV',
    'Baltimore, MD', 'Milwaukee, WI', 'Atlanta, GA', 'Miami, FL', 'Minneapolis, MN', 'Tampa, FL',
]

LANGUAGES = [
    'English', 'English, Spanish', 'English, French', 'English, German', 'English, Italian',
    'English, Arabic', 'English, Portuguese', 'English, Spanish, French', 'English, Mandarin',
    'English, Russian', 'English, Japanese',
]

AVATAR_URLS = [
    'https://images.unsplash.com/photo-1559839734-2b71ea197ec2?w=400&h=400&fit=crop&crop=face',
    'https://images.unsplash.com/photo-1612349317150-e413f6a5b16d?w=400&h=400&fit=crop&crop=face',
    'https://images.unsplash.com/photo-1594824072407-1cb42b80ef54?w=400&h=400&fit=crop&crop=face',
    'https://images.unsplash.com/photo-1622253692010-333f2da6031d?w=400&h=400&fit=crop&crop=face',
    'https://images.unsplash.com/photo-1551601651-2a8555f1a136?w=400&h=400&fit=crop&crop=face',
    'https://images.unsplash.com/photo-1582750433449-648ed127bb54?w=400&h=400&fit=crop&crop=face',
]

PATIENT_NAMES = [
    'John Smith', 'Emma Johnson', 'Michael Brown', 'Sarah Wilson', 'David Miller',
    'Lisa Davis', 'Robert Garcia', 'Jessica Martinez', 'William Rodriguez', 'Ashley Hernandez',
    'Christopher Lopez', 'Amanda Gonzalez', 'Matthew Anderson', 'Stephanie Thomas', 'Daniel Taylor',
    'Jennifer Moore', 'Joseph Martin', 'Rebecca Jackson', 'James White', 'Michelle Harris',
]

EMAIL_DOMAINS = ['gmail.com', 'yahoo.com', 'hotmail.com', 'outlook.com', 'email.com']

MEDICATION_TEMPLATES = [
    {
        'medications': 'Amoxicillin 500mg',
        'dosage': '1 capsule twice daily',
        'instructions': 'Take with food. Complete entire course even if symptoms improve.',
    },
    {
        'medications': 'Ibuprofen 200mg',
        'dosage': '1-2 tablets every 6-8 hours as needed',
        'instructions': 'Take with food to avoid stomach upset. Do not exceed 6 tablets in 24 hours.',
    },
    {
        'medications': 'Lisinopril 10mg',
        'dosage': '1 tablet once daily in the morning',
        'instructions': 'Monitor blood pressure regularly. Avoid potassium supplements.',
    },
    {
        'medications': 'Metformin 500mg',
        'dosage': '1 tablet twice daily with meals',
        'instructions': 'Monitor blood sugar levels. Take with breakfast and dinner.',
    },
    {
        'medications': 'Omeprazole 20mg',
        'dosage': '1 capsule once daily before breakfast',
        'instructions': 'Take 30 minutes before eating. Can take with water.',
    },
    {
        'medications': 'Atorvastatin 20mg',
        'dosage': '1 tablet once daily at bedtime',
        'instructions': 'Take at the same time each day. Avoid grapefruit juice.',
    },
]


def generate_doctor(rng):
    """Attributes of one random doctor (60% women, ratings mostly 4.0-5.0)."""
    gender = 'female' if rng.random() > 0.4 else 'male'
    specialty = rng.choice(SPECIALTIES)

    if rng.random() > 0.1:
        rating = round(rng.uniform(4.0, 5.0), 1)
    else:
        rating = round(rng.uniform(3.0, 4.0), 1)

    if specialty in SPECIALIST_SPECIALTIES:
        price = rng.randint(150, 300)
    else:
        price = rng.randint(80, 180)

    return {
        'name': f"Dr. {rng.choice(FIRST_NAMES[gender])} {rng.choice(LAST_NAMES)}",
        'specialty': specialty,
        'location': rng.choice(CITIES),
        'rating': rating,
        'price_per_hour': price,
        'avatar': rng.choice(AVATAR_URLS),
        'experience_years': rng.randint(3, 40),
        'languages': rng.choice(LANGUAGES),
    }


def _patient_email(rng, name):
    username = name.lower().replace(' ', '.') + str(rng.randint(0, 99))
    return f"{username}@{rng.choice(EMAIL_DOMAINS)}"


def _slot(rng, now, days_offset, start_hour=9, end_hour=17):
    """A :00 or :30 slot during working hours, days_offset days from now."""
    day = (now + timedelta(days=days_offset)).replace(hour=0, minute=0, second=0, microsecond=0)
    return day.replace(hour=rng.randrange(start_hour, end_hour), minute=rng.choice((0, 30)))


def generate_appointment(rng, doctor_id, now):
    """
    Attributes of one random appointment.
    30% past (80% completed, 20% cancelled), 10% today, 60% future (confirmed).
    """
    patient_name = rng.choice(PATIENT_NAMES)
    roll = rng.random()
    if roll < 0.3:
        days_offset = -rng.randint(1, 30)
        status = 'completed' if rng.random() > 0.2 else 'cancelled'
    elif roll < 0.4:
        days_offset = 0
        status = 'confirmed'
    else:
        days_offset = rng.randint(1, 60)
        status = 'confirmed'

    return {
        'doctor_id': doctor_id,
        'patient_name': patient_name,
        'patient_email': _patient_email(rng, patient_name),
        'date_time': _slot(rng, now, days_offset),
        'duration_minutes': rng.choice((30, 60)),
        'status': status,
    }


def seed_doctors(count=1500, seed=None):
    """Insert count random doctors. Returns the number inserted."""
    rng = random.Random(seed)
    doctors = [Doctor(**generate_doctor(rng)) for _ in range(count)]
    db.session.add_all(doctors)
    db.session.commit()
    logger.info(f"Seeded {len(doctors)} doctors")
    return len(doctors)


def seed_appointments(count=200, seed=None):
    """
    Insert count random appointments across existing doctors, with a
    prescription for each completed one. Returns (appointments, prescriptions).
    """
    doctor_ids = [doctor_id for (doctor_id,) in db.session.query(Doctor.id).all()]
    if not doctor_ids:
        logger.warning("No doctors found, run seed-doctors first")
        return 0, 0

    rng = random.Random(seed)
    now = utcnow()
    appointments = []
    prescriptions = []

    for _ in range(count):
        appointment = Appointment(**generate_appointment(rng, rng.choice(doctor_ids), now))
        db.session.add(appointment)
        db.session.flush()  # assigns appointment.id
        appointments.append(appointment)

        if appointment.status == 'completed':
            template = rng.choice(MEDICATION_TEMPLATES)
            prescriptions.append(Prescription(
                appointment_id=appointment.id,
                doctor_id=appointment.doctor_id,
                patient_name=appointment.patient_name,
                created_at=appointment.date_time + timedelta(minutes=appointment.duration_minutes),
                **template,
            ))

    db.session.add_all(prescriptions)
    db.session.commit()
    logger.info(f"Seeded {len(appointments)} appointments and {len(prescriptions)} prescriptions")
    return len(appointments), len(prescriptions)
