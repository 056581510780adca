"""
Shared fixtures: a testing app on in-memory SQLite with an in-memory object
store injected in place of S3.
"""
from datetime import datetime

import pytest

from doktolib import create_app
from doktolib.errors import DeleteFailed, LinkGenerationFailed, UploadFailed
from doktolib.extensions import db
from doktolib.models import Appointment, Doctor
from doktolib.services.file_classifier import FileCategory
from doktolib.services.object_store import ObjectStore, build_storage_key


class InMemoryObjectStore:
    """Records gateway calls and keeps uploaded bytes in a dict."""

    configured = True
    bucket = 'test-bucket'

    def __init__(self):
        self.objects = {}
        self.uploads = []
        self.deleted = []
        self.links = []
        self.fail_upload = False
        self.fail_delete = False
        self.fail_link = False

    def upload(self, data, filename, content_type, owner_id, category):
        self.uploads.append((filename, content_type, owner_id, FileCategory(category)))
        if self.fail_upload:
            raise UploadFailed()
        key = build_storage_key(category, owner_id, filename)
        self.objects[key] = data
        return key

    def generate_temporary_link(self, key, ttl=3600):
        self.links.append((key, ttl))
        if self.fail_link:
            raise LinkGenerationFailed()
        return f"https://{self.bucket}.s3.amazonaws.com/{key}?X-Amz-Expires={ttl}"

    def delete(self, key):
        self.deleted.append(key)
        if self.fail_delete:
            raise DeleteFailed()
        self.objects.pop(key, None)


@pytest.fixture
def store():
    return InMemoryObjectStore()


def _make_app(object_store):
    app = create_app('testing', object_store=object_store)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def app(store):
    yield from _make_app(store)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def unconfigured_app():
    """App whose S3 gateway has no credentials."""
    yield from _make_app(ObjectStore())


@pytest.fixture
def make_doctor(app):
    def _make_doctor(**overrides):
        values = {
            'name': 'Dr. Jane Smith',
            'specialty': 'Cardiologist',
            'location': 'Boston, MA',
            'rating': 4.5,
            'price_per_hour': 200,
            'avatar': '',
            'experience_years': 12,
            'languages': 'English, Spanish',
        }
        values.update(overrides)
        doctor = Doctor(**values)
        db.session.add(doctor)
        db.session.commit()
        return doctor
    return _make_doctor


@pytest.fixture
def make_appointment(app):
    def _make_appointment(doctor_id, date_time=datetime(2999, 1, 1, 10, 0), **overrides):
        values = {
            'doctor_id': doctor_id,
            'patient_name': 'John Doe',
            'patient_email': 'john.doe@example.com',
            'date_time': date_time,
            'duration_minutes': 30,
            'status': 'confirmed',
        }
        values.update(overrides)
        appointment = Appointment(**values)
        db.session.add(appointment)
        db.session.commit()
        return appointment
    return _make_appointment

