from datetime import datetime, timedelta

import pytest

from doktolib.errors import ClientInputError
from doktolib.extensions import db
from doktolib.models import Prescription
from doktolib.models.base import utcnow
from doktolib.routes.appointment import date_filter_bounds, parse_date_time

BOOKING = {
    'doctor_id': 'doctor-1',
    'patient_name': 'John Doe',
    'patient_email': 'john.doe@example.com',
    'date_time': '2999-01-01T10:00:00Z',
    'duration_minutes': 30,
}


def book(client, **overrides):
    payload = dict(BOOKING, **overrides)
    return client.post('/api/v1/appointments', json=payload)


def test_create_appointment(client):
    response = book(client)

    assert response.status_code == 201
    body = response.get_json()
    assert body['message'] == 'Appointment created successfully'
    data = body['data']
    assert data['doctor_id'] == 'doctor-1'
    assert data['date_time'] == '2999-01-01T10:00:00Z'
    assert data['duration_minutes'] == 30
    assert data['status'] == 'confirmed'
    assert data['id']


def test_create_appointment_converts_offset_to_utc(client):
    response = book(client, date_time='2999-01-01T12:00:00+02:00')
    assert response.get_json()['data']['date_time'] == '2999-01-01T10:00:00Z'


def test_cannot_book_in_the_past(client):
    response = book(client, date_time='2000-01-01T10:00:00Z')

    assert response.status_code == 400
    assert response.get_json() == {'success': False, 'error': 'Cannot book appointments in the past'}


@pytest.mark.parametrize('field', ['doctor_id', 'patient_name', 'patient_email', 'date_time', 'duration_minutes'])
def test_missing_field(client, field):
    payload = dict(BOOKING)
    del payload[field]

    response = client.post('/api/v1/appointments', json=payload)

    assert response.status_code == 400
    assert response.get_json()['error'] == f'Field "{field}" is required'


def test_blank_field_counts_as_missing(client):
    response = book(client, patient_name='  ')
    assert response.status_code == 400


@pytest.mark.parametrize('duration', [0, -15, '30', 1.5, True])
def test_invalid_duration(client, duration):
    response = book(client, duration_minutes=duration)

    assert response.status_code == 400
    assert response.get_json()['error'] == 'duration_minutes must be a positive integer'


def test_invalid_date(client):
    response = book(client, date_time='next tuesday')

    assert response.status_code == 400
    assert response.get_json()['error'] == 'Invalid date format'


def test_body_must_be_json_object(client):
    response = client.post('/api/v1/appointments', data='not json', content_type='text/plain')
    assert response.status_code == 400

    response = client.post('/api/v1/appointments', json=[BOOKING])
    assert response.status_code == 400


def test_list_appointments_by_doctor(client, make_appointment):
    make_appointment('doctor-1', datetime(2999, 1, 2, 9, 0))
    make_appointment('doctor-1', datetime(2999, 1, 1, 9, 0))
    make_appointment('doctor-2', datetime(2999, 1, 1, 8, 0))

    all_appointments = client.get('/api/v1/appointments').get_json()['data']
    assert len(all_appointments) == 3

    response = client.get('/api/v1/appointments?doctor_id=doctor-1')

    data = response.get_json()['data']
    assert [a['date_time'] for a in data] == ['2999-01-01T09:00:00Z', '2999-01-02T09:00:00Z']


def test_doctor_appointments_latest_first_with_prescription(client, make_appointment):
    first = make_appointment('doctor-1', datetime(2020, 5, 1, 9, 0), status='completed')
    make_appointment('doctor-1', datetime(2999, 5, 1, 9, 0))
    make_appointment('doctor-2', datetime(2999, 6, 1, 9, 0))
    db.session.add(Prescription(appointment_id=first.id, doctor_id='doctor-1', patient_name='John Doe',
                                medications='Amoxicillin 500mg', dosage='twice daily'))
    db.session.commit()

    response = client.get('/api/v1/appointments/doctor/doctor-1')

    body = response.get_json()
    assert body['filter'] is None
    data = body['data']
    assert [a['date_time'] for a in data] == ['2999-05-01T09:00:00Z', '2020-05-01T09:00:00Z']
    assert data[0]['prescription'] is None
    assert data[1]['prescription']['medications'] == 'Amoxicillin 500mg'


def test_doctor_appointment_filters(client, make_appointment):
    now = utcnow()
    make_appointment('doctor-1', now - timedelta(days=3), patient_name='Past')
    make_appointment('doctor-1', now.replace(hour=12, minute=0, second=0, microsecond=0), patient_name='Today')
    make_appointment('doctor-1', now + timedelta(days=3), patient_name='Future')

    def names(date_filter):
        response = client.get(f'/api/v1/appointments/doctor/doctor-1?filter={date_filter}')
        body = response.get_json()
        return body['filter'], [a['patient_name'] for a in body['data']]

    assert names('past') == ('past', ['Past'])
    assert names('today') == ('today', ['Today'])
    assert names('future') == ('future', ['Future'])
    assert names('sometime') == (None, ['Future', 'Today', 'Past'])


def test_date_filter_bounds():
    now = datetime(2024, 3, 10, 15, 30)
    today = datetime(2024, 3, 10)
    tomorrow = datetime(2024, 3, 11)

    assert date_filter_bounds('past', now) == (None, today)
    assert date_filter_bounds('today', now) == (today, tomorrow)
    assert date_filter_bounds('future', now) == (tomorrow, None)
    assert date_filter_bounds(None, now) == (None, None)
    assert date_filter_bounds('PAST', now) == (None, None)


@pytest.mark.parametrize('value, expected', [
    ('2024-03-10T15:30:00Z', datetime(2024, 3, 10, 15, 30)),
    ('2024-03-10T15:30:00', datetime(2024, 3, 10, 15, 30)),
    ('2024-03-10T10:30:00-05:00', datetime(2024, 3, 10, 15, 30)),
])
def test_parse_date_time(value, expected):
    assert parse_date_time(value) == expected


@pytest.mark.parametrize('value', ['', '10/03/2024', 20240310, None])
def test_parse_date_time_rejects(value):
    with pytest.raises(ClientInputError):
        parse_date_time(value)


@pytest.mark.parametrize('field, value', [
    ('patient_name', {'a': 1}),
    ('patient_email', ['john@example.com']),
    ('doctor_id', 42),
    ('date_time', 1700000000),
])
def test_non_string_field_is_rejected(client, field, value):
    response = book(client, **{field: value})

    assert response.status_code == 400
    assert response.get_json()['error'] == f'Field "{field}" must be a string'
