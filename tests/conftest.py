from datetime import date, timedelta

import pytest
from django.core.cache import cache
from django.utils import timezone
from rest_framework.test import APIClient

from apps.core.models import Event, EventSlot, Student, Volunteer


@pytest.fixture(autouse=True)
def clear_throttle_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def event(db):
    return Event.objects.create(name='Onam Sadhya', date=date(2026, 8, 28))


@pytest.fixture
def other_event(db):
    return Event.objects.create(name='Diwali Dinner', date=date(2026, 11, 8))


@pytest.fixture
def make_slot(db):
    """Create a slot whose window is given in hours relative to now."""
    def factory(event, floor='Ground', counter='C1', start_offset=-1, end_offset=2):
        now = timezone.now()
        return EventSlot.objects.create(
            event=event,
            floor=floor,
            counter=counter,
            capacity=100,
            time_start=now + timedelta(hours=start_offset),
            time_end=now + timedelta(hours=end_offset),
        )
    return factory


@pytest.fixture
def open_slot(event, make_slot):
    return make_slot(event)


@pytest.fixture
def student(db):
    return Student.objects.create(name='Sanjay S', email='sanjays24bec18@iiitkottayam.ac.in')


@pytest.fixture
def other_student(db):
    return Student.objects.create(name='Meera K', email='meerak23bcs07@iiitkottayam.ac.in')


@pytest.fixture
def volunteer(event):
    return Volunteer.objects.create(
        event=event,
        name='Counter One',
        username='counter1',
        current_floor='Ground',
        current_counter='C1',
    )


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def volunteer_client(volunteer):
    client = APIClient()
    token = volunteer.issue_token()
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')
    return client
