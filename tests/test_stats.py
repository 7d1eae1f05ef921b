import pytest
from django.contrib.auth.models import User
from rest_framework.test import APIClient

from apps.core import stats
from apps.core.models import Student, Volunteer
from apps.core.redemption import scan
from apps.core.registration import register

pytestmark = pytest.mark.django_db


@pytest.fixture
def served_event(event, open_slot, volunteer, student, other_student):
    colleague = Volunteer.objects.create(
        event=event, name='Counter Two', username='counter2', current_floor='First', current_counter='C2',
    )
    late = Student.objects.create(name='Late Comer', email='late@example.org')
    for who, by in [(student, volunteer), (other_student, colleague), (late, colleague)]:
        token = register(who.id, event.id).payload['qr_token']
        assert scan(token, by.id).ok
    return event, volunteer, colleague


@pytest.fixture
def admin_client():
    client = APIClient()
    admin = User.objects.create_user('admin', password='pw', is_staff=True)
    client.force_authenticate(admin)
    return client


def test_event_stats_breakdown(served_event):
    event, volunteer, colleague = served_event

    result = stats.event_stats(event.id)

    assert result['total'] == 3
    assert {row['batch']: row['count'] for row in result['byBatch']} == {None: 1, '2023': 1, '2024': 1}
    assert result['byCounter'] == [
        {'counter_name': 'Counter One', 'count': 1},
        {'counter_name': 'Counter Two', 'count': 2},
    ]


def test_volunteer_stats(served_event):
    event, volunteer, colleague = served_event

    result = stats.volunteer_stats(event.id, colleague.id)

    assert result['total'] == 2
    assert result['volunteerName'] == 'Counter Two'


def test_volunteer_stats_unknown_volunteer(event):
    assert stats.volunteer_stats(event.id, 424242) == {
        'total': 0,
        'byBatch': [],
        'volunteerName': 'Unknown Volunteer',
    }


def test_scan_history_newest_first(served_event):
    event, volunteer, colleague = served_event

    history = stats.scan_history(event.id)

    assert [row['student_name'] for row in history] == ['Late Comer', 'Meera K', 'Sanjay S']
    assert history[0]['counter_name'] == 'Counter Two'
    assert (history[0]['floor'], history[0]['counter']) == ('First', 'C2')
    assert stats.scan_history(event.id, limit=1)[0]['student_name'] == 'Late Comer'


def test_stats_endpoints_require_admin(served_event, volunteer_client):
    event, volunteer, colleague = served_event

    assert APIClient().get(f'/api/v1/events/{event.id}/stats').status_code == 401
    assert volunteer_client.get(f'/api/v1/events/{event.id}/stats').status_code == 403


def test_stats_endpoints(served_event, admin_client):
    event, volunteer, colleague = served_event

    totals = admin_client.get(f'/api/v1/events/{event.id}/stats')
    per_volunteer = admin_client.get(f'/api/v1/events/{event.id}/stats/volunteer/{volunteer.id}')
    history = admin_client.get(f'/api/v1/events/{event.id}/scan-history')
    missing = admin_client.get('/api/v1/events/424242/stats')

    assert totals.json()['total'] == 3
    assert per_volunteer.json()['total'] == 1
    assert len(history.json()['scanHistory']) == 3
    assert missing.status_code == 404
