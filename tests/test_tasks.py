import pytest

from apps.core.models import AuditLog, Event
from apps.core.tasks import close_expired_events

pytestmark = pytest.mark.django_db


def test_closes_events_whose_last_slot_ended(event, other_event, make_slot):
    make_slot(event, start_offset=-5, end_offset=-3)
    make_slot(event, start_offset=-3, end_offset=-1)
    make_slot(other_event, start_offset=-3, end_offset=-1)
    make_slot(other_event, start_offset=-1, end_offset=2)

    closed = close_expired_events()

    assert closed == [event.id]
    event.refresh_from_db()
    other_event.refresh_from_db()
    assert event.status == Event.STATUS_CLOSED
    assert other_event.status == Event.STATUS_ACTIVE
    log = AuditLog.objects.get()
    assert log.actor_type == 'SYSTEM'
    assert log.event_type == 'EVENTS_AUTO_CLOSED'
    assert log.payload['event_ids'] == [event.id]


def test_events_without_slots_stay_open(event):
    assert close_expired_events() == []
    event.refresh_from_db()
    assert event.status == Event.STATUS_ACTIVE
    assert not AuditLog.objects.exists()
