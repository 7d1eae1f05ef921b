"""Registration allocator: one registration per student and event."""

import logging
import secrets

from django.db import DEFAULT_DB_ALIAS, IntegrityError, transaction
from django.utils import timezone

from apps.core.models import Event, EventSlot, Registration, Student
from apps.core.outcomes import ErrorKind, Failure, Success
from apps.utils.qr_utils import generate_qr_token

logger = logging.getLogger(__name__)


def serialize_registration(registration):
    """Stored row as returned to the owning student"""
    return {
        'registration_id': registration.pk,
        'student_id': registration.student_id,
        'event_id': registration.event_id,
        'slot_id': registration.slot_id,
        'qr_token': registration.qr_token,
        'status': registration.status,
        'served_at': registration.served_at.isoformat() if registration.served_at else None,
        'created_at': registration.created_at.isoformat() if registration.created_at else None,
    }


def _find_existing(student_id, event_id, using):
    return Registration.objects.using(using).filter(
        student_id=student_id,
        event_id=event_id,
    ).first()


def _existing_outcome(registration):
    if registration.is_served:
        return Failure(
            ErrorKind.ALREADY_REDEEMED,
            'Coupon already redeemed. You have been served.',
            {'isRedeemed': True},
        )
    return Success(serialize_registration(registration), created=False)


def register(student_id, event_id, *, using=DEFAULT_DB_ALIAS, now=None, choose=secrets.choice):
    """Return the student's registration for the event, creating it on first call.

    A new registration is bound to a slot picked uniformly at random among
    the event's slots that are still open at ``now``. Capacity is advisory
    and not consulted.
    """
    now = now or timezone.now()

    if not Student.objects.using(using).filter(pk=student_id).exists():
        return Failure(ErrorKind.STUDENT_NOT_FOUND, 'Student not found')
    event_status = Event.objects.using(using).filter(pk=event_id).values_list('status', flat=True).first()
    if event_status is None:
        return Failure(ErrorKind.EVENT_NOT_FOUND, 'Event not found')

    existing = _find_existing(student_id, event_id, using)
    if existing:
        return _existing_outcome(existing)

    slot_ids = list(
        EventSlot.objects.using(using)
        .filter(event_id=event_id)
        .open_at(now)
        .values_list('pk', flat=True)
    )
    if event_status == Event.STATUS_CLOSED or not slot_ids:
        return Failure(
            ErrorKind.NO_SLOTS_AVAILABLE,
            'Registration closed. No available slots or event has ended.',
        )

    slot_id = choose(slot_ids)
    try:
        with transaction.atomic(using=using):
            registration = Registration.objects.using(using).create(
                student_id=student_id,
                event_id=event_id,
                slot_id=slot_id,
                qr_token=generate_qr_token(),
                status=Registration.STATUS_REGISTERED,
            )
    except IntegrityError:
        # Either a concurrent first registration for the pair won, or the token collided.
        winner = _find_existing(student_id, event_id, using)
        if winner:
            return _existing_outcome(winner)
        logger.exception(f"Registration insert failed for event {event_id}")
        return Failure(ErrorKind.INTERNAL_ERROR, 'Could not issue a coupon, please retry')

    logger.info(f"Registered student {student_id} for event {event_id} on slot {slot_id}")
    return Success(
        {
            'registration_id': registration.pk,
            'qr_token': registration.qr_token,
            'status': registration.status,
        },
        created=True,
    )
