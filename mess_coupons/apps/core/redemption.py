"""Redemption transactor: the only place a registration becomes served.

The whole read-validate-write sequence runs in one transaction holding a
row lock on the registration, so concurrent scans of the same token are
strictly ordered and exactly one of them observes the transition.
"""

import logging

from django.db import DEFAULT_DB_ALIAS, DatabaseError, transaction
from django.utils import timezone

from apps.core.models import Registration, Volunteer, VolunteerAction
from apps.core.outcomes import ErrorKind, Failure, Rejected, Success
from apps.utils.qr_utils import is_valid_qr_token

logger = logging.getLogger(__name__)


def _lock_registration(qr_token, using):
    try:
        return (
            Registration.objects.using(using)
            .select_related('student')
            .select_for_update(of=('self',))
            .get(qr_token=qr_token)
        )
    except Registration.DoesNotExist:
        raise Rejected(Failure(ErrorKind.INVALID_TOKEN, 'Invalid QR Token'))


def _load_volunteer(volunteer_id, using):
    try:
        return Volunteer.objects.using(using).get(pk=volunteer_id)
    except Volunteer.DoesNotExist:
        raise Rejected(Failure(ErrorKind.VOLUNTEER_NOT_FOUND, 'Volunteer not found'))


def _check_redeemable(registration, volunteer):
    if registration.event_id != volunteer.event_id:
        raise Rejected(Failure(
            ErrorKind.WRONG_EVENT_SCOPE,
            'You can only scan QR codes for your assigned event',
        ))
    if registration.status == Registration.STATUS_SERVED:
        raise Rejected(Failure(
            ErrorKind.ALREADY_SERVED,
            'Student already served',
            {'student_name': registration.student.name},
        ))
    if registration.status == Registration.STATUS_CANCELLED:
        raise Rejected(Failure(ErrorKind.CANCELLED, 'Registration cancelled'))


def scan(qr_token, volunteer_id, *, using=DEFAULT_DB_ALIAS):
    """Redeem a coupon token on behalf of a volunteer."""
    if not is_valid_qr_token(qr_token):
        return Failure(ErrorKind.BAD_REQUEST, 'Malformed QR token')

    try:
        with transaction.atomic(using=using):
            registration = _lock_registration(qr_token, using)
            volunteer = _load_volunteer(volunteer_id, using)
            _check_redeemable(registration, volunteer)

            registration.status = Registration.STATUS_SERVED
            registration.served_at = timezone.localtime()
            registration.save(using=using, update_fields=['status', 'served_at'])

            VolunteerAction.objects.using(using).create(
                volunteer=volunteer,
                registration=registration,
                action=VolunteerAction.ACTION_SCAN,
                floor=volunteer.current_floor,
                counter=volunteer.current_counter,
            )
    except Rejected as exc:
        logger.info(f"Scan by volunteer {volunteer_id} rejected: {exc.failure.kind.value}")
        return exc.failure
    except DatabaseError:
        logger.exception(f"Scan transaction failed for volunteer {volunteer_id}")
        return Failure(ErrorKind.INTERNAL_ERROR, 'Scan could not be recorded, please retry')

    student = registration.student
    logger.info(
        f"Volunteer {volunteer.pk} served registration {registration.pk} "
        f"at {volunteer.current_floor}/{volunteer.current_counter}"
    )
    return Success({
        'student_id': student.pk,
        'student_name': student.name,
        'batch': student.batch,
        'served_at': registration.served_at.isoformat(),
    })
