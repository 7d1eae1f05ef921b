from celery import shared_task
from django.db import transaction
from django.db.models import Max
from django.utils import timezone
from apps.core.models import Event, AuditLog
import logging

logger = logging.getLogger(__name__)


@shared_task
def close_expired_events():
    """Close active events whose last slot has ended"""
    now = timezone.now()
    expired_ids = list(
        Event.objects.filter(status=Event.STATUS_ACTIVE)
        .annotate(last_slot_end=Max('slots__time_end'))
        .filter(last_slot_end__lte=now)
        .values_list('id', flat=True)
    )
    if not expired_ids:
        return []

    with transaction.atomic():
        closed = Event.objects.filter(
            id__in=expired_ids,
            status=Event.STATUS_ACTIVE,
        ).update(status=Event.STATUS_CLOSED)

        AuditLog.objects.create(
            actor_type='SYSTEM',
            event_type='EVENTS_AUTO_CLOSED',
            payload={
                'event_ids': expired_ids,
                'closed': closed,
                'at': now.isoformat(),
            }
        )

    logger.info(f"Auto-closed {closed} expired events: {expired_ids}")
    return expired_ids
