"""Read-only redemption statistics for the admin dashboards."""

from django.conf import settings
from django.db.models import Count, F

from apps.core.models import Registration, Volunteer, VolunteerAction


def _scans_for_event(event_id):
    return VolunteerAction.objects.filter(
        registration__event_id=event_id,
        action=VolunteerAction.ACTION_SCAN,
    )


def _by_batch(actions):
    rows = (
        actions.values(batch=F('registration__student__batch'))
        .annotate(count=Count('id'))
        .order_by('batch')
    )
    return [{'batch': row['batch'], 'count': row['count']} for row in rows]


def event_stats(event_id):
    actions = _scans_for_event(event_id)
    by_counter = (
        actions.values(counter_name=F('volunteer__name'))
        .annotate(count=Count('id'))
        .order_by('counter_name')
    )
    return {
        'total': actions.count(),
        'byBatch': _by_batch(actions),
        'byCounter': [{'counter_name': row['counter_name'], 'count': row['count']} for row in by_counter],
    }


def volunteer_stats(event_id, volunteer_id):
    actions = _scans_for_event(event_id).filter(volunteer_id=volunteer_id)
    volunteer_name = (
        Volunteer.objects.filter(pk=volunteer_id).values_list('name', flat=True).first()
        or 'Unknown Volunteer'
    )
    return {
        'total': actions.count(),
        'byBatch': _by_batch(actions),
        'volunteerName': volunteer_name,
    }


def scan_history(event_id, limit=None):
    """Most recently served registrations of an event"""
    limit = limit or settings.COUPON_CONFIG['scan_history_limit']
    served = (
        Registration.objects.filter(event_id=event_id, status=Registration.STATUS_SERVED)
        .select_related('student')
        .prefetch_related('actions__volunteer')
        .order_by('-served_at')[:limit]
    )
    history = []
    for registration in served:
        action = next(iter(registration.actions.all()), None)
        history.append({
            'student_name': registration.student.name,
            'email': registration.student.email,
            'batch': registration.student.batch,
            'counter_name': action.volunteer.name if action else None,
            'floor': action.floor if action else None,
            'counter': action.counter if action else None,
            'scanned_at': registration.served_at.isoformat() if registration.served_at else None,
        })
    return history
