# Views for api app

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import AllowAny, IsAdminUser
from rest_framework.response import Response
from django.db.models import Exists, OuterRef
from django.shortcuts import get_object_or_404
from django.utils import timezone

from apps.core import redemption, registration, stats
from apps.core.models import Event, EventSlot, Registration
from apps.core.outcomes import ErrorKind, Failure
from apps.utils.qr_utils import generate_qr_image
from .permissions import IsVolunteer
from .serializers import (
    ActiveEventSerializer, OptionalStudentQuerySerializer, RegisterRequestSerializer,
    ScanRequestSerializer, StudentQuerySerializer,
)
from .throttles import ScanRateThrottle

FAILURE_STATUS = {
    ErrorKind.BAD_REQUEST: status.HTTP_400_BAD_REQUEST,
    ErrorKind.STUDENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.EVENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.INVALID_TOKEN: status.HTTP_404_NOT_FOUND,
    ErrorKind.VOLUNTEER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.WRONG_EVENT_SCOPE: status.HTTP_403_FORBIDDEN,
    ErrorKind.ALREADY_SERVED: status.HTTP_409_CONFLICT,
    ErrorKind.CANCELLED: status.HTTP_409_CONFLICT,
    ErrorKind.ALREADY_REDEEMED: status.HTTP_409_CONFLICT,
    ErrorKind.NO_SLOTS_AVAILABLE: status.HTTP_409_CONFLICT,
    ErrorKind.TOO_MANY_REQUESTS: status.HTTP_429_TOO_MANY_REQUESTS,
    ErrorKind.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def failure_response(failure):
    return Response(failure.as_dict(), status=FAILURE_STATUS[failure.kind])


def bad_request(errors):
    failure = Failure(ErrorKind.BAD_REQUEST, 'Invalid request data', {'fields': errors})
    return failure_response(failure)


@api_view(['GET'])
@permission_classes([AllowAny])
def health(request):
    return Response({'status': 'ok'})


@api_view(['POST'])
@permission_classes([AllowAny])
def register(request):
    """Register a student for an event, or return the existing coupon"""
    serializer = RegisterRequestSerializer(data=request.data)
    if not serializer.is_valid():
        return bad_request(serializer.errors)

    outcome = registration.register(
        serializer.validated_data['student_id'],
        serializer.validated_data['event_id'],
    )
    if not outcome.ok:
        return failure_response(outcome)

    if outcome.created:
        return Response(
            {'message': 'Registration successful', 'data': outcome.payload},
            status=status.HTTP_201_CREATED
        )
    return Response({'message': 'Existing registration retrieved', 'data': outcome.payload})


@api_view(['POST'])
@permission_classes([IsVolunteer])
@throttle_classes([ScanRateThrottle])
def scan(request):
    """Handle QR code scanning"""
    serializer = ScanRequestSerializer(data=request.data)
    if not serializer.is_valid():
        return bad_request(serializer.errors)

    volunteer_id = serializer.validated_data['volunteer_id']
    if volunteer_id != request.user.volunteer.pk:
        raise PermissionDenied('Scanner token does not belong to this volunteer')

    outcome = redemption.scan(serializer.validated_data['qr_token'], volunteer_id)
    if not outcome.ok:
        return failure_response(outcome)

    return Response({'result': 'SERVED', **outcome.payload})


@api_view(['GET'])
@permission_classes([AllowAny])
def registration_qr(request, registration_id):
    """QR image for a student's unserved coupon"""
    query = StudentQuerySerializer(data=request.query_params)
    if not query.is_valid():
        return bad_request(query.errors)

    coupon = get_object_or_404(Registration, id=registration_id, student_id=query.validated_data['student_id'])
    if coupon.is_served:
        return failure_response(Failure(
            ErrorKind.ALREADY_REDEEMED,
            'Coupon already redeemed. You have been served.',
            {'isRedeemed': True},
        ))
    return Response({'registration_id': coupon.id, 'qr_image': generate_qr_image(coupon.qr_token)})


def _student_registrations(student_id, events):
    return {
        coupon.event_id: coupon
        for coupon in Registration.objects.filter(
            student_id=student_id,
            event__in=events,
        ).select_related('slot')
    }


@api_view(['GET'])
@permission_classes([AllowAny])
def active_events(request):
    """Active events that still have an open slot, with the student's coupon if any"""
    query = OptionalStudentQuerySerializer(data=request.query_params)
    if not query.is_valid():
        return bad_request(query.errors)

    open_slots = EventSlot.objects.filter(event=OuterRef('pk')).open_at(timezone.now())
    events = (
        Event.objects.filter(status=Event.STATUS_ACTIVE)
        .filter(Exists(open_slots))
        .order_by('date')
    )

    registrations = {}
    student_id = query.validated_data.get('student_id')
    if student_id is not None:
        registrations = _student_registrations(student_id, events)

    serializer = ActiveEventSerializer(events, many=True, context={'registrations': registrations})
    return Response(serializer.data)


@api_view(['GET'])
@permission_classes([AllowAny])
def student_events(request, student_id):
    """Every event, active or past, newest first, with the student's coupon if any"""
    events = Event.objects.order_by('-date', '-id')
    registrations = _student_registrations(student_id, events)
    serializer = ActiveEventSerializer(events, many=True, context={'registrations': registrations})
    return Response(serializer.data)


@api_view(['GET'])
@permission_classes([IsAdminUser])
def event_stats(request, event_id):
    get_object_or_404(Event, id=event_id)
    return Response(stats.event_stats(event_id))


@api_view(['GET'])
@permission_classes([IsAdminUser])
def volunteer_stats(request, event_id, volunteer_id):
    get_object_or_404(Event, id=event_id)
    return Response(stats.volunteer_stats(event_id, volunteer_id))


@api_view(['GET'])
@permission_classes([IsAdminUser])
def scan_history(request, event_id):
    get_object_or_404(Event, id=event_id)
    return Response({'scanHistory': stats.scan_history(event_id)})
