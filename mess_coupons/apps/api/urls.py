# URLs for api app
from django.urls import path
from .views import (
	health, register, scan, registration_qr, active_events, student_events,
	event_stats, volunteer_stats, scan_history,
)

urlpatterns = [
	path('health', health, name='health'),
	path('registrations', register, name='register'),
	path('registrations/scan', scan, name='scan'),
	path('registrations/<int:registration_id>/qr', registration_qr, name='registration_qr'),
	path('events/active', active_events, name='active_events'),
	path('events/student/<int:student_id>/all', student_events, name='student_events'),
	path('events/<int:event_id>/stats', event_stats, name='event_stats'),
	path('events/<int:event_id>/stats/volunteer/<int:volunteer_id>', volunteer_stats, name='volunteer_stats'),
	path('events/<int:event_id>/scan-history', scan_history, name='scan_history'),
]
