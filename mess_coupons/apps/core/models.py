from django.db import models
from django.utils import timezone
import hashlib
import re
import secrets

BATCH_PATTERN = re.compile(r'[a-z]+(\d{2})[a-z]+\d+', re.IGNORECASE)


def batch_from_email(email):
	"""Derive the admission batch from an institute email (sanjays24bec18@... -> 2024)"""
	if not email or '@' not in email:
		return None
	match = BATCH_PATTERN.search(email.split('@')[0])
	if match:
		return f"20{match.group(1)}"
	return None


class Student(models.Model):
	name = models.CharField(max_length=100)
	email = models.EmailField(unique=True)
	batch = models.CharField(max_length=4, null=True, blank=True)
	created_at = models.DateTimeField(auto_now_add=True)

	def save(self, *args, **kwargs):
		if not self.batch:
			self.batch = batch_from_email(self.email)
		return super().save(*args, **kwargs)

	def __str__(self):
		return f"{self.name} ({self.email})"

	class Meta:
		db_table = 'students'


class Event(models.Model):
	STATUS_ACTIVE = 'active'
	STATUS_CLOSED = 'closed'
	STATUS_CHOICES = [
		(STATUS_ACTIVE, 'Active'),
		(STATUS_CLOSED, 'Closed'),
	]

	name = models.CharField(max_length=200)
	description = models.TextField(blank=True)
	date = models.DateField()
	status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=STATUS_ACTIVE)
	created_at = models.DateTimeField(auto_now_add=True)

	def __str__(self):
		return f"{self.name} ({self.date})"

	class Meta:
		db_table = 'events'


class EventSlotQuerySet(models.QuerySet):

	def open_at(self, moment):
		# A slot ending exactly at `moment` is already closed.
		return self.filter(time_end__gt=moment)


class EventSlot(models.Model):
	event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name='slots')
	floor = models.CharField(max_length=50)
	counter = models.CharField(max_length=50)
	# Advisory only: slot assignment never consults it.
	capacity = models.PositiveIntegerField(null=True, blank=True)
	time_start = models.DateTimeField()
	time_end = models.DateTimeField()

	objects = EventSlotQuerySet.as_manager()

	def __str__(self):
		return f"{self.event.name} - {self.floor}/{self.counter}"

	class Meta:
		db_table = 'event_slots'


class Registration(models.Model):
	STATUS_REGISTERED = 'registered'
	STATUS_SERVED = 'served'
	STATUS_CANCELLED = 'cancelled'
	STATUS_CHOICES = [
		(STATUS_REGISTERED, 'Registered'),
		(STATUS_SERVED, 'Served'),
		(STATUS_CANCELLED, 'Cancelled'),
	]

	student = models.ForeignKey(Student, on_delete=models.CASCADE, related_name='registrations')
	event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name='registrations')
	slot = models.ForeignKey(EventSlot, on_delete=models.PROTECT, related_name='registrations')
	qr_token = models.CharField(max_length=64, unique=True, editable=False)
	status = models.CharField(max_length=12, choices=STATUS_CHOICES, default=STATUS_REGISTERED)
	served_at = models.DateTimeField(null=True, blank=True)
	created_at = models.DateTimeField(auto_now_add=True)

	@property
	def is_served(self):
		return self.status == self.STATUS_SERVED

	def __str__(self):
		return f"{self.student.name} - {self.event.name} - {self.status}"

	class Meta:
		db_table = 'registrations'
		constraints = [
			models.UniqueConstraint(fields=['student', 'event'], name='unique_student_event_registration'),
		]


class Volunteer(models.Model):
	event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name='volunteers')
	name = models.CharField(max_length=100)
	username = models.CharField(max_length=50, unique=True)
	current_floor = models.CharField(max_length=50, blank=True)
	current_counter = models.CharField(max_length=50, blank=True)
	token_hash = models.CharField(max_length=64, unique=True, null=True, blank=True, editable=False)
	active = models.BooleanField(default=True)
	created_at = models.DateTimeField(auto_now_add=True)

	def __str__(self):
		return f"{self.name} ({self.username})"

	@staticmethod
	def hash_token(token):
		return hashlib.sha256(token.encode()).hexdigest()

	def issue_token(self):
		"""Mint a new bearer token, replacing any previous one. Returns the raw token."""
		token = secrets.token_urlsafe(32)
		self.token_hash = self.hash_token(token)
		self.save(update_fields=['token_hash'])
		return token

	class Meta:
		db_table = 'volunteers'


class VolunteerAction(models.Model):
	ACTION_SCAN = 'scan'
	ACTION_CHOICES = [
		(ACTION_SCAN, 'Scan'),
	]

	volunteer = models.ForeignKey(Volunteer, on_delete=models.CASCADE, related_name='actions')
	registration = models.ForeignKey(Registration, on_delete=models.CASCADE, related_name='actions')
	action = models.CharField(max_length=20, choices=ACTION_CHOICES, default=ACTION_SCAN)
	floor = models.CharField(max_length=50, blank=True)
	counter = models.CharField(max_length=50, blank=True)
	created_at = models.DateTimeField(default=timezone.now)

	def __str__(self):
		return f"{self.volunteer.name} - {self.action} - {self.registration_id}"

	class Meta:
		db_table = 'volunteer_actions'


class AuditLog(models.Model):
	ACTOR_TYPE_CHOICES = [
		('STUDENT', 'Student'),
		('ADMIN', 'Admin'),
		('VOLUNTEER', 'Volunteer'),
		('SYSTEM', 'System'),
	]

	actor_type = models.CharField(max_length=10, choices=ACTOR_TYPE_CHOICES)
	actor_id = models.CharField(max_length=50, null=True, blank=True)
	event_type = models.CharField(max_length=50)
	payload = models.JSONField()
	created_at = models.DateTimeField(auto_now_add=True)

	def __str__(self):
		return f"{self.actor_type} - {self.event_type} - {self.created_at}"

	class Meta:
		db_table = 'audit_logs'
