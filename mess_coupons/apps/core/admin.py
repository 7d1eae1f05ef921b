from django.contrib import admin, messages

from apps.core.models import AuditLog, Event, EventSlot, Registration, Student, Volunteer, VolunteerAction


class EventSlotInline(admin.TabularInline):
	model = EventSlot
	extra = 1


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
	list_display = ['name', 'date', 'status']
	list_filter = ['status']
	inlines = [EventSlotInline]


@admin.register(Student)
class StudentAdmin(admin.ModelAdmin):
	list_display = ['name', 'email', 'batch']
	search_fields = ['name', 'email']


@admin.register(Registration)
class RegistrationAdmin(admin.ModelAdmin):
	list_display = ['student', 'event', 'slot', 'status', 'served_at']
	list_filter = ['status', 'event']
	search_fields = ['student__name', 'student__email']
	readonly_fields = ['served_at']
	exclude = ['qr_token']
	actions = ['cancel_registrations']

	@admin.action(description='Cancel selected unserved registrations')
	def cancel_registrations(self, request, queryset):
		updated = queryset.filter(status=Registration.STATUS_REGISTERED).update(
			status=Registration.STATUS_CANCELLED
		)
		self.message_user(request, f"Cancelled {updated} registrations", messages.SUCCESS)


@admin.register(Volunteer)
class VolunteerAdmin(admin.ModelAdmin):
	list_display = ['name', 'username', 'event', 'current_floor', 'current_counter', 'active']
	list_filter = ['event', 'active']
	exclude = ['token_hash']


@admin.register(VolunteerAction)
class VolunteerActionAdmin(admin.ModelAdmin):
	list_display = ['volunteer', 'registration', 'action', 'floor', 'counter', 'created_at']

	def has_change_permission(self, request, obj=None):
		return False

	def has_delete_permission(self, request, obj=None):
		return False


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
	list_display = ['actor_type', 'event_type', 'created_at']
	list_filter = ['actor_type', 'event_type']
