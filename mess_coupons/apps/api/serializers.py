from rest_framework import serializers
from apps.core.models import Event, Registration


class StrictSerializer(serializers.Serializer):
	"""Rejects payload keys the serializer does not declare"""

	def validate(self, attrs):
		unknown = set(getattr(self, 'initial_data', {}) or {}) - set(self.fields)
		if unknown:
			raise serializers.ValidationError(
				{field: ['Unexpected field.'] for field in sorted(unknown)}
			)
		return attrs


class RegisterRequestSerializer(StrictSerializer):
	student_id = serializers.IntegerField(min_value=1)
	event_id = serializers.IntegerField(min_value=1)


class ScanRequestSerializer(StrictSerializer):
	qr_token = serializers.CharField(trim_whitespace=True)
	volunteer_id = serializers.IntegerField(min_value=1)


class ActiveEventSerializer(serializers.ModelSerializer):
	event_id = serializers.IntegerField(source='id', read_only=True)
	registration = serializers.SerializerMethodField()

	class Meta:
		model = Event
		fields = ['event_id', 'name', 'description', 'date', 'status', 'registration']

	def get_registration(self, obj):
		registrations = self.context.get('registrations', {})
		registration = registrations.get(obj.id)
		if registration is None:
			return None
		return RegistrationSlotSerializer(registration).data


class RegistrationSlotSerializer(serializers.ModelSerializer):
	registration_id = serializers.IntegerField(source='id', read_only=True)
	registration_status = serializers.CharField(source='status', read_only=True)
	floor = serializers.CharField(source='slot.floor', read_only=True)
	counter = serializers.CharField(source='slot.counter', read_only=True)
	time_start = serializers.DateTimeField(source='slot.time_start', read_only=True)
	time_end = serializers.DateTimeField(source='slot.time_end', read_only=True)

	class Meta:
		model = Registration
		fields = ['registration_id', 'registration_status', 'served_at',
				 'floor', 'counter', 'time_start', 'time_end']


class StudentQuerySerializer(serializers.Serializer):
	student_id = serializers.IntegerField(min_value=1)


class OptionalStudentQuerySerializer(serializers.Serializer):
	student_id = serializers.IntegerField(min_value=1, required=False)
