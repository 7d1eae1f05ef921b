from rest_framework.authentication import BaseAuthentication
from rest_framework.permissions import BasePermission
from rest_framework.exceptions import AuthenticationFailed
from apps.core.models import Volunteer


class VolunteerUser:
	"""Request user for a volunteer authenticated by bearer token"""

	is_authenticated = True
	is_anonymous = False
	is_staff = False
	is_superuser = False

	def __init__(self, volunteer):
		self.volunteer = volunteer

	@property
	def pk(self):
		return self.volunteer.pk


class VolunteerTokenAuthentication(BaseAuthentication):
	"""Custom authentication for volunteer scanner tokens"""

	def authenticate(self, request):
		auth_header = request.META.get('HTTP_AUTHORIZATION')
		if not auth_header or not auth_header.startswith('Bearer '):
			return None

		token = auth_header.split(' ', 1)[1].strip()
		if not token:
			raise AuthenticationFailed('Invalid token')

		try:
			volunteer = Volunteer.objects.get(
				token_hash=Volunteer.hash_token(token),
				active=True
			)
		except Volunteer.DoesNotExist:
			raise AuthenticationFailed('Invalid token')

		return (VolunteerUser(volunteer), token)

	def authenticate_header(self, request):
		return 'Bearer'


class IsVolunteer(BasePermission):
	"""Permission class for authenticated volunteers"""

	def has_permission(self, request, view):
		return hasattr(request.user, 'volunteer')
