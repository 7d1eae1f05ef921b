from rest_framework.throttling import SimpleRateThrottle


class ScanRateThrottle(SimpleRateThrottle):
	"""Caps scans per caller to absorb double-taps from scanner hardware"""

	scope = 'scan'

	def get_cache_key(self, request, view):
		volunteer = getattr(request.user, 'volunteer', None)
		ident = f"volunteer-{volunteer.pk}" if volunteer else self.get_ident(request)
		return self.cache_format % {'scope': self.scope, 'ident': ident}
