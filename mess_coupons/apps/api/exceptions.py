from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.http import Http404
from rest_framework.exceptions import NotFound, PermissionDenied, Throttled
from rest_framework.views import exception_handler

from apps.core.outcomes import ErrorKind, Failure


def _error_name(exc):
	if isinstance(exc, Http404):
		return NotFound.__name__
	if isinstance(exc, DjangoPermissionDenied):
		return PermissionDenied.__name__
	return type(exc).__name__


def api_exception_handler(exc, context):
	"""Render framework errors in the same error shape as the coupon failures"""
	response = exception_handler(exc, context)
	if response is None:
		return response

	if isinstance(exc, Throttled):
		failure = Failure(
			ErrorKind.TOO_MANY_REQUESTS,
			'Too many scans, slow down',
			{'retry_after': exc.wait},
		)
		response.data = failure.as_dict()
	elif isinstance(response.data, dict) and 'detail' in response.data:
		# Authentication, permission and lookup errors keep DRF's status code
		response.data = {'error': _error_name(exc), 'detail': response.data['detail']}
	return response
