import re
import secrets
import qrcode
from io import BytesIO
import base64
from django.conf import settings

HEX_PATTERN = re.compile(r'[0-9a-f]+')


def generate_qr_token():
	"""Generate an opaque redemption token rendered as fixed-length hex"""
	return secrets.token_hex(settings.COUPON_CONFIG['token_bytes'])


def is_valid_qr_token(token):
	"""Check the token shape without touching storage"""
	if not isinstance(token, str):
		return False
	expected_length = settings.COUPON_CONFIG['token_bytes'] * 2
	return len(token) == expected_length and HEX_PATTERN.fullmatch(token) is not None


def generate_qr_image(payload):
	"""Render a QR code for the payload as a base64 PNG"""
	qr = qrcode.QRCode(
		version=1,
		error_correction=qrcode.constants.ERROR_CORRECT_M,
		box_size=10,
		border=4,
	)
	qr.add_data(payload)
	qr.make(fit=True)

	img = qr.make_image(fill_color="black", back_color="white")

	buffer = BytesIO()
	img.save(buffer, format='PNG')
	return base64.b64encode(buffer.getvalue()).decode()
