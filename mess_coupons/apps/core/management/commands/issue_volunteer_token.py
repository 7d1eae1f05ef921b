from django.core.management.base import BaseCommand, CommandError

from apps.core.models import Volunteer


class Command(BaseCommand):
	help = 'Issue a scanner bearer token for a volunteer'

	def add_arguments(self, parser):
		parser.add_argument('username')
		parser.add_argument(
			'--rotate',
			action='store_true',
			help='Replace an existing token',
		)

	def handle(self, *args, **options):
		try:
			volunteer = Volunteer.objects.get(username=options['username'])
		except Volunteer.DoesNotExist:
			raise CommandError(f"Volunteer {options['username']} not found")

		if volunteer.token_hash and not options['rotate']:
			raise CommandError('Volunteer already has a token; pass --rotate to replace it')

		token = volunteer.issue_token()
		self.stdout.write(self.style.SUCCESS(f"Token for {volunteer.username} (event {volunteer.event_id}):"))
		self.stdout.write(token)
