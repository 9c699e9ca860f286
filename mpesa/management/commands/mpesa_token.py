from django.core.management.base import BaseCommand, CommandError
from mpesa.config import get_config
from mpesa.services.auth_service import AuthService


class Command(BaseCommand):
    help = 'Check M-PESA credentials by fetching an access token (printed masked)'

    def handle(self, *args, **options):
        config = get_config()
        auth_service = AuthService(config)
        try:
            masked = auth_service.get_masked_token()
        finally:
            auth_service.close()
        if masked is None:
            raise CommandError('Unable to fetch access token. Check credentials.')

        self.stdout.write(self.style.SUCCESS(f'Fetched access token: {masked}'))
