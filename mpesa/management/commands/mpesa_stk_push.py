"""
Management command to test M-PESA STK push functionality.
"""

from django.core.management.base import BaseCommand, CommandError
from mpesa.config import get_config
from mpesa.exceptions import ConfigurationError
from mpesa.managers.payment_manager import PaymentManager
from mpesa.schemas import PaymentRequest
from mpesa.utils.formatters import normalize_phone_number


class Command(BaseCommand):
    help = 'Send a test M-PESA STK push'

    def add_arguments(self, parser):
        parser.add_argument(
            '--phone',
            type=str,
            required=True,
            help='Customer phone number (e.g., 0712345678 or 254712345678)'
        )
        parser.add_argument(
            '--amount',
            type=int,
            required=True,
            help='Payment amount'
        )
        parser.add_argument(
            '--name',
            type=str,
            help='Customer name used in the transaction description'
        )

    def handle(self, *args, **options):
        config = get_config()
        try:
            config.require()
        except ConfigurationError as e:
            raise CommandError(e.message)

        phone = options['phone']
        amount = options['amount']

        self.stdout.write(self.style.SUCCESS('\n=== M-PESA STK Push Test ===\n'))
        if config.mock:
            self.stdout.write(self.style.WARNING('MPESA_MOCK is enabled, no request will reach Daraja.'))

        self.stdout.write('Sending STK push...')
        self.stdout.write(f'  Phone: {normalize_phone_number(phone)}')
        self.stdout.write(f'  Amount: {amount}')
        self.stdout.write(f'  Environment: {config.environment.value}\n')

        with PaymentManager(config) as manager:
            result = manager.initiate_payment(
                PaymentRequest(phone=phone, amount=amount, name=options.get('name'))
            )

        if not result.success:
            details = f' Details: {result.details}' if result.details is not None else ''
            raise CommandError(f'STK push failed: {result.message}{details}')

        self.stdout.write(self.style.SUCCESS(f'\n✓ {result.message}'))
        checkout_id = result.response.get('CheckoutRequestID')
        if checkout_id:
            self.stdout.write(f'  Checkout Request ID: {checkout_id}')
        self.stdout.write(self.style.WARNING(
            '\nNote: Customer should receive the STK prompt on their phone to complete payment.'
        ))
