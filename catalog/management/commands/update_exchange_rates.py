from django.core.management.base import BaseCommand, CommandError

from catalog.api.dependencies import get_exchange_rate_service
from catalog.domain import ExchangeRateUnavailableException


class Command(BaseCommand):
    help = 'Update currency exchange rates from the National Bank of Romania (BNR)'

    def handle(self, *args, **options):
        self.stdout.write('Fetching exchange rates from BNR...')
        try:
            result = get_exchange_rate_service().update_rates()
        except ExchangeRateUnavailableException as e:
            raise CommandError(e.message) from e

        self.stdout.write(self.style.SUCCESS(
            f"Successfully updated {result['updated_count']} exchange rates from BNR (date: {result['date']})"
        ))
        if result['skipped']:
            self.stdout.write(f"Skipped currencies not configured in the shop: {', '.join(result['skipped'])}")
