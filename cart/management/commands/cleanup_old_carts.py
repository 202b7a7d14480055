from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from cart.api.dependencies import get_cart_maintenance_service


class Command(BaseCommand):
    help = 'Delete converted carts older than the given number of days'

    def add_arguments(self, parser):
        parser.add_argument(
            '--days',
            type=int,
            default=settings.CART_SETTINGS.get('RETENTION_DAYS', 30),
            help='Number of days after which to delete converted carts (default: 30)',
        )

    def handle(self, *args, **options):
        days = options['days']
        if days < 0:
            raise CommandError('--days must not be negative')

        result = get_cart_maintenance_service().cleanup_converted(days)
        cutoff = result['cutoff'].strftime('%Y-%m-%d %H:%M:%S')
        if result['deleted'] == 0:
            self.stdout.write(f'No converted carts before {cutoff} to delete.')
            return
        self.stdout.write(self.style.SUCCESS(
            f"Successfully deleted {result['deleted']} converted cart(s) older than {days} days (before {cutoff})."
        ))
