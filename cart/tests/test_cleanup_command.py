"""
旧购物车清理命令测试。
"""
from datetime import timedelta
from io import StringIO

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase
from django.utils import timezone

from core.test_utils import ShopTestMixin, TestDataFactory
from cart.domain import CartStatus
from cart.models import Cart, CartItem


class CleanupOldCartsCommandTests(ShopTestMixin, TestCase):

    def setUp(self):
        super().setUp()
        TestDataFactory.create_reference_data()
        self.product = TestDataFactory.create_product()

    def make_cart(self, status, age_days):
        customer = TestDataFactory.create_customer()
        cart = Cart.objects.create(customer=customer, status=status)
        CartItem.objects.create(cart=cart, product=self.product, quantity=1)
        # auto_now 字段只能通过 update 回拨
        Cart.objects.filter(id=cart.id).update(updated_at=timezone.now() - timedelta(days=age_days))
        return cart

    def run_command(self, *args):
        out = StringIO()
        call_command('cleanup_old_carts', *args, stdout=out)
        return out.getvalue()

    def test_deletes_only_old_converted_carts(self):
        old = self.make_cart(CartStatus.CONVERTED, 31)
        recent = self.make_cart(CartStatus.CONVERTED, 5)
        stale_active = self.make_cart(CartStatus.ACTIVE, 90)

        output = self.run_command()

        self.assertIn('deleted 1 converted cart(s)', output)
        self.assertFalse(Cart.objects.filter(id=old.id).exists())
        self.assertFalse(CartItem.objects.filter(cart_id=old.id).exists())
        self.assertTrue(Cart.objects.filter(id=recent.id).exists())
        self.assertTrue(Cart.objects.filter(id=stale_active.id).exists())

    def test_days_option(self):
        recent = self.make_cart(CartStatus.CONVERTED, 5)
        self.run_command('--days', '3')
        self.assertFalse(Cart.objects.filter(id=recent.id).exists())

    def test_nothing_to_delete(self):
        output = self.run_command()
        self.assertIn('No converted carts', output)

    def test_negative_days_rejected(self):
        with self.assertRaises(CommandError):
            self.run_command('--days', '-1')
