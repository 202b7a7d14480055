"""
下单流程测试。
"""
from decimal import Decimal

from django.test import TestCase

from core.domain.exceptions import BusinessRuleViolationException
from core.test_utils import ShopTestMixin, TestDataFactory
from cart.infrastructure.repositories.session_cart_store import SessionCartStore
from orders.api.dependencies import get_order_code_generator, get_placement_service
from orders.application import PlaceOrderCommand
from orders.domain import OrderStatus, ShippingMethodType
from orders.models import Order, OrderHistory


class OrderPlacementTests(ShopTestMixin, TestCase):

    def setUp(self):
        super().setUp()
        self.ref = TestDataFactory.create_reference_data()
        self.country = self.ref['country']
        self.product = TestDataFactory.create_product(price_ron=Decimal('100.00'), stock_quantity=10)
        self.courier = TestDataFactory.create_shipping_method(cost=Decimal('19.00'))
        self.cod = TestDataFactory.create_payment_method('ramburs')
        self.session = {}
        self.store = SessionCartStore(self.session)
        cart = self.store.load()
        cart.add(self.product.id, 2, self.ref['b2c'].id)
        self.store.save(cart)

    def build_command(self, **overrides):
        params = {
            'cart_store': self.store,
            'cart': self.store.load(),
            'shipping_method': self.courier,
            'payment_method': self.cod,
            'billing_address': TestDataFactory.address_data(self.country),
            'shipping_address': TestDataFactory.address_data(self.country),
            'guest_email': 'guest@example.com',
        }
        params.update(overrides)
        return PlaceOrderCommand(**params)

    def test_guest_order_from_cart(self):
        order = get_placement_service().create_order_from_cart(self.build_command())

        self.assertEqual(order.order_number, get_order_code_generator().generate(order.id))
        self.assertRegex(order.order_number, r"^[3-9C-Y]{3}-[3-9C-Y]{3}-[3-9C-Y]{3}$")
        self.assertEqual(order.status, OrderStatus.CONFIRMED)
        self.assertFalse(order.is_paid)
        self.assertEqual(order.currency, 'RON')
        self.assertFalse(order.is_vat_exempt)
        self.assertEqual(order.total_ron_excl_vat, Decimal('200.00'))
        self.assertEqual(order.total_ron_incl_vat, Decimal('238.00'))
        self.assertEqual(order.vat_rate_applied, Decimal('19.00'))

        line = order.products.get()
        self.assertEqual(line.quantity, 2)
        self.assertEqual(line.unit_price_ron, Decimal('119.00'))
        self.assertEqual(line.profit_ron, Decimal('80.00'))

        self.assertEqual(order.shipping.shipping_cost_ron_incl_vat, Decimal('19.00'))
        self.assertEqual(order.shipping.shipping_cost_ron_excl_vat, Decimal('15.97'))
        self.assertEqual(order.shipping_address.email, 'ion@example.com')
        self.assertEqual(order.billing_address.country_id, self.country.id)

        self.product.refresh_from_db()
        self.assertEqual(self.product.stock_quantity, 8)
        self.assertNotIn('cart', self.session)
        self.assertTrue(OrderHistory.objects.filter(order=order, action='order_created').exists())

    def test_guest_email_fills_empty_snapshot_email(self):
        shipping = TestDataFactory.address_data(self.country, email='')
        order = get_placement_service().create_order_from_cart(self.build_command(shipping_address=shipping))
        self.assertEqual(order.shipping_address.email, 'guest@example.com')

    def test_card_payment_marks_order_paid(self):
        card = TestDataFactory.create_payment_method('card', 'Card')
        order = get_placement_service().create_order_from_cart(self.build_command(payment_method=card))
        self.assertEqual(order.status, OrderStatus.AWAITING_PAYMENT)
        self.assertTrue(order.is_paid)
        self.assertIsNotNone(order.paid_at)

    def test_order_in_foreign_currency_freezes_rate(self):
        order = get_placement_service().create_order_from_cart(self.build_command(currency_code='EUR'))
        self.assertEqual(order.currency, 'EUR')
        self.assertEqual(order.exchange_rate, Decimal('5'))
        self.assertEqual(order.total_incl_vat, Decimal('47.60'))
        self.assertEqual(order.total_ron_incl_vat, Decimal('238.00'))

    def test_b2b_customer_is_vat_exempt(self):
        customer = TestDataFactory.create_company_customer()
        order = get_placement_service().create_order_from_cart(
            self.build_command(customer=customer, user=customer.user, guest_email=None)
        )
        self.assertTrue(order.is_vat_exempt)
        self.assertEqual(order.total_ron_incl_vat, Decimal('200.00'))
        self.assertEqual(order.shipping.shipping_cost_ron_excl_vat, Decimal('19.00'))
        self.assertEqual(order.customer_id, customer.id)

    def test_idempotency_key_returns_existing_order(self):
        service = get_placement_service()
        first = service.create_order_from_cart(self.build_command(idempotency_key='abc-123'))
        second = service.create_order_from_cart(self.build_command(idempotency_key='abc-123'))
        self.assertEqual(first.id, second.id)
        self.assertEqual(Order.objects.count(), 1)

    def test_missing_shipping_country(self):
        shipping = TestDataFactory.address_data(self.country, country_id=None)
        with self.assertRaises(BusinessRuleViolationException) as ctx:
            get_placement_service().create_order_from_cart(self.build_command(shipping_address=shipping))
        self.assertEqual(ctx.exception.detail, "Shipping country is required for VAT calculation")
        self.assertEqual(Order.objects.count(), 0)

    def test_empty_cart(self):
        self.store.discard()
        with self.assertRaises(BusinessRuleViolationException):
            get_placement_service().create_order_from_cart(self.build_command())

    def test_pickup_order_uses_locker_address(self):
        locker = TestDataFactory.create_shipping_method('Easybox', ShippingMethodType.PICKUP, Decimal('9.99'))
        pickup_data = {
            'courier_data': {
                'point_id': 'EB-1',
                'point_name': 'Easybox Mall',
                'provider': 'sameday',
                'locker_details': {'address': 'Bd. Unirii 10', 'city': 'Bucuresti', 'country_id': self.country.id},
            },
        }
        order = get_placement_service().create_order_from_cart(
            self.build_command(shipping_method=locker, shipping_address=None, pickup_data=pickup_data)
        )
        address = order.shipping_address
        self.assertEqual(address.address_line_1, 'Easybox Mall - Bd. Unirii 10')
        self.assertEqual(address.first_name, 'Ion')
        self.assertEqual(address.city, 'Bucuresti')
        self.assertEqual(order.shipping.pickup_point_id, 'EB-1')
        self.assertTrue(order.shipping.is_pickup)
