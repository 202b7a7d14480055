"""
结算接口测试。
"""
import uuid
from decimal import Decimal

from django.test import TestCase
from rest_framework import status

from core.infrastructure.response import StatusCode
from core.test_utils import AuthenticatedAPIClient, ShopTestMixin, TestDataFactory
from customers.domain.value_objects import AddressType
from orders.domain import ShippingMethodType
from orders.models import Order


class CheckoutTestMixin(ShopTestMixin):

    def setUp(self):
        super().setUp()
        self.ref = TestDataFactory.create_reference_data()
        self.country = self.ref['country']
        self.product = TestDataFactory.create_product(price_ron=Decimal('100.00'), stock_quantity=10)
        self.courier = TestDataFactory.create_shipping_method(cost=Decimal('19.00'))
        self.locker = TestDataFactory.create_shipping_method(
            name='Easybox', method_type=ShippingMethodType.PICKUP, cost=Decimal('9.00')
        )
        self.cod = TestDataFactory.create_payment_method('ramburs')

    def add_to_cart(self, quantity=1):
        response = self.client.post('/api/cart/add/', {'product_id': str(self.product.id), 'quantity': quantity})
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def courier_data(self):
        return {
            'point_id': 'BV-001',
            'point_name': 'Easybox Lunga',
            'provider': 'sameday',
            'locker_details': {'address': 'Strada Lunga 1', 'city': 'Brasov', 'country_id': self.country.id},
        }


class GuestCheckoutApiTests(CheckoutTestMixin, TestCase):

    def setUp(self):
        super().setUp()
        self.client = AuthenticatedAPIClient()

    def save_guest(self):
        self.client.post('/api/checkout/guest-contact/', {'email': 'guest@example.com', 'phone': '0722111222'})
        response = self.client.post('/api/checkout/guest-address/', {
            'shipping_address': TestDataFactory.address_data(self.country, email=''),
            'use_shipping_as_billing': True,
        })
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        return response

    def submit(self, method=None, **extra):
        data = {'shipping_method_id': (method or self.courier).id, 'payment_method_id': self.cod.id}
        data.update(extra)
        return self.client.post('/api/checkout/submit/', data)

    def test_order_details_for_guest(self):
        self.add_to_cart(2)
        response = self.client.get('/api/checkout/order-details/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.data['data']
        self.assertTrue(data['is_guest'])
        self.assertEqual(len(data['cart']['items']), 1)
        self.assertEqual({m['id'] for m in data['shipping_methods']}, {self.courier.id, self.locker.id})
        self.assertEqual(data['countries'][0]['iso_code_2'], 'RO')

    def test_guest_address_uses_contact_email(self):
        response = self.save_guest()
        data = response.data['data']
        self.assertEqual(data['shipping_address']['email'], 'guest@example.com')
        self.assertEqual(data['billing_address']['city'], 'Brasov')

    def test_guest_address_requires_billing(self):
        response = self.client.post('/api/checkout/guest-address/', {
            'shipping_address': TestDataFactory.address_data(self.country),
        })
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['code'], StatusCode.VALIDATION_ERROR)

    def test_billing_form_ignored_when_shipping_used_for_billing(self):
        response = self.client.post('/api/checkout/guest-address/', {
            'shipping_address': TestDataFactory.address_data(self.country, city='Cluj'),
            'billing_address': {'first_name': 'half-typed'},
            'use_shipping_as_billing': True,
        })
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        billing = response.data['data']['billing_address']
        self.assertEqual(billing['first_name'], 'Ion')
        self.assertEqual(billing['city'], 'Cluj')

        response = self.client.post('/api/checkout/guest-address/', {
            'shipping_address': TestDataFactory.address_data(self.country),
            'billing_address': {'first_name': 'half-typed'},
            'use_shipping_as_billing': False,
        })
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('last_name', response.data['data']['billing_address'])

    def test_unknown_shipping_country(self):
        response = self.client.post('/api/checkout/shipping-country/', {'country_id': 9999})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['code'], StatusCode.VALIDATION_ERROR)

    def test_shipping_country_reprices_cart(self):
        self.add_to_cart()
        response = self.client.post('/api/checkout/shipping-country/', {'country_id': self.country.id})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data']['cart']['summary']['total_incl_vat'], Decimal('119.00'))

    def test_submit_requires_email(self):
        self.add_to_cart()
        response = self.submit()
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['code'], StatusCode.CHECKOUT_INVALID)

    def test_submit_empty_cart(self):
        self.save_guest()
        response = self.submit()
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['code'], StatusCode.CART_EMPTY)

    def test_submit_inactive_payment_method(self):
        self.add_to_cart()
        self.save_guest()
        inactive = TestDataFactory.create_payment_method('op', 'Bank transfer', is_active=False)
        response = self.submit(payment_method_id=inactive.id)
        self.assertEqual(response.data['code'], StatusCode.CHECKOUT_INVALID)

    def test_guest_submit_and_order_placed_once(self):
        self.add_to_cart(2)
        self.save_guest()
        response = self.submit()
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        order_data = response.data['data']['order']
        self.assertEqual(response.data['data']['stock_warnings'], [])

        order = Order.objects.get(id=order_data['id'])
        self.assertIsNone(order.customer_id)
        self.assertEqual(order.billing_address.email, 'guest@example.com')
        self.assertEqual(order.products.get().quantity, 2)

        response = self.client.get('/api/checkout/order-placed/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data']['order_number'], order.order_number)

        response = self.client.get('/api/checkout/order-placed/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_submit_reports_stock_warnings(self):
        self.add_to_cart(12)
        self.save_guest()
        response = self.submit()
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        warning = response.data['data']['stock_warnings'][0]
        self.assertEqual(warning['requested'], 12)
        self.assertEqual(warning['available'], 10)

    def test_submit_is_idempotent(self):
        self.add_to_cart()
        self.save_guest()
        key = str(uuid.uuid4())
        first = self.submit(idempotency_key=key)
        second = self.submit(idempotency_key=key)
        self.assertEqual(first.status_code, status.HTTP_201_CREATED)
        self.assertEqual(second.status_code, status.HTTP_201_CREATED)
        self.assertEqual(first.data['data']['order']['id'], second.data['data']['order']['id'])
        self.assertEqual(Order.objects.count(), 1)

    def test_pickup_requires_selected_point(self):
        self.add_to_cart()
        self.save_guest()
        response = self.submit(method=self.locker)
        self.assertEqual(response.data['code'], StatusCode.CHECKOUT_INVALID)

    def test_invalid_pickup_data(self):
        courier_data = self.courier_data()
        courier_data.pop('provider')
        response = self.client.post('/api/checkout/pickup/', {'courier_data': courier_data})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('provider', response.data['data']['courier_data'])

    def test_pickup_order(self):
        self.add_to_cart()
        self.save_guest()
        response = self.client.post('/api/checkout/pickup/', {'courier_data': self.courier_data()})
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        response = self.submit(method=self.locker)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        order = Order.objects.get(id=response.data['data']['order']['id'])
        self.assertEqual(order.shipping.pickup_point_id, 'BV-001')
        self.assertTrue(order.shipping_address.address_line_1.startswith('Easybox Lunga'))


class CustomerCheckoutApiTests(CheckoutTestMixin, TestCase):

    def setUp(self):
        super().setUp()
        self.customer = TestDataFactory.create_customer()
        self.shipping = TestDataFactory.create_address(self.customer, self.country, AddressType.SHIPPING)
        self.billing = TestDataFactory.create_address(self.customer, self.country, AddressType.BILLING)
        self.client = AuthenticatedAPIClient().authenticate_user(self.customer.user)

    def test_order_details_lists_addresses(self):
        self.add_to_cart()
        response = self.client.get('/api/checkout/order-details/')
        data = response.data['data']
        self.assertFalse(data['is_guest'])
        self.assertEqual(data['shipping_country_id'], self.country.id)
        self.assertEqual(len(data['addresses'][AddressType.SHIPPING]), 1)

    def test_submit_requires_billing_address(self):
        self.add_to_cart()
        response = self.client.post('/api/checkout/submit/', {
            'shipping_method_id': self.courier.id,
            'payment_method_id': self.cod.id,
            'shipping_address_id': self.shipping.id,
        })
        self.assertEqual(response.data['code'], StatusCode.CHECKOUT_INVALID)

    def test_company_requires_headquarters(self):
        company = TestDataFactory.create_company_customer()
        TestDataFactory.create_address(company, self.country, AddressType.BILLING)
        client = AuthenticatedAPIClient().authenticate_user(company.user)
        client.post('/api/cart/add/', {'product_id': str(self.product.id), 'quantity': 1})
        response = client.post('/api/checkout/submit/', {
            'shipping_method_id': self.courier.id,
            'payment_method_id': self.cod.id,
        })
        self.assertEqual(response.data['code'], StatusCode.CHECKOUT_INVALID)

    def test_customer_submit(self):
        self.add_to_cart(3)
        response = self.client.post('/api/checkout/submit/', {
            'shipping_method_id': self.courier.id,
            'payment_method_id': self.cod.id,
            'shipping_address_id': self.shipping.id,
            'billing_address_id': self.billing.id,
        })
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        order = Order.objects.get(id=response.data['data']['order']['id'])
        self.assertEqual(order.customer_id, self.customer.id)
        self.assertEqual(order.total_ron_incl_vat, Decimal('357.00'))

        self.product.refresh_from_db()
        self.assertEqual(self.product.stock_quantity, 7)

        response = self.client.get('/api/checkout/order-details/')
        self.assertEqual(response.data['data']['cart']['items'], [])
