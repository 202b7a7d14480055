"""
客户订单历史接口测试。
"""
from decimal import Decimal

from django.test import TestCase
from rest_framework import status

from core.infrastructure.response import StatusCode
from core.test_utils import AuthenticatedAPIClient, ShopTestMixin, TestDataFactory
from orders.domain import OrderStatus


class MyOrdersApiTests(ShopTestMixin, TestCase):

    def setUp(self):
        super().setUp()
        self.ref = TestDataFactory.create_reference_data()
        self.customer = TestDataFactory.create_customer()
        self.client = AuthenticatedAPIClient().authenticate_user(self.customer.user)
        product = TestDataFactory.create_product(name='Laptop Stand')
        self.order = TestDataFactory.create_order(
            customer=self.customer, order_number='AAA-CCC-DDD', country=self.ref['country'],
            lines=[(product, 1, Decimal('100.00'))],
        )
        TestDataFactory.create_order(customer=self.customer, order_number='EEE-FFF-GGG', status=OrderStatus.CANCELLED)
        TestDataFactory.create_order(customer=TestDataFactory.create_customer(), order_number='HHH-JJJ-KKK')

    def test_list_only_own_orders(self):
        response = self.client.get('/api/account/orders/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        numbers = {item['order_number'] for item in response.data['data']['items']}
        self.assertEqual(numbers, {'AAA-CCC-DDD', 'EEE-FFF-GGG'})

    def test_filter_and_search(self):
        response = self.client.get('/api/account/orders/', {'status': 'cancelled'})
        self.assertEqual([i['order_number'] for i in response.data['data']['items']], ['EEE-FFF-GGG'])

        response = self.client.get('/api/account/orders/', {'search': 'laptop'})
        self.assertEqual([i['order_number'] for i in response.data['data']['items']], ['AAA-CCC-DDD'])

    def test_order_detail(self):
        response = self.client.get('/api/account/orders/AAA-CCC-DDD/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data']['products'][0]['name'], 'Laptop Stand')
        self.assertNotIn('history', response.data['data'])

    def test_other_customers_order_is_not_found(self):
        response = self.client.get('/api/account/orders/HHH-JJJ-KKK/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['code'], StatusCode.ORDER_NOT_FOUND)

    def test_requires_customer(self):
        response = AuthenticatedAPIClient().get('/api/account/orders/')
        self.assertIn(response.status_code, (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN))
