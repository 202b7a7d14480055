"""
后台退货管理接口测试。
"""
from decimal import Decimal

from django.test import TestCase
from rest_framework import status

from core.infrastructure.response import StatusCode
from core.test_utils import AuthenticatedAPIClient, ShopTestMixin, TestDataFactory
from orders.domain import OrderStatus
from returns.domain import ReturnStatus


class AdminReturnApiTests(ShopTestMixin, TestCase):

    def setUp(self):
        super().setUp()
        self.ref = TestDataFactory.create_reference_data()
        self.client = AuthenticatedAPIClient().authenticate_user(TestDataFactory.create_admin())
        self.product = TestDataFactory.create_product(name='Desk Lamp', stock_quantity=5)
        order = TestDataFactory.create_order(
            status=OrderStatus.DELIVERED, order_number='CCC-DDD-EEE', lines=[(self.product, 3, Decimal('50.00'))],
        )
        self.item = TestDataFactory.create_return(order, order.products.get(), quantity=2, return_number='RET-CCC-DDD')

    def url(self, suffix=''):
        return f'/api/admin/returns/{self.item.id}/{suffix}'

    def test_requires_admin(self):
        customer = TestDataFactory.create_customer()
        client = AuthenticatedAPIClient().authenticate_user(customer.user)
        response = client.get('/api/admin/returns/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_list_and_filters(self):
        other = TestDataFactory.create_order(order_number='JJJ-KKK-MMM', lines=[(self.product, 1, Decimal('50.00'))])
        TestDataFactory.create_return(other, other.products.get(), status=ReturnStatus.REJECTED)

        response = self.client.get('/api/admin/returns/')
        self.assertEqual(response.data['data']['pagination']['total'], 2)
        self.assertEqual(len(response.data['metadata']['statuses']), 5)

        response = self.client.get('/api/admin/returns/', {'status': ReturnStatus.REJECTED})
        self.assertEqual([i['order_number'] for i in response.data['data']['items']], ['JJJ-KKK-MMM'])

        response = self.client.get('/api/admin/returns/', {'search': 'ccc-ddd'})
        self.assertEqual([i['return_number'] for i in response.data['data']['items']], ['RET-CCC-DDD'])

    def test_detail_and_not_found(self):
        response = self.client.get(self.url())
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data']['quantity'], 2)

        response = self.client.get('/api/admin/returns/99999/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['code'], StatusCode.RETURN_NOT_FOUND)

    def test_completing_with_restock_increments_stock_once(self):
        self.client.post(self.url('restock-item/'), {'restock_item': True})
        response = self.client.post(self.url('status/'), {'status': ReturnStatus.COMPLETED})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIsNotNone(response.data['data']['restocked_at'])
        self.product.refresh_from_db()
        self.assertEqual(self.product.stock_quantity, 7)

        self.client.post(self.url('status/'), {'status': ReturnStatus.COMPLETED})
        self.product.refresh_from_db()
        self.assertEqual(self.product.stock_quantity, 7)

    def test_leaving_completed_reverses_restock(self):
        self.client.post(self.url('restock-item/'), {'restock_item': True})
        self.client.post(self.url('status/'), {'status': ReturnStatus.COMPLETED})
        response = self.client.post(self.url('status/'), {'status': ReturnStatus.INSPECTING})
        self.assertIsNone(response.data['data']['restocked_at'])
        self.product.refresh_from_db()
        self.assertEqual(self.product.stock_quantity, 5)

    def test_completing_without_restock_keeps_stock(self):
        self.client.post(self.url('status/'), {'status': ReturnStatus.COMPLETED})
        self.product.refresh_from_db()
        self.assertEqual(self.product.stock_quantity, 5)

    def test_invalid_status(self):
        response = self.client.post(self.url('status/'), {'status': 'lost'})
        self.assertEqual(response.data['code'], StatusCode.VALIDATION_ERROR)

    def test_refund_amount(self):
        response = self.client.post(self.url('refund-amount/'), {'refund_amount': '120.50'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data']['refund_amount'], Decimal('120.50'))

        response = self.client.post(self.url('refund-amount/'), {'refund_amount': None})
        self.assertIsNone(response.data['data']['refund_amount'])

        response = self.client.post(self.url('refund-amount/'), {'refund_amount': '-1'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
