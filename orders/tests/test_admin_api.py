"""
后台订单接口测试。
"""
from decimal import Decimal

from django.test import TestCase
from rest_framework import status

from core.infrastructure.response import StatusCode
from core.test_utils import AuthenticatedAPIClient, ShopTestMixin, TestDataFactory
from orders.domain import OrderStatus
from orders.models import OrderHistory


class AdminOrderApiTests(ShopTestMixin, TestCase):

    def setUp(self):
        super().setUp()
        self.ref = TestDataFactory.create_reference_data()
        self.country = self.ref['country']
        self.admin = TestDataFactory.create_admin()
        self.client = AuthenticatedAPIClient().authenticate_user(self.admin)

        self.product = TestDataFactory.create_product(price_ron=Decimal('100.00'), stock_quantity=10)
        self.other_product = TestDataFactory.create_product(price_ron=Decimal('50.00'), stock_quantity=5)
        self.courier = TestDataFactory.create_shipping_method()
        self.order = TestDataFactory.create_order(
            order_number='CDE-FGH-JKM',
            shipping_method=self.courier,
            country=self.country,
            lines=[(self.product, 2, '100.00')],
        )

    def url(self, suffix=''):
        return f'/api/admin/orders/{self.order.order_number}/{suffix}'

    def test_requires_admin(self):
        customer = TestDataFactory.create_customer()
        client = AuthenticatedAPIClient().authenticate_user(customer.user)
        response = client.get('/api/admin/orders/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_list_orders_with_filters(self):
        TestDataFactory.create_order(order_number='PPP-QQQ-RRR', status=OrderStatus.SHIPPED, country=self.country)

        response = self.client.get('/api/admin/orders/', {'filter': 'in_delivery'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        items = response.data['data']['items']
        self.assertEqual([item['order_number'] for item in items], ['PPP-QQQ-RRR'])
        self.assertIn('options', response.data['metadata'])

        response = self.client.get('/api/admin/orders/', {'search': 'CDE'})
        self.assertEqual(response.data['data']['pagination']['total'], 1)

        response = self.client.get('/api/admin/orders/', {'payment_status': 'true'})
        self.assertEqual(response.data['data']['pagination']['total'], 0)

    def test_get_order_detail(self):
        response = self.client.get(self.url())
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.data['data']
        self.assertEqual(data['order_number'], 'CDE-FGH-JKM')
        self.assertEqual(len(data['products']), 1)
        self.assertEqual(len(data['status_options']), 8)
        self.assertIn('history', data)

    def test_unknown_order(self):
        response = self.client.get('/api/admin/orders/NOPE/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['code'], StatusCode.ORDER_NOT_FOUND)

    def test_mark_paid_and_unpaid(self):
        response = self.client.post(self.url('mark-paid/'))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data['data']['payment']['is_paid'])

        response = self.client.post(self.url('mark-paid/'))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['code'], StatusCode.ORDER_PAID)
        self.assertTrue(response.data['data']['is_paid'])

        response = self.client.post(self.url('mark-unpaid/'))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(response.data['data']['payment']['is_paid'])
        actions = set(OrderHistory.objects.filter(order=self.order).values_list('action', flat=True))
        self.assertEqual(actions, {'payment_received', 'payment_reversed'})

    def test_mark_unpaid_when_not_paid(self):
        response = self.client.post(self.url('mark-unpaid/'))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['code'], StatusCode.ORDER_NOT_PAID)

    def test_update_status(self):
        response = self.client.post(self.url('update/'), {'action': 'update_status', 'status': 'shipped'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.order.refresh_from_db()
        self.assertEqual(self.order.status, OrderStatus.SHIPPED)
        self.assertTrue(OrderHistory.objects.filter(order=self.order, action='status_changed').exists())

    def test_add_product_decrements_stock_and_recalculates(self):
        response = self.client.post(self.url('update/'), {
            'action': 'add_product', 'product_id': str(self.other_product.id), 'quantity': 2,
        })
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.other_product.refresh_from_db()
        self.assertEqual(self.other_product.stock_quantity, 3)
        self.order.refresh_from_db()
        self.assertEqual(self.order.total_ron_excl_vat, Decimal('300.00'))
        self.assertEqual(self.order.total_ron_incl_vat, Decimal('357.00'))

    def test_update_quantity_returns_stock(self):
        line = self.order.products.get()
        response = self.client.post(self.url('update/'), {
            'action': 'update_quantity', 'order_product_id': line.id, 'quantity': 1,
        })
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.product.refresh_from_db()
        self.assertEqual(self.product.stock_quantity, 11)
        self.order.refresh_from_db()
        self.assertEqual(self.order.total_ron_excl_vat, Decimal('100.00'))

    def test_update_requires_action_fields(self):
        response = self.client.post(self.url('update/'), {'action': 'update_quantity'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('order_product_id', response.data['data'])

    def test_unknown_order_product(self):
        response = self.client.post(self.url('update/'), {'action': 'remove_product', 'order_product_id': 9999})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['code'], StatusCode.VALIDATION_ERROR)

    def test_batch_update_applies_all_changes(self):
        line = self.order.products.get()
        response = self.client.post(self.url('batch-update/'), {
            'changes': [
                {'type': 'update_status', 'status': 'processing'},
                {'type': 'add_product', 'product_id': str(self.other_product.id), 'quantity': 1},
                {'type': 'remove_product', 'order_product_id': line.id},
                {'type': 'update_payment_status', 'is_paid': True},
                {'type': 'update_address', 'address_type': 'shipping', 'address': {
                    'first_name': 'Maria', 'last_name': 'Ionescu', 'address_line_1': 'Str. Noua 2',
                    'city': 'Cluj', 'country_id': self.country.id, 'phone': '0733000000', 'zip_code': '400001',
                }},
            ],
        })
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.order.refresh_from_db()
        self.assertEqual(self.order.status, OrderStatus.PROCESSING)
        self.assertTrue(self.order.is_paid)
        self.assertEqual(self.order.total_ron_excl_vat, Decimal('50.00'))
        self.assertEqual(self.order.shipping_address.city, 'Cluj')
        self.product.refresh_from_db()
        self.assertEqual(self.product.stock_quantity, 12)

    def test_batch_update_rejects_unknown_type(self):
        response = self.client.post(self.url('batch-update/'), {'changes': [{'type': 'update_invoice'}]})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('changes', response.data['data'])

    def test_batch_address_requires_phone_zip_and_country(self):
        response = self.client.post(self.url('batch-update/'), {
            'changes': [{'type': 'update_address', 'address_type': 'shipping', 'address': {
                'first_name': 'Maria', 'last_name': 'Ionescu', 'address_line_1': 'Str. Noua 2', 'city': 'Cluj',
            }}],
        })
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        address_errors = response.data['data']['changes'][0]['address']
        self.assertEqual(set(address_errors), {'phone', 'zip_code', 'country_id'})
        self.order.refresh_from_db()
        self.assertNotEqual(self.order.shipping_address.city, 'Cluj')

    def test_batch_update_detects_stale_timestamp(self):
        response = self.client.post(self.url('batch-update/'), {
            'changes': [{'type': 'update_status', 'status': 'processing'}],
            'originalUpdatedAt': '2001-01-01T00:00:00+00:00',
        })
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data['code'], StatusCode.OPTIMISTIC_LOCK_ERROR)
        self.assertEqual(response.data['data']['expected'], '2001-01-01T00:00:00+00:00')

    def test_batch_update_with_current_timestamp(self):
        updated_at = self.client.get(self.url()).data['data']['updated_at']
        response = self.client.post(self.url('batch-update/'), {
            'changes': [{'type': 'update_status', 'status': 'processing'}],
            'originalUpdatedAt': updated_at,
        })
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_invoiced_order_cannot_be_changed(self):
        self.order.invoice_number = 'INV-1'
        self.order.save()
        response = self.client.post(self.url('batch-update/'), {
            'changes': [{'type': 'update_status', 'status': 'processing'}],
        })
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['code'], StatusCode.ORDER_INVOICED)
