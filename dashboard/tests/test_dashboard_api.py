"""
后台仪表盘接口测试。
"""
from datetime import timedelta
from decimal import Decimal

from django.test import TestCase
from django.utils import timezone
from rest_framework import status

from core.test_utils import AuthenticatedAPIClient, ShopTestMixin, TestDataFactory
from orders.domain import OrderStatus
from customers.models import Customer
from orders.models import Order


class DashboardApiTests(ShopTestMixin, TestCase):

    def setUp(self):
        super().setUp()
        self.ref = TestDataFactory.create_reference_data()
        self.client = AuthenticatedAPIClient().authenticate_user(TestDataFactory.create_admin())
        product = TestDataFactory.create_product()
        courier = TestDataFactory.create_shipping_method(cost=Decimal('19.00'))

        self.today_order = TestDataFactory.create_order(
            order_number='TDY-AAA-CCC', country=self.ref['country'], shipping_method=courier,
            lines=[(product, 1, Decimal('100.00'))],
        )
        yesterday_order = TestDataFactory.create_order(
            order_number='YST-AAA-CCC', status=OrderStatus.DELIVERED, lines=[(product, 1, Decimal('100.00'))],
        )
        Order.objects.filter(id=yesterday_order.id).update(created_at=timezone.now() - timedelta(days=1))
        old_order = TestDataFactory.create_order(order_number='OLD-AAA-CCC', status=OrderStatus.CANCELLED)
        Order.objects.filter(id=old_order.id).update(created_at=timezone.now() - timedelta(days=60))

        self.low_stock = TestDataFactory.create_product(name='Last Units', stock_quantity=2)

    def get_dashboard(self):
        response = self.client.get('/api/admin/dashboard/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        return response.data['data']

    def test_requires_admin(self):
        customer = TestDataFactory.create_customer()
        response = AuthenticatedAPIClient().authenticate_user(customer.user).get('/api/admin/dashboard/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_kpis(self):
        TestDataFactory.create_customer()
        old_customer = TestDataFactory.create_customer()
        Customer.objects.filter(id=old_customer.id).update(created_at=timezone.now() - timedelta(days=45))

        kpis = self.get_dashboard()['kpis']
        self.assertEqual(kpis['sales_today']['value'], Decimal('138.00'))
        self.assertEqual(kpis['sales_today']['change'], 16.0)
        self.assertTrue(kpis['sales_today']['change_positive'])
        self.assertEqual(kpis['new_orders']['value'], 1)
        self.assertEqual(kpis['new_orders']['change'], 100.0)
        self.assertEqual(kpis['stock_alerts']['value'], 1)
        self.assertEqual(kpis['new_customers']['value'], 1)

    def test_sales_chart_is_zero_filled(self):
        chart = self.get_dashboard()['sales_chart']
        self.assertEqual(len(chart), 30)
        self.assertEqual(chart[-1]['date'], timezone.localdate().isoformat())
        self.assertEqual(chart[-1]['total'], Decimal('138.00'))
        self.assertEqual(chart[-2]['total'], Decimal('119.00'))
        self.assertEqual(chart[0]['total'], Decimal('0'))

    def test_status_distribution_skips_empty_statuses(self):
        distribution = self.get_dashboard()['status_distribution']
        self.assertEqual(
            {item['name']: item['value'] for item in distribution},
            {'Pending': 1, 'Delivered': 1, 'Cancelled': 1}
        )

    def test_latest_orders(self):
        latest = self.get_dashboard()['latest_orders']
        self.assertEqual(latest[0]['order_number'], 'TDY-AAA-CCC')
        self.assertEqual(latest[0]['customer_name'], 'Ion Popescu')
        self.assertEqual(latest[0]['total_value'], Decimal('138.00'))
        self.assertEqual(latest[0]['status']['value'], OrderStatus.PENDING)

    def test_stock_alerts(self):
        alerts = self.get_dashboard()['stock_alerts']
        self.assertEqual([a['name'] for a in alerts], ['Last Units'])
