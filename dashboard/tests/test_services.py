"""
仪表盘环比计算测试。
"""
from decimal import Decimal

from django.test import SimpleTestCase

from dashboard.domain import percent_change, comparison_kpi


class PercentChangeTests(SimpleTestCase):

    def test_growth_rounded_to_one_decimal(self):
        self.assertEqual(percent_change(Decimal('138.00'), Decimal('119.00')), 16.0)
        self.assertEqual(percent_change(1, 3), -66.7)

    def test_previous_zero(self):
        self.assertEqual(percent_change(Decimal('10'), Decimal('0')), 100.0)
        self.assertEqual(percent_change(0, 0), 0.0)

    def test_comparison_kpi_sign(self):
        self.assertTrue(comparison_kpi(5, 5)['change_positive'])
        self.assertFalse(comparison_kpi(4, 5)['change_positive'])
