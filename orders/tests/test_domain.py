"""
订单领域对象测试: 金额计算、支付方式初始状态和修改排序。
"""
from decimal import Decimal
from types import SimpleNamespace

from django.test import SimpleTestCase

from orders.domain import OrderChangeType, OrderStatus, OrderTotalsCalculator, PaymentCode


class OrderTotalsCalculatorTests(SimpleTestCase):

    def test_line_amounts_in_ron(self):
        amounts = OrderTotalsCalculator.line_amounts(
            Decimal('100.00'), Decimal('119.00'), 3, 'RON', Decimal('1'), Decimal('60.00')
        )
        self.assertEqual(amounts['unit_price_ron'], Decimal('119.00'))
        self.assertEqual(amounts['total_ron_excl_vat'], Decimal('300.00'))
        self.assertEqual(amounts['total_ron_incl_vat'], Decimal('357.00'))
        self.assertEqual(amounts['total_currency_incl_vat'], Decimal('357.00'))
        self.assertEqual(amounts['profit_ron'], Decimal('120.00'))

    def test_line_amounts_converted_with_frozen_rate(self):
        amounts = OrderTotalsCalculator.line_amounts(
            Decimal('100.00'), Decimal('119.00'), 2, 'EUR', Decimal('5')
        )
        self.assertEqual(amounts['unit_price_currency'], Decimal('23.80'))
        self.assertEqual(amounts['total_currency_excl_vat'], Decimal('40.00'))
        self.assertEqual(amounts['total_currency_incl_vat'], Decimal('47.60'))

    def test_accumulate_rounds_and_averages_vat(self):
        lines = [
            {'total_currency_excl_vat': '10.005', 'total_currency_incl_vat': '11.90',
             'total_ron_excl_vat': '10.00', 'total_ron_incl_vat': '11.90', 'vat_percent': '19'},
            SimpleNamespace(total_currency_excl_vat=Decimal('5.00'), total_currency_incl_vat=Decimal('5.45'),
                            total_ron_excl_vat=Decimal('5.00'), total_ron_incl_vat=Decimal('5.45'),
                            vat_percent=Decimal('9')),
        ]
        totals = OrderTotalsCalculator.accumulate(lines)
        self.assertEqual(totals['total_excl_vat'], Decimal('15.01'))
        self.assertEqual(totals['total_ron_incl_vat'], Decimal('17.35'))
        self.assertEqual(totals['average_vat_rate'], Decimal('14.00'))

    def test_accumulate_empty(self):
        totals = OrderTotalsCalculator.accumulate([])
        self.assertEqual(totals['total_ron_incl_vat'], Decimal('0'))
        self.assertEqual(totals['average_vat_rate'], Decimal('0'))

    def test_shipping_costs_b2b_has_no_vat(self):
        costs = OrderTotalsCalculator.shipping_costs(Decimal('19.00'), Decimal('0'), 'RON', 1)
        self.assertEqual(costs['shipping_cost_ron_excl_vat'], Decimal('19.00'))
        costs = OrderTotalsCalculator.shipping_costs(Decimal('19.00'), Decimal('19'), 'RON', 1)
        self.assertEqual(costs['shipping_cost_ron_excl_vat'], Decimal('15.97'))

    def test_exchange_rate(self):
        self.assertEqual(OrderTotalsCalculator.exchange_rate_for(SimpleNamespace(code='RON', value=7)), Decimal('1'))
        self.assertEqual(OrderTotalsCalculator.exchange_rate_for(SimpleNamespace(code='EUR', value='4.97')),
                         Decimal('4.97'))
        with self.assertRaises(ValueError):
            OrderTotalsCalculator.exchange_rate_for(SimpleNamespace(code='EUR', value=0))


class PaymentCodeTests(SimpleTestCase):

    def test_initial_status(self):
        self.assertEqual(PaymentCode.initial_status('card'), OrderStatus.AWAITING_PAYMENT)
        self.assertEqual(PaymentCode.initial_status('Ramburs'), OrderStatus.CONFIRMED)
        self.assertEqual(PaymentCode.initial_status('bank_transfer'), OrderStatus.PENDING)

    def test_prepaid(self):
        self.assertTrue(PaymentCode.is_prepaid('paypal'))
        self.assertFalse(PaymentCode.is_prepaid('cod'))


class OrderChangeTypeTests(SimpleTestCase):

    def test_sort_by_priority(self):
        changes = [
            {'type': 'update_status'},
            {'type': 'add_product', 'n': 1},
            {'type': 'remove_product'},
            {'type': 'add_product', 'n': 2},
            {'type': 'update_payment_status'},
        ]
        ordered = OrderChangeType.sort(changes)
        self.assertEqual(
            [c['type'] for c in ordered],
            ['remove_product', 'add_product', 'add_product', 'update_payment_status', 'update_status']
        )
        self.assertEqual([c.get('n') for c in ordered if c['type'] == 'add_product'], [1, 2])

    def test_status_helpers(self):
        self.assertEqual(OrderStatus.to_dict('shipped'), {'value': 'shipped', 'name': 'Shipped', 'color': '#3B82F6'})
        self.assertEqual(len(OrderStatus.all()), 8)
        self.assertFalse(OrderStatus.is_valid('lost'))
