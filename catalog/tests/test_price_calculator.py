"""
价格计算器单元测试。
"""
from decimal import Decimal
from types import SimpleNamespace

from django.test import SimpleTestCase

from catalog.domain import PriceCalculator


def group_price(min_quantity, price_ron):
    return SimpleNamespace(min_quantity=min_quantity, price_ron=Decimal(price_ron))


class PriceCalculatorTests(SimpleTestCase):

    def test_vat_conversion_rounds_half_up(self):
        self.assertEqual(PriceCalculator.incl_vat(Decimal('100.00'), Decimal('19')), Decimal('119.00'))
        self.assertEqual(PriceCalculator.incl_vat(Decimal('10.05'), Decimal('19')), Decimal('11.96'))
        self.assertEqual(PriceCalculator.excl_vat(Decimal('119.00'), Decimal('19')), Decimal('100.00'))

    def test_currency_conversion(self):
        self.assertEqual(PriceCalculator.convert_from_ron(Decimal('119.00'), 'RON', 1), Decimal('119.00'))
        self.assertEqual(PriceCalculator.convert_from_ron(Decimal('119.00'), 'EUR', Decimal('5')), Decimal('23.80'))
        with self.assertRaises(ValueError):
            PriceCalculator.convert_from_ron(Decimal('10'), 'EUR', 0)

    def test_tiers_are_contiguous(self):
        tiers = PriceCalculator.build_tiers([group_price(10, '80'), group_price(1, '100'), group_price(5, '90')])
        self.assertEqual([t.label for t in tiers], ['1-4', '5-9', '10+'])
        self.assertEqual(PriceCalculator.current_tier_index(tiers, 7), 1)
        self.assertEqual(PriceCalculator.current_tier_index(tiers, 25), 2)

    def test_unit_price_uses_highest_matching_tier(self):
        tiers = PriceCalculator.build_tiers([group_price(5, '90'), group_price(10, '80')])
        self.assertEqual(PriceCalculator.unit_price_for_quantity(Decimal('100'), tiers, 1), Decimal('100'))
        self.assertEqual(PriceCalculator.unit_price_for_quantity(Decimal('100'), tiers, 5), Decimal('90'))
        self.assertEqual(PriceCalculator.unit_price_for_quantity(Decimal('100'), tiers, 12), Decimal('80'))
        self.assertIsNone(PriceCalculator.current_tier_index(tiers, 2))
