"""
订单领域服务。
订单行金额、订单合计和运费的计算，所有金额在每一步之后按两位小数四舍五入。
"""
from decimal import Decimal
from typing import Any, Dict, Iterable

from core.domain.value_objects import BASE_CURRENCY, round_money
from catalog.domain import PriceCalculator

ZERO = Decimal('0')


class OrderTotalsCalculator:
    """
    订单金额计算器。

    订单行需要提供 total_ron_excl_vat, total_ron_incl_vat, total_currency_excl_vat,
    total_currency_incl_vat 和 vat_percent 属性或键。
    """

    @staticmethod
    def _value(line: Any, name: str) -> Decimal:
        value = line[name] if isinstance(line, dict) else getattr(line, name)
        return PriceCalculator.to_decimal(value if value is not None else 0)

    @classmethod
    def accumulate(cls, lines: Iterable[Any]) -> Dict[str, Decimal]:
        """
        汇总订单行。

        Returns:
            total_excl_vat, total_incl_vat, total_ron_excl_vat, total_ron_incl_vat, average_vat_rate
        """
        totals = {
            'total_excl_vat': ZERO,
            'total_incl_vat': ZERO,
            'total_ron_excl_vat': ZERO,
            'total_ron_incl_vat': ZERO,
        }
        vat_rates = []
        for line in lines:
            totals['total_excl_vat'] = round_money(totals['total_excl_vat'] + cls._value(line, 'total_currency_excl_vat'))
            totals['total_incl_vat'] = round_money(totals['total_incl_vat'] + cls._value(line, 'total_currency_incl_vat'))
            totals['total_ron_excl_vat'] = round_money(totals['total_ron_excl_vat'] + cls._value(line, 'total_ron_excl_vat'))
            totals['total_ron_incl_vat'] = round_money(totals['total_ron_incl_vat'] + cls._value(line, 'total_ron_incl_vat'))
            vat_rates.append(cls._value(line, 'vat_percent'))

        totals['average_vat_rate'] = round_money(sum(vat_rates) / len(vat_rates)) if vat_rates else ZERO
        return totals

    @staticmethod
    def line_amounts(
        unit_ron_excl: Any,
        unit_ron_incl: Any,
        quantity: int,
        currency_code: str,
        exchange_rate: Any,
        purchase_price_ron: Any = None
    ) -> Dict[str, Decimal]:
        """
        订单行金额，按订单冻结的汇率换算展示货币。

        Args:
            unit_ron_excl: 不含税列伊单价
            unit_ron_incl: 含税列伊单价
            quantity: 数量
            currency_code: 订单货币
            exchange_rate: 1单位订单货币对应的列伊数
            purchase_price_ron: 进货价，用于计算毛利
        """
        unit_ron_excl = round_money(unit_ron_excl)
        unit_ron_incl = round_money(unit_ron_incl)
        unit_currency_excl = PriceCalculator.convert_from_ron(unit_ron_excl, currency_code, exchange_rate)
        unit_currency_incl = PriceCalculator.convert_from_ron(unit_ron_incl, currency_code, exchange_rate)
        purchase = round_money(purchase_price_ron or 0)

        return {
            'unit_price_ron': unit_ron_incl,
            'unit_price_ron_excl_vat': unit_ron_excl,
            'unit_price_currency': unit_currency_incl,
            'unit_purchase_price_ron': purchase,
            'total_ron_excl_vat': PriceCalculator.line_total(unit_ron_excl, quantity),
            'total_ron_incl_vat': PriceCalculator.line_total(unit_ron_incl, quantity),
            'total_currency_excl_vat': PriceCalculator.line_total(unit_currency_excl, quantity),
            'total_currency_incl_vat': PriceCalculator.line_total(unit_currency_incl, quantity),
            'profit_ron': round_money((unit_ron_excl - purchase) * quantity),
        }

    @staticmethod
    def shipping_costs(cost_ron_incl: Any, vat_rate: Any, currency_code: str, exchange_rate: Any) -> Dict[str, Decimal]:
        """
        运费。配送方式的运费为含税列伊价，不含税价按订单税率倒算(B2B税率为0)。
        """
        cost_incl = round_money(cost_ron_incl or 0)
        cost_excl = PriceCalculator.excl_vat(cost_incl, vat_rate)
        return {
            'shipping_cost_ron_incl_vat': cost_incl,
            'shipping_cost_ron_excl_vat': cost_excl,
            'shipping_cost_incl_vat': PriceCalculator.convert_from_ron(cost_incl, currency_code, exchange_rate),
            'shipping_cost_excl_vat': PriceCalculator.convert_from_ron(cost_excl, currency_code, exchange_rate),
        }

    @staticmethod
    def exchange_rate_for(currency: Any) -> Decimal:
        """
        冻结下单时的汇率，列伊为1。

        Raises:
            ValueError: 货币汇率不是正数
        """
        if currency.code == BASE_CURRENCY:
            return Decimal('1')
        rate = PriceCalculator.to_decimal(currency.value)
        if rate <= 0:
            raise ValueError(f"货币 {currency.code} 的汇率无效，必须为正数")
        return rate
