"""
商品目录领域服务。
价格计算的纯函数部分: 增值税换算、货币换算和阶梯价选择。

所有价格以列伊(RON)不含税价保存，金额在每一步计算后按两位小数四舍五入。
"""
from decimal import Decimal
from typing import Any, Iterable, List, Optional

from core.domain.value_objects import BASE_CURRENCY, round_money
from catalog.domain.value_objects import PriceTier

HUNDRED = Decimal('100')


class PriceCalculator:
    """
    价格计算器。
    不访问数据库，供价格服务和订单合计复用。
    """

    @staticmethod
    def to_decimal(value: Any) -> Decimal:
        if isinstance(value, Decimal):
            return value
        return Decimal(str(value))

    @classmethod
    def incl_vat(cls, price_excl: Any, vat_rate: Any) -> Decimal:
        """不含税价 -> 含税价"""
        rate = cls.to_decimal(vat_rate)
        return round_money(cls.to_decimal(price_excl) * (1 + rate / HUNDRED))

    @classmethod
    def excl_vat(cls, price_incl: Any, vat_rate: Any) -> Decimal:
        """含税价 -> 不含税价"""
        rate = cls.to_decimal(vat_rate)
        return round_money(cls.to_decimal(price_incl) / (1 + rate / HUNDRED))

    @classmethod
    def convert_from_ron(cls, amount_ron: Any, currency_code: str, currency_value: Any) -> Decimal:
        """
        列伊金额换算为目标货币。

        Args:
            amount_ron: 列伊金额
            currency_code: 目标货币代码
            currency_value: 1单位目标货币对应的列伊数

        Returns:
            目标货币金额，保留两位小数
        """
        amount = cls.to_decimal(amount_ron)
        if currency_code == BASE_CURRENCY:
            return round_money(amount)
        value = cls.to_decimal(currency_value)
        if value <= 0:
            raise ValueError(f"货币 {currency_code} 的汇率无效: {currency_value}")
        return round_money(amount / value)

    @classmethod
    def line_total(cls, unit_price: Any, quantity: int) -> Decimal:
        return round_money(cls.to_decimal(unit_price) * quantity)

    @staticmethod
    def build_tiers(group_prices: Iterable[Any]) -> List[PriceTier]:
        """
        由分组价格记录生成阶梯，记录需要有 min_quantity 和 price_ron。
        """
        ordered = sorted(group_prices, key=lambda gp: gp.min_quantity)
        tiers = []
        for index, group_price in enumerate(ordered):
            max_quantity = None
            if index + 1 < len(ordered):
                max_quantity = ordered[index + 1].min_quantity - 1
            tiers.append(PriceTier(group_price.min_quantity, max_quantity, group_price.price_ron))
        return tiers

    @classmethod
    def unit_price_for_quantity(cls, base_price: Any, tiers: List[PriceTier], quantity: int) -> Decimal:
        """
        取 min_quantity 不超过购买数量的最高阶梯价，没有匹配阶梯时使用商品基础价。
        """
        matched: Optional[PriceTier] = None
        for tier in tiers:
            if tier.min_quantity <= quantity and (matched is None or tier.min_quantity > matched.min_quantity):
                matched = tier
        price = matched.price_ron if matched else base_price
        return cls.to_decimal(price)

    @staticmethod
    def current_tier_index(tiers: List[PriceTier], quantity: int) -> Optional[int]:
        """当前数量所在阶梯的下标，不在任何阶梯内时为None"""
        for index in range(len(tiers) - 1, -1, -1):
            if tiers[index].contains(quantity):
                return index
        return None
