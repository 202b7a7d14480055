"""
值对象模块。
值对象基类和金额舍入工具。
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Any

# 店铺结算货币
BASE_CURRENCY = "RON"

TWO_PLACES = Decimal("0.01")


def round_money(value: Any) -> Decimal:
    """
    将金额按两位小数四舍五入(ROUND_HALF_UP)。

    Args:
        value: 金额，可以是Decimal、int、float或字符串

    Returns:
        舍入后的Decimal
    """
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


class ValueObject:
    """
    值对象基类。
    值对象没有标识，属性值相同即视为相等。
    """

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, self.__class__):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self) -> int:
        items = frozenset((k, hash(v)) for k, v in self.__dict__.items())
        return hash(items)

