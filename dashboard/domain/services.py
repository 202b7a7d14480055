"""
仪表盘领域服务。
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict

ZERO = Decimal('0')


def percent_change(current: Any, previous: Any) -> float:
    """
    环比变化百分比，保留一位小数。
    上期为0时，本期大于0记为100，否则为0。
    """
    current = Decimal(str(current or 0))
    previous = Decimal(str(previous or 0))
    if previous > ZERO:
        change = (current - previous) / previous * 100
    elif current > ZERO:
        change = Decimal('100')
    else:
        change = ZERO
    return float(change.quantize(Decimal('0.1'), rounding=ROUND_HALF_UP))


def comparison_kpi(current: Any, previous: Any) -> Dict[str, Any]:
    change = percent_change(current, previous)
    return {
        'value': current,
        'previous': previous,
        'change': change,
        'change_positive': change >= 0,
    }
