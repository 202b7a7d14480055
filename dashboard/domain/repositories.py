"""
仪表盘统计查询接口。
"""
from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Sequence


class DashboardRepository(ABC):
    """
    后台仪表盘统计。
    销售额均为订单含税合计加含税运费(列伊)。
    """

    @abstractmethod
    def sales_between(self, start: date, end: date) -> Decimal:
        """[start, end] 日期范围内的销售额"""
        pass

    @abstractmethod
    def daily_sales(self, start: date, end: date) -> Dict[date, Decimal]:
        """按下单日期汇总的销售额，没有订单的日期不出现"""
        pass

    @abstractmethod
    def count_orders_on(self, day: date, statuses: Sequence[str]) -> int:
        pass

    @abstractmethod
    def status_counts(self) -> Dict[str, int]:
        pass

    @abstractmethod
    def latest_orders(self, limit: int) -> List[Any]:
        pass

    @abstractmethod
    def count_new_customers(self, since: Any) -> int:
        pass
