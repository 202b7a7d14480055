"""
退货领域的仓储接口。
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from core.domain.repositories import SearchableRepository


class ReturnRepository(SearchableRepository[Any], ABC):
    """
    退货单仓储接口。
    search 用于后台列表。
    """

    @abstractmethod
    def create(self, **fields) -> Any:
        pass

    @abstractmethod
    def get_for_update(self, return_id: Any) -> Optional[Any]:
        pass

    @abstractmethod
    def returned_quantity(self, order_product_id: Any) -> int:
        """订单行已经申请退货的数量"""
        pass

    @abstractmethod
    def returned_quantities(self, order_id: Any) -> Dict[Any, int]:
        """订单各行已经申请退货的数量，order_product_id -> 数量"""
        pass

    @abstractmethod
    def list_for_customer(
        self,
        customer_id: Any,
        filters: Optional[Dict[str, Any]] = None,
        page: int = 1,
        page_size: int = 10
    ) -> Tuple[List[Any], int]:
        """
        客户订单上的退货单。

        支持的过滤条件: status, time_range, search
        """
        pass
