"""
订单领域的仓储接口。
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from core.domain.repositories import SearchableRepository


class OrderRepository(SearchableRepository[Any], ABC):
    """
    订单仓储接口。
    订单行、地址快照、配送信息和历史记录都属于订单聚合，通过本仓储读写。
    """

    @abstractmethod
    def get_by_number(self, order_number: str, for_update: bool = False) -> Optional[Any]:
        pass

    @abstractmethod
    def create(self, **fields) -> Any:
        pass

    @abstractmethod
    def list_for_customer(
        self,
        customer_id: Any,
        filters: Optional[Dict[str, Any]] = None,
        page: int = 1,
        page_size: int = 20
    ) -> Tuple[List[Any], int]:
        """
        客户自己的订单，按下单时间倒序。

        支持的过滤条件: search(订单号或商品名称), status(all/active/cancelled)
        """
        pass

    @abstractmethod
    def list_lines(self, order: Any) -> List[Any]:
        pass

    @abstractmethod
    def get_line(self, order: Any, order_product_id: Any) -> Optional[Any]:
        pass

    @abstractmethod
    def create_line(self, order: Any, **fields) -> Any:
        pass

    @abstractmethod
    def save_line(self, line: Any) -> Any:
        pass

    @abstractmethod
    def delete_line(self, line: Any) -> None:
        pass

    @abstractmethod
    def get_address(self, order: Any, address_type: str) -> Optional[Any]:
        pass

    @abstractmethod
    def save_address(self, order: Any, address_type: str, data: Dict[str, Any]) -> Any:
        """新建或覆盖订单的某类地址快照"""
        pass

    @abstractmethod
    def create_shipping(self, order: Any, **fields) -> Any:
        pass

    @abstractmethod
    def add_history(
        self,
        order: Any,
        action: str,
        old_value: Any = None,
        new_value: Any = None,
        description: str = '',
        user_id: Any = None
    ) -> Any:
        pass

    @abstractmethod
    def list_shipping_cities(self) -> List[str]:
        """订单收货地址中出现过的城市，供后台筛选"""
        pass


class CheckoutMethodRepository(ABC):
    """配送方式和支付方式查询"""

    @abstractmethod
    def get_shipping_method(self, method_id: Any) -> Optional[Any]:
        pass

    @abstractmethod
    def list_shipping_methods(self, active_only: bool = True) -> List[Any]:
        pass

    @abstractmethod
    def get_payment_method(self, method_id: Any) -> Optional[Any]:
        pass

    @abstractmethod
    def list_payment_methods(self, active_only: bool = True) -> List[Any]:
        pass
