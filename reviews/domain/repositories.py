"""
评价领域的仓储接口。
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Set

from core.domain.repositories import Repository


class ReviewRepository(Repository[Any], ABC):
    """商品评价仓储接口"""

    @abstractmethod
    def create(self, **fields) -> Optional[Any]:
        """新建评价，客户已评价过该商品时返回None"""
        pass

    @abstractmethod
    def exists_for(self, customer_id: Any, product_id: Any) -> bool:
        """客户是否已经评价过该商品"""
        pass

    @abstractmethod
    def latest_order_id_with_product(self, customer_id: Any, product_id: Any) -> Optional[int]:
        """客户最近一次购买该商品的订单ID，从未购买时返回None"""
        pass

    @abstractmethod
    def list_approved_for_product(self, product_id: Any, limit: int) -> List[Any]:
        """商品已审核的评价，最新的在前"""
        pass

    @abstractmethod
    def rating_counts(self, product_id: Any) -> Dict[int, int]:
        """商品已审核评价的 评分 -> 数量"""
        pass

    @abstractmethod
    def list_for_customer(self, customer_id: Any) -> List[Any]:
        pass

    @abstractmethod
    def marked_useful_ids(self, customer_id: Any, review_ids: List[Any]) -> Set[Any]:
        """review_ids 中客户已标记为有用的评价ID"""
        pass

    @abstractmethod
    def mark_useful(self, review: Any, customer_id: Any) -> Optional[int]:
        """
        记录客户认为评价有用并增加计数。

        Returns:
            新的有用计数，客户已经标记过时返回None
        """
        pass
