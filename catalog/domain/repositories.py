"""
商品目录领域的仓储接口。
"""
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from core.domain.repositories import Repository, SearchableRepository


class ProductRepository(SearchableRepository[Any], ABC):
    """
    商品仓储接口。
    search 用于后台列表，storefront_search 用于前台列表。
    """

    @abstractmethod
    def get_for_update(self, product_id: Any) -> Optional[Any]:
        """在当前事务中加行锁读取商品，用于版本检查后的修改"""
        pass

    @abstractmethod
    def get_active(self, product_id: Any) -> Optional[Any]:
        """获取上架商品，不存在或已下架返回None"""
        pass

    @abstractmethod
    def storefront_search(
        self,
        filters: Optional[Dict[str, Any]] = None,
        page: int = 1,
        page_size: int = 20
    ) -> Tuple[List[Any], int]:
        """
        前台商品列表，只包含上架的非变体商品。

        支持的过滤条件: search, category, brand, min_price, max_price, sort
        """
        pass

    @abstractmethod
    def autocomplete(self, keyword: str, limit: int) -> List[Any]:
        pass

    @abstractmethod
    def list_active_variants(self, parent_id: Any) -> List[Any]:
        pass

    @abstractmethod
    def get_group_prices(self, product_id: Any, customer_group_id: Optional[int]) -> List[Any]:
        """商品在某个客户分组下的阶梯价记录，按 min_quantity 升序"""
        pass

    @abstractmethod
    def adjust_stock(self, product_id: Any, delta: int) -> Optional[int]:
        """
        在行锁下增减库存，允许库存变为负数(缺货预订)。

        Returns:
            调整后的库存数量，商品不存在时返回None
        """
        pass

    @abstractmethod
    def list_low_stock(self, threshold: int, limit: Optional[int] = None) -> List[Any]:
        """库存低于阈值的上架普通商品和变体"""
        pass

    @abstractmethod
    def count_low_stock(self, threshold: int) -> int:
        pass

    @abstractmethod
    def set_categories(self, product: Any, category_ids: List[Any]) -> None:
        pass


class CategoryRepository(Repository[Any], ABC):
    """商品分类仓储接口"""

    @abstractmethod
    def list_all(self, active_only: bool = False) -> List[Any]:
        pass

    @abstractmethod
    def get_by_slug(self, slug: str, active_only: bool = True) -> Optional[Any]:
        pass

    @abstractmethod
    def slug_exists(self, slug: str, exclude_id: Any = None) -> bool:
        pass

    @abstractmethod
    def has_children(self, category_id: Any) -> bool:
        pass

    @abstractmethod
    def create(self, **fields) -> Any:
        pass

    @abstractmethod
    def count_existing(self, category_ids: List[Any]) -> int:
        pass


class PricingRepository(ABC):
    """
    计价所需的参考数据: 货币、增值税税率、品牌和客户分组。
    """

    @abstractmethod
    def get_active_currency(self, code: str) -> Optional[Any]:
        pass

    @abstractmethod
    def list_active_currencies(self) -> List[Any]:
        pass

    @abstractmethod
    def get_max_vat_rate(self, country_id: Any) -> Optional[Decimal]:
        """国家最高的增值税税率(百分比)，未配置返回None"""
        pass

    @abstractmethod
    def get_group_code(self, customer_group_id: int) -> Optional[str]:
        pass

    @abstractmethod
    def get_group_id_by_code(self, code: str) -> Optional[int]:
        pass

    @abstractmethod
    def brand_exists(self, brand_id: Any) -> bool:
        pass

    @abstractmethod
    def list_brands(self) -> List[Any]:
        pass

    @abstractmethod
    def update_currency_rate(self, code: str, value: Decimal) -> bool:
        """
        更新货币兑列伊的汇率。

        Returns:
            货币不存在时返回False
        """
        pass

    @abstractmethod
    def ensure_base_currency(self, code: str) -> None:
        """基准货币存在、启用且汇率为1"""
        pass


class WishlistRepository(ABC):
    """客户收藏夹"""

    @abstractmethod
    def add(self, customer_id: Any, product_id: Any) -> bool:
        """
        收藏商品。

        Returns:
            新收藏返回True，已经收藏过返回False
        """
        pass

    @abstractmethod
    def remove(self, customer_id: Any, product_id: Any) -> bool:
        """取消收藏，没有收藏过返回False"""
        pass

    @abstractmethod
    def contains(self, customer_id: Any, product_id: Any) -> bool:
        pass

    @abstractmethod
    def list_active_products(self, customer_id: Any) -> List[Any]:
        """收藏的上架商品，最近收藏的在前"""
        pass


class ExchangeRateSource(ABC):
    """外部汇率来源"""

    @abstractmethod
    def fetch(self) -> Tuple[str, Dict[str, Decimal]]:
        """
        获取最新汇率。

        Returns:
            (汇率日期, 货币代码 -> 1单位货币兑列伊的汇率)

        Raises:
            ExchangeRateUnavailableException: 请求失败或数据无法解析
        """
        pass
