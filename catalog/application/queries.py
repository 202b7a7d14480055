"""
商品目录应用服务层的查询对象。
"""
from decimal import Decimal
from typing import Optional


class ListProductsQuery:
    """前台商品列表查询"""

    def __init__(
        self,
        page: int = 1,
        page_size: int = 20,
        search: Optional[str] = None,
        category: Optional[str] = None,
        brand: Optional[str] = None,
        min_price: Optional[Decimal] = None,
        max_price: Optional[Decimal] = None,
        sort: Optional[str] = None
    ):
        """
        Args:
            page: 页码
            page_size: 每页大小
            search: 关键词，匹配名称、SKU、EAN和型号
            category: 分类别名
            brand: 品牌别名
            min_price: 最低不含税列伊价格
            max_price: 最高不含税列伊价格
            sort: 排序方式，见 ProductSort
        """
        self.page = max(1, page)
        self.page_size = min(100, max(1, page_size))
        self.search = search
        self.category = category
        self.brand = brand
        self.min_price = min_price
        self.max_price = max_price
        self.sort = sort

    def to_filters(self) -> dict:
        return {
            'search': self.search,
            'category': self.category,
            'brand': self.brand,
            'min_price': self.min_price,
            'max_price': self.max_price,
            'sort': self.sort,
        }
