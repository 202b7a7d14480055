"""
商品目录领域的值对象。
"""
from typing import Any, List, Optional, Tuple

from core.domain.value_objects import ValueObject


class ProductType:
    """商品类型"""
    SIMPLE = 'simple'
    CONFIGURABLE = 'configurable'
    VARIANT = 'variant'

    CHOICES: List[Tuple[str, str]] = [
        (SIMPLE, '普通商品'),
        (CONFIGURABLE, '可配置商品'),
        (VARIANT, '规格变体'),
    ]

    # 可以直接加入购物车的类型，可配置商品只能购买其变体
    PURCHASABLE = (SIMPLE, VARIANT)


class ProductSort:
    """前台商品列表排序方式"""
    NEWEST = 'newest'
    PRICE_ASC = 'price_asc'
    PRICE_DESC = 'price_desc'
    NAME = 'name'

    ALL = (NEWEST, PRICE_ASC, PRICE_DESC, NAME)


class PriceTier(ValueObject):
    """
    数量阶梯价。

    max_quantity 为下一档的起始数量减一，最后一档为None。
    """

    def __init__(self, min_quantity: int, max_quantity: Optional[int], price_ron: Any):
        self.min_quantity = min_quantity
        self.max_quantity = max_quantity
        self.price_ron = price_ron

    @property
    def label(self) -> str:
        if self.max_quantity is None:
            return f"{self.min_quantity}+"
        return f"{self.min_quantity}-{self.max_quantity}"

    def contains(self, quantity: int) -> bool:
        if quantity < self.min_quantity:
            return False
        return self.max_quantity is None or quantity <= self.max_quantity


class PricingContext(ValueObject):
    """
    计价上下文: 展示货币、客户分组和计算增值税的国家。

    customer_group_id 已经是生效的分组(访客为B2C分组)。
    """

    def __init__(self, currency: Any, customer_group_id: Optional[int], country_id: Optional[int],
                 show_vat: bool = True):
        self.currency = currency
        self.customer_group_id = customer_group_id
        self.country_id = country_id
        self.show_vat = show_vat

    @property
    def currency_code(self) -> str:
        return self.currency.code

    def __hash__(self) -> int:
        return hash((self.currency.code, self.customer_group_id, self.country_id, self.show_vat))
