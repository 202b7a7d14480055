"""
购物车领域的值对象。
"""
from typing import Any, Dict, List, Optional, Tuple

from core.domain.value_objects import ValueObject


class CartStatus:
    """数据库购物车状态"""
    ACTIVE = 'active'
    CONVERTED = 'converted'

    CHOICES: List[Tuple[str, str]] = [
        (ACTIVE, '使用中'),
        (CONVERTED, '已下单'),
    ]


class CartLine(ValueObject):
    """购物车中的一行: 商品、数量和计价分组"""

    def __init__(self, product_id: Any, quantity: int, customer_group_id: Optional[int] = None):
        self.product_id = str(product_id)
        self.quantity = int(quantity)
        self.customer_group_id = customer_group_id

    def with_quantity(self, quantity: int) -> 'CartLine':
        return CartLine(self.product_id, quantity, self.customer_group_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'product_id': self.product_id,
            'quantity': self.quantity,
            'customer_group_id': self.customer_group_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CartLine':
        return cls(data['product_id'], data['quantity'], data.get('customer_group_id'))
