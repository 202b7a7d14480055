"""
购物车聚合根。
购物车行以 "商品ID_客户分组ID" 为键，同一商品同一分组只占一行。
"""
from typing import Any, Dict, Iterator, List, Optional, Tuple

from core.domain import AggregateRoot
from core.domain.exceptions import EntityNotFoundException, ValidationException
from cart.domain.value_objects import CartLine


class ShoppingCart(AggregateRoot):
    """
    购物车聚合根。
    """

    def __init__(self, lines: Optional[Dict[str, CartLine]] = None, id: Any = None):
        super().__init__(id)
        self._lines: Dict[str, CartLine] = dict(lines or {})

    @staticmethod
    def cart_key(product_id: Any, customer_group_id: Optional[int]) -> str:
        group = customer_group_id if customer_group_id is not None else 'null'
        return f"{product_id}_{group}"

    @property
    def lines(self) -> Dict[str, CartLine]:
        return dict(self._lines)

    def items(self) -> Iterator[Tuple[str, CartLine]]:
        return iter(list(self._lines.items()))

    def __len__(self) -> int:
        return len(self._lines)

    @property
    def is_empty(self) -> bool:
        return not self._lines

    @property
    def total_quantity(self) -> int:
        return sum(line.quantity for line in self._lines.values())

    def add(self, product_id: Any, quantity: int, customer_group_id: Optional[int]) -> str:
        """
        加入商品，同一键的数量累加。

        Returns:
            购物车行的键
        """
        if quantity < 1:
            raise ValidationException("quantity", "数量必须大于0")
        key = self.cart_key(product_id, customer_group_id)
        existing = self._lines.get(key)
        current = existing.quantity if existing else 0
        self._lines[key] = CartLine(product_id, current + quantity, customer_group_id)
        return key

    def update_quantity(self, cart_key: str, quantity: int) -> None:
        """
        修改数量，数量不大于0时移除该行。

        Raises:
            EntityNotFoundException: 购物车中没有该行
        """
        if quantity <= 0:
            self.remove(cart_key)
            return
        if cart_key not in self._lines:
            raise EntityNotFoundException("购物车商品", cart_key)
        self._lines[cart_key] = self._lines[cart_key].with_quantity(quantity)

    def remove(self, cart_key: str) -> bool:
        return self._lines.pop(cart_key, None) is not None

    def clear(self) -> None:
        self._lines.clear()

    def merge(self, other: 'ShoppingCart', customer_group_id: Optional[int]) -> None:
        """
        合并另一个购物车，所有行改用指定分组重新计键，同键数量相加。
        """
        regrouped: Dict[str, CartLine] = {}
        for line in list(self._lines.values()) + [line for _, line in other.items()]:
            key = self.cart_key(line.product_id, customer_group_id)
            current = regrouped[key].quantity if key in regrouped else 0
            regrouped[key] = CartLine(line.product_id, current + line.quantity, customer_group_id)
        self._lines = regrouped

    def to_session(self) -> Dict[str, Dict[str, Any]]:
        return {key: line.to_dict() for key, line in self._lines.items()}

    @classmethod
    def from_session(cls, data: Optional[Dict[str, Dict[str, Any]]]) -> 'ShoppingCart':
        lines = {key: CartLine.from_dict(item) for key, item in (data or {}).items()}
        return cls(lines)

    def product_quantities(self) -> List[Tuple[str, int]]:
        return [(line.product_id, line.quantity) for line in self._lines.values()]
