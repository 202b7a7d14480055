"""
购物车存储接口。
访客的购物车保存在会话中，已登录客户的购物车保存在数据库中。
"""
from abc import ABC, abstractmethod
from typing import Any

from cart.domain.aggregates import ShoppingCart


class CartStore(ABC):
    """购物车存储接口"""

    @abstractmethod
    def load(self) -> ShoppingCart:
        """读取购物车，没有时返回空购物车"""
        pass

    @abstractmethod
    def save(self, cart: ShoppingCart) -> None:
        pass

    @abstractmethod
    def discard(self) -> None:
        """下单成功后清空购物车"""
        pass


class CartRepository(ABC):
    """数据库购物车的维护操作"""

    @abstractmethod
    def delete_converted_before(self, cutoff: Any) -> int:
        """
        删除在 cutoff 之前转为订单的购物车及其商品行。

        Returns:
            删除的购物车数量
        """
        pass
