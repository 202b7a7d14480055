"""
购物车领域层包。
"""
from cart.domain.value_objects import CartStatus, CartLine
from cart.domain.aggregates import ShoppingCart
from cart.domain.repositories import CartStore, CartRepository

__all__ = ['CartStatus', 'CartLine', 'ShoppingCart', 'CartStore', 'CartRepository']
