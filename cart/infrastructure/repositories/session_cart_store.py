"""
会话购物车存储，用于访客。
"""
from cart.domain import CartStore, ShoppingCart

# 会话中保存购物车的键
SESSION_CART_KEY = 'cart'


class SessionCartStore(CartStore):
    """把购物车保存在Django会话中"""

    def __init__(self, session):
        self.session = session

    def load(self) -> ShoppingCart:
        return ShoppingCart.from_session(self.session.get(SESSION_CART_KEY))

    def save(self, cart: ShoppingCart) -> None:
        self.session[SESSION_CART_KEY] = cart.to_session()

    def discard(self) -> None:
        self.session.pop(SESSION_CART_KEY, None)
