"""
购物车基础设施层工厂。
根据购物者是否为已登录客户选择购物车存储。
"""
from typing import Any

from core.infrastructure.transaction import TransactionManager
from cart.domain import CartStore, CartRepository
from cart.infrastructure.repositories.session_cart_store import SessionCartStore
from cart.infrastructure.repositories.django_cart_store import DjangoCartStore
from cart.infrastructure.repositories.django_cart_repository import DjangoCartRepository


class CartInfrastructureFactory:
    """购物车基础设施层工厂类"""

    def __init__(self, transaction_manager: TransactionManager):
        self.transaction_manager = transaction_manager

    def create_cart_repository(self) -> CartRepository:
        return DjangoCartRepository()

    def create_session_store(self, session) -> CartStore:
        return SessionCartStore(session)

    def create_customer_store(self, customer: Any, session_key: str = '') -> CartStore:
        return DjangoCartStore(customer, session_key)

    def create_cart_store(self, shopper: Any) -> CartStore:
        """
        Args:
            shopper: ShopperContext，已登录客户使用数据库存储，其他情况使用会话存储
        """
        if shopper.is_customer:
            return self.create_customer_store(shopper.customer, shopper.session.session_key or '')
        return self.create_session_store(shopper.session)
