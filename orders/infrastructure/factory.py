"""
订单基础设施层工厂。
负责创建和缓存订单模块的仓储实例。
"""
from core.infrastructure.cache import CacheService
from core.infrastructure.transaction import TransactionManager

from orders.domain import OrderRepository, CheckoutMethodRepository
from orders.infrastructure.repositories.django_order_repository import DjangoOrderRepository
from orders.infrastructure.repositories.django_method_repository import DjangoCheckoutMethodRepository


class OrderInfrastructureFactory:
    """
    订单基础设施层工厂类。
    """

    def __init__(self, cache_service: CacheService, transaction_manager: TransactionManager):
        """
        Args:
            cache_service: 缓存服务，保存下单幂等键
            transaction_manager: 事务管理器
        """
        self.cache_service = cache_service
        self.transaction_manager = transaction_manager

        self._order_repository = None
        self._method_repository = None

    def create_order_repository(self) -> OrderRepository:
        if not self._order_repository:
            self._order_repository = DjangoOrderRepository()
        return self._order_repository

    def create_method_repository(self) -> CheckoutMethodRepository:
        if not self._method_repository:
            self._method_repository = DjangoCheckoutMethodRepository()
        return self._method_repository
