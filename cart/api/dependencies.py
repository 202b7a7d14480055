"""
购物车模块的应用服务装配。
"""
from typing import Optional

from core.infrastructure.transaction import DjangoTransactionManager
from catalog.application import ProductPriceService
from catalog.api.dependencies import get_catalog_factory, get_price_service
from cart.application import CartApplicationService, CartMaintenanceService
from cart.domain import CartStore
from cart.infrastructure.factory import CartInfrastructureFactory
from customers.application import ShopperContext


def get_cart_factory() -> CartInfrastructureFactory:
    return CartInfrastructureFactory(transaction_manager=DjangoTransactionManager())


def get_cart_service(price_service: Optional[ProductPriceService] = None) -> CartApplicationService:
    """获取购物车应用服务实例"""
    return CartApplicationService(
        product_repository=get_catalog_factory().products,
        price_service=price_service or get_price_service(),
        transaction_manager=DjangoTransactionManager()
    )


def get_cart_store(shopper: ShopperContext) -> CartStore:
    """当前购物者的购物车存储"""
    return get_cart_factory().create_cart_store(shopper)


def get_cart_maintenance_service() -> CartMaintenanceService:
    """获取购物车维护服务实例"""
    factory = get_cart_factory()
    return CartMaintenanceService(
        cart_repository=factory.create_cart_repository(),
        transaction_manager=factory.transaction_manager
    )
