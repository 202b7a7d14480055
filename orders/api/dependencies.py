"""
订单模块的应用服务装配。
"""
from typing import Optional

from core.domain.codes import ReadableCodeGenerator
from core.infrastructure.cache import get_cache_service
from core.infrastructure.transaction import DjangoTransactionManager
from catalog.api.dependencies import get_catalog_factory, get_price_service
from catalog.application import ProductPriceService
from customers.api.dependencies import get_customer_factory
from orders.application import OrderPlacementService, CustomerOrderService, OrderAdminService
from orders.domain.config import ORDER_CODE_LENGTH, ORDER_CODE_SALT, IDEMPOTENCY_TTL
from orders.infrastructure.factory import OrderInfrastructureFactory


def get_order_factory() -> OrderInfrastructureFactory:
    return OrderInfrastructureFactory(
        cache_service=get_cache_service(),
        transaction_manager=DjangoTransactionManager()
    )


def get_order_code_generator() -> ReadableCodeGenerator:
    return ReadableCodeGenerator(ORDER_CODE_SALT, length=ORDER_CODE_LENGTH)


def get_placement_service(price_service: Optional[ProductPriceService] = None) -> OrderPlacementService:
    """获取下单服务实例"""
    factory = get_order_factory()
    return OrderPlacementService(
        order_repository=factory.create_order_repository(),
        product_repository=get_catalog_factory().products,
        price_service=price_service or get_price_service(),
        cache_service=factory.cache_service,
        transaction_manager=factory.transaction_manager,
        code_generator=get_order_code_generator(),
        idempotency_ttl=IDEMPOTENCY_TTL
    )


def get_customer_order_service() -> CustomerOrderService:
    """获取客户订单服务实例"""
    return CustomerOrderService(order_repository=get_order_factory().create_order_repository())


def get_order_admin_service() -> OrderAdminService:
    """获取后台订单管理服务实例"""
    factory = get_order_factory()
    return OrderAdminService(
        order_repository=factory.create_order_repository(),
        method_repository=factory.create_method_repository(),
        product_repository=get_catalog_factory().products,
        price_service=get_price_service(),
        transaction_manager=factory.transaction_manager,
        location_repository=get_customer_factory().create_location_repository()
    )
