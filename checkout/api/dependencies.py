"""
结算模块的应用服务装配。
"""
from catalog.api.dependencies import get_price_service
from cart.api.dependencies import get_cart_service
from customers.api.dependencies import get_customer_factory
from orders.api.dependencies import get_order_factory, get_placement_service, get_customer_order_service
from checkout.application import CheckoutApplicationService


def get_checkout_service() -> CheckoutApplicationService:
    """获取结算应用服务实例，购物车和下单共用同一个计价服务"""
    price_service = get_price_service()
    customer_factory = get_customer_factory()
    return CheckoutApplicationService(
        cart_service=get_cart_service(price_service),
        price_service=price_service,
        address_repository=customer_factory.create_address_repository(),
        location_repository=customer_factory.create_location_repository(),
        method_repository=get_order_factory().create_method_repository(),
        placement_service=get_placement_service(price_service),
        order_service=get_customer_order_service()
    )
