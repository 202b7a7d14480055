from orders.application.commands import PlaceOrderCommand, UpdateOrderCommand, BatchUpdateOrderCommand
from orders.application.placement import OrderPlacementService
from orders.application.order_service import CustomerOrderService
from orders.application.admin_service import OrderAdminService

__all__ = [
    'PlaceOrderCommand',
    'UpdateOrderCommand',
    'BatchUpdateOrderCommand',
    'OrderPlacementService',
    'CustomerOrderService',
    'OrderAdminService',
]
