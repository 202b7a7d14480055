"""
订单领域层包。
"""
from orders.domain.value_objects import (
    OrderStatus,
    PaymentCode,
    ShippingMethodType,
    OrderAddressType,
    OrderChangeType,
    HistoryAction,
)
from orders.domain.events import OrderCreatedEvent, OrderStatusChangedEvent
from orders.domain.services import OrderTotalsCalculator
from orders.domain.repositories import OrderRepository, CheckoutMethodRepository
from orders.domain.exceptions import PaymentStateUnchangedException, OrderInvoicedException

__all__ = [
    'OrderStatus',
    'PaymentCode',
    'ShippingMethodType',
    'OrderAddressType',
    'OrderChangeType',
    'HistoryAction',
    'OrderCreatedEvent',
    'OrderStatusChangedEvent',
    'OrderTotalsCalculator',
    'OrderRepository',
    'CheckoutMethodRepository',
    'PaymentStateUnchangedException',
    'OrderInvoicedException',
]
