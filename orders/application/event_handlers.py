"""
订单领域事件处理器。
事件在事务提交后发布，这里把已经生效的订单变化写入业务日志。
"""
from core.domain.events import DomainEvents
from core.infrastructure.business_log import log_business_event
from orders.domain import OrderCreatedEvent, OrderStatusChangedEvent


def log_order_created(event: OrderCreatedEvent) -> None:
    log_business_event("order.created", {
        "order_id": event.order_id,
        "order_number": event.order_number,
        "customer_id": str(event.customer_id) if event.customer_id else None,
        "total_ron_incl_vat": str(event.total_ron_incl_vat),
        "is_guest": event.is_guest,
    })


def log_order_status_changed(event: OrderStatusChangedEvent) -> None:
    log_business_event("order.status.updated", {
        "order_number": event.order_number,
        "old_status": event.old_status,
        "new_status": event.new_status,
        "user_id": event.user_id,
    })


def register_handlers() -> None:
    DomainEvents.register(OrderCreatedEvent, log_order_created)
    DomainEvents.register(OrderStatusChangedEvent, log_order_status_changed)
