"""
订单领域事件。
"""
from typing import Any

from core.domain.events import DomainEvent


class OrderCreatedEvent(DomainEvent):
    """订单创建事件"""

    def __init__(self, order_id: Any, order_number: str, customer_id: Any, total_ron_incl_vat: Any, is_guest: bool):
        """
        Args:
            order_id: 订单ID
            order_number: 订单号
            customer_id: 客户ID，访客订单为None
            total_ron_incl_vat: 含税商品合计(列伊)
            is_guest: 是否访客下单
        """
        super().__init__()
        self.order_id = order_id
        self.order_number = order_number
        self.customer_id = customer_id
        self.total_ron_incl_vat = total_ron_incl_vat
        self.is_guest = is_guest


class OrderStatusChangedEvent(DomainEvent):
    """订单状态变更事件，user_id 为操作的后台用户"""

    def __init__(self, order_id: Any, order_number: str, old_status: str, new_status: str, user_id: Any = None):
        super().__init__()
        self.order_id = order_id
        self.order_number = order_number
        self.user_id = user_id
        self.old_status = old_status
        self.new_status = new_status
