"""
订单领域异常。
"""
from typing import Any

from core.domain.exceptions import BusinessRuleViolationException, InvalidEntityStateException


class PaymentStateUnchangedException(InvalidEntityStateException):
    """订单已经处于要设置的支付状态"""

    def __init__(self, order_number: str, is_paid: bool, paid_at: Any = None):
        reason = "订单已标记为已支付" if is_paid else "订单已标记为未支付"
        super().__init__("订单", reason)
        self.order_number = order_number
        self.is_paid = is_paid
        self.paid_at = paid_at


class OrderInvoicedException(BusinessRuleViolationException):
    """已开具发票的订单不能修改"""

    def __init__(self, order_number: str):
        super().__init__("order_invoiced", "订单已开具发票，请先作废发票再修改")
        self.order_number = order_number
