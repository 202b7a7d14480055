"""
结算命令对象。
"""
from typing import Any, Optional


class SubmitOrderCommand:
    """提交订单命令，地址ID只对登录客户有效，访客地址取自会话"""

    def __init__(
        self,
        shipping_method_id: Any,
        payment_method_id: Any,
        shipping_address_id: Optional[Any] = None,
        billing_address_id: Optional[Any] = None,
        use_shipping_as_billing: bool = False,
        idempotency_key: Optional[str] = None
    ):
        self.shipping_method_id = shipping_method_id
        self.payment_method_id = payment_method_id
        self.shipping_address_id = shipping_address_id
        self.billing_address_id = billing_address_id
        self.use_shipping_as_billing = use_shipping_as_billing
        self.idempotency_key = idempotency_key
