"""
退货命令对象。
"""
from typing import Any, Optional


class SearchOrderCommand:
    """按订单号查找可退货订单，访客需要提供邮箱或电话"""

    def __init__(
        self,
        order_number: str,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        customer: Any = None,
        user: Any = None,
        website: Optional[str] = None
    ):
        self.order_number = order_number
        self.email = email or None
        self.phone = phone or None
        self.customer = customer
        self.user = user
        self.website = website


class CreateReturnCommand:
    """提交退货申请"""

    def __init__(
        self,
        order_id: Any,
        order_product_id: Any,
        first_name: str,
        last_name: str,
        quantity: int,
        return_reason: str,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        return_reason_details: Optional[str] = None,
        is_product_opened: Optional[str] = None,
        iban: Optional[str] = None,
        customer: Any = None,
        user: Any = None,
        website: Optional[str] = None
    ):
        self.order_id = order_id
        self.order_product_id = order_product_id
        self.first_name = first_name
        self.last_name = last_name
        self.quantity = quantity
        self.return_reason = return_reason
        self.email = email or None
        self.phone = phone or None
        self.return_reason_details = return_reason_details or ''
        self.is_product_opened = is_product_opened or ''
        self.iban = iban or ''
        self.customer = customer
        self.user = user
        self.website = website

    @property
    def is_guest(self) -> bool:
        return self.user is None


class UpdateReturnCommand:
    """后台修改退货单的单个属性"""

    def __init__(self, return_id: Any, value: Any, user_id: Any = None):
        self.return_id = return_id
        self.value = value
        self.user_id = user_id
