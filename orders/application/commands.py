"""
订单应用服务层的命令对象。
"""
from typing import Any, Dict, List, Optional


class PlaceOrderCommand:
    """
    由购物车下单的命令。

    地址可以是客户保存的地址(带 to_snapshot 方法)，也可以是访客在会话中填写的字典。
    """

    def __init__(
        self,
        cart_store: Any,
        cart: Any,
        shipping_method: Any,
        payment_method: Any,
        billing_address: Any,
        shipping_address: Any = None,
        pickup_data: Optional[Dict[str, Any]] = None,
        customer: Any = None,
        user: Any = None,
        currency_code: Optional[str] = None,
        guest_email: Optional[str] = None,
        idempotency_key: Optional[str] = None
    ):
        """
        Args:
            cart_store: 购物车存储，下单成功后清空
            cart: 已读取的购物车
            shipping_method: 配送方式
            payment_method: 支付方式
            billing_address: 账单地址
            shipping_address: 收货地址，自提时为None
            pickup_data: 自提点数据，包含 courier_data 和可选的 shipping_address
            customer: 客户，访客下单为None
            user: 登录用户
            currency_code: 下单货币
            guest_email: 访客邮箱，补充到地址快照中
            idempotency_key: 客户端生成的幂等键
        """
        self.cart_store = cart_store
        self.cart = cart
        self.shipping_method = shipping_method
        self.payment_method = payment_method
        self.billing_address = billing_address
        self.shipping_address = shipping_address
        self.pickup_data = pickup_data
        self.customer = customer
        self.user = user
        self.currency_code = currency_code
        self.guest_email = guest_email
        self.idempotency_key = idempotency_key

    @property
    def is_guest(self) -> bool:
        return self.customer is None

    @property
    def customer_group_id(self) -> Optional[int]:
        return self.customer.customer_group_id if self.customer is not None else None

    @property
    def user_id(self) -> Optional[Any]:
        if self.is_guest or self.user is None:
            return None
        return self.user.pk


class UpdateOrderCommand:
    """后台单项修改订单命令"""

    def __init__(self, order_number: str, action: str, data: Dict[str, Any], user_id: Any = None):
        """
        Args:
            order_number: 订单号
            action: add_product / update_quantity / remove_product / update_address / update_status
            data: 该操作的参数
            user_id: 操作人
        """
        self.order_number = order_number
        self.action = action
        self.data = data
        self.user_id = user_id


class BatchUpdateOrderCommand:
    """后台批量修改订单命令，所有修改在一个事务中执行"""

    def __init__(
        self,
        order_number: str,
        changes: List[Dict[str, Any]],
        original_updated_at: Optional[str] = None,
        user_id: Any = None
    ):
        self.order_number = order_number
        self.changes = changes
        self.original_updated_at = original_updated_at
        self.user_id = user_id
