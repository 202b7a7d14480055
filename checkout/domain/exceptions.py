"""
结算领域异常。
"""
from core.domain.exceptions import BusinessRuleViolationException


class CartEmptyException(BusinessRuleViolationException):
    """购物车为空，不能下单"""

    def __init__(self):
        super().__init__("cart_empty", "Cart is empty.")


class CheckoutInvalidException(BusinessRuleViolationException):
    """结算信息不完整，message 说明第一个未通过的检查"""

    def __init__(self, message: str):
        super().__init__("checkout_invalid", message)
