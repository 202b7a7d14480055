"""
购物者上下文。
把会话、登录用户和客户资料组合在一起，供购物车、结算和商品价格使用。
"""
from typing import Any, Optional

from django.conf import settings


# 会话中保存当前货币的键
SESSION_CURRENCY_KEY = 'currency'

# 会话中保存结算收货国家的键
SESSION_SHIPPING_COUNTRY_KEY = 'checkout_shipping_country_id'


class ShopperContext:
    """当前请求的购物者"""

    def __init__(self, session: Any, user: Any = None, customer: Any = None):
        self.session = session
        self.user = user
        self.customer = customer

    @classmethod
    def from_request(cls, request) -> 'ShopperContext':
        user = getattr(request, 'user', None)
        customer = None
        if user is not None and user.is_authenticated:
            customer = getattr(user, 'customer', None)
            if customer is not None and not customer.is_active:
                customer = None
        return cls(session=request.session, user=user, customer=customer)

    @property
    def is_customer(self) -> bool:
        return self.customer is not None

    @property
    def customer_id(self) -> Optional[Any]:
        return self.customer.id if self.customer is not None else None

    @property
    def customer_group_id(self) -> Optional[int]:
        return self.customer.customer_group_id if self.customer is not None else None

    @property
    def currency_code(self) -> str:
        default = settings.CHECKOUT_SETTINGS.get('DEFAULT_CURRENCY', 'RON')
        return self.session.get(SESSION_CURRENCY_KEY) or default

    def set_currency(self, code: str) -> None:
        self.session[SESSION_CURRENCY_KEY] = code

    @property
    def shipping_country_id(self) -> Optional[int]:
        """结算时选择的收货国家，没有选择时为None"""
        return self.session.get(SESSION_SHIPPING_COUNTRY_KEY)

    def set_shipping_country(self, country_id: int) -> None:
        self.session[SESSION_SHIPPING_COUNTRY_KEY] = country_id
