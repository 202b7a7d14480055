"""
结算会话存储。
访客联系方式、访客地址、自提点和刚下的订单ID保存在Django会话中。
"""
from typing import Any, Dict, Optional

from checkout.domain import CheckoutSessionKey


class CheckoutSession:
    """结算流程的会话数据"""

    def __init__(self, session):
        self.session = session

    def _get(self, key: str) -> Any:
        return self.session.get(key)

    def _set(self, key: str, value: Any) -> None:
        if value is None:
            self.session.pop(key, None)
        else:
            self.session[key] = value

    @property
    def guest_email(self) -> Optional[str]:
        return self._get(CheckoutSessionKey.GUEST_EMAIL)

    @property
    def guest_phone(self) -> Optional[str]:
        return self._get(CheckoutSessionKey.GUEST_PHONE)

    def save_guest_contact(self, email: str, phone: Optional[str] = None) -> None:
        self._set(CheckoutSessionKey.GUEST_EMAIL, email)
        if phone:
            self._set(CheckoutSessionKey.GUEST_PHONE, phone)

    @property
    def shipping_address(self) -> Optional[Dict[str, Any]]:
        return self._get(CheckoutSessionKey.SHIPPING_ADDRESS)

    @property
    def billing_address(self) -> Optional[Dict[str, Any]]:
        return self._get(CheckoutSessionKey.BILLING_ADDRESS)

    def save_addresses(self, shipping: Optional[Dict[str, Any]], billing: Optional[Dict[str, Any]]) -> None:
        if shipping is not None:
            self._set(CheckoutSessionKey.SHIPPING_ADDRESS, shipping)
        if billing is not None:
            self._set(CheckoutSessionKey.BILLING_ADDRESS, billing)

    @property
    def billing_country_id(self) -> Optional[int]:
        return self._get(CheckoutSessionKey.BILLING_COUNTRY_ID)

    def set_billing_country(self, country_id: Optional[int]) -> None:
        self._set(CheckoutSessionKey.BILLING_COUNTRY_ID, country_id)

    @property
    def pickup_data(self) -> Optional[Dict[str, Any]]:
        return self._get(CheckoutSessionKey.PICKUP_DATA)

    def save_pickup_data(self, pickup_data: Dict[str, Any]) -> None:
        self._set(CheckoutSessionKey.PICKUP_DATA, pickup_data)

    def clear_pickup_data(self) -> None:
        self.session.pop(CheckoutSessionKey.PICKUP_DATA, None)

    def set_last_order(self, order_id: Any) -> None:
        self._set(CheckoutSessionKey.LAST_ORDER_ID, order_id)

    def pop_last_order(self) -> Optional[Any]:
        """取出刚下的订单ID，只能取一次"""
        return self.session.pop(CheckoutSessionKey.LAST_ORDER_ID, None)
