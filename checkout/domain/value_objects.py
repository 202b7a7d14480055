"""
结算领域值对象。
"""


class CheckoutSessionKey:
    """结算流程保存在会话中的数据的键"""
    GUEST_EMAIL = 'checkout_guest_email'
    GUEST_PHONE = 'checkout_guest_phone'
    SHIPPING_ADDRESS = 'checkout_shipping_address'
    BILLING_ADDRESS = 'checkout_billing_address'
    SHIPPING_COUNTRY_ID = 'checkout_shipping_country_id'
    BILLING_COUNTRY_ID = 'checkout_billing_country_id'
    PICKUP_DATA = 'pickup_data'
    LAST_ORDER_ID = 'last_order_id'
