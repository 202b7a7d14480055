"""
结算领域层包。
"""
from checkout.domain.value_objects import CheckoutSessionKey
from checkout.domain.validators import CourierDataSerializer, validate_courier_data
from checkout.domain.exceptions import CartEmptyException, CheckoutInvalidException

__all__ = [
    'CheckoutSessionKey',
    'CourierDataSerializer',
    'validate_courier_data',
    'CartEmptyException',
    'CheckoutInvalidException',
]
