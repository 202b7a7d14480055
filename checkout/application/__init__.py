"""
结算应用服务层包。
"""
from checkout.application.commands import SubmitOrderCommand
from checkout.application.checkout_service import CheckoutApplicationService

__all__ = [
    'SubmitOrderCommand',
    'CheckoutApplicationService',
]
