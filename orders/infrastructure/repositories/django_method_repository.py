"""
基于Django ORM的配送方式和支付方式仓储实现。
"""
from typing import Any, List, Optional

from orders.domain import CheckoutMethodRepository
from orders.infrastructure.models.order_models import PaymentMethod, ShippingMethod


class DjangoCheckoutMethodRepository(CheckoutMethodRepository):

    def get_shipping_method(self, method_id: Any) -> Optional[ShippingMethod]:
        try:
            return ShippingMethod.objects.filter(id=method_id).first()
        except (ValueError, TypeError):
            return None

    def list_shipping_methods(self, active_only: bool = True) -> List[ShippingMethod]:
        queryset = ShippingMethod.objects.all()
        if active_only:
            queryset = queryset.filter(is_active=True)
        return list(queryset)

    def get_payment_method(self, method_id: Any) -> Optional[PaymentMethod]:
        try:
            return PaymentMethod.objects.filter(id=method_id).first()
        except (ValueError, TypeError):
            return None

    def list_payment_methods(self, active_only: bool = True) -> List[PaymentMethod]:
        queryset = PaymentMethod.objects.all()
        if active_only:
            queryset = queryset.filter(is_active=True)
        return list(queryset)
