"""
数据库购物车维护操作的Django实现。
"""
from typing import Any

from cart.domain import CartRepository, CartStatus
from cart.infrastructure.models.cart_models import Cart, CartItem


class DjangoCartRepository(CartRepository):

    def delete_converted_before(self, cutoff: Any) -> int:
        # 购物车转为订单时会更新 updated_at
        cart_ids = list(
            Cart.objects.filter(status=CartStatus.CONVERTED, updated_at__lt=cutoff).values_list('id', flat=True)
        )
        if not cart_ids:
            return 0
        CartItem.objects.filter(cart_id__in=cart_ids).delete()
        _, per_model = Cart.objects.filter(id__in=cart_ids).delete()
        return per_model.get(Cart._meta.label, 0)
