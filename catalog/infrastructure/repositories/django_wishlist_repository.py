"""
收藏夹仓储的Django实现。
"""
from typing import Any, List

from django.db import IntegrityError, transaction

from catalog.domain import WishlistRepository
from catalog.infrastructure.models.catalog_models import Product, WishlistItem


class DjangoWishlistRepository(WishlistRepository):
    """基于Django ORM的收藏夹仓储"""

    def add(self, customer_id: Any, product_id: Any) -> bool:
        if self.contains(customer_id, product_id):
            return False
        try:
            with transaction.atomic():
                WishlistItem.objects.create(customer_id=customer_id, product_id=product_id)
        except IntegrityError:
            return False
        return True

    def remove(self, customer_id: Any, product_id: Any) -> bool:
        deleted, _ = WishlistItem.objects.filter(customer_id=customer_id, product_id=product_id).delete()
        return deleted > 0

    def contains(self, customer_id: Any, product_id: Any) -> bool:
        return WishlistItem.objects.filter(customer_id=customer_id, product_id=product_id).exists()

    def list_active_products(self, customer_id: Any) -> List[Product]:
        items = (
            WishlistItem.objects.select_related('product__brand', 'product__parent')
            .filter(customer_id=customer_id, product__status=True)
            .order_by('-created_at', '-id')
        )
        return [item.product for item in items]
