"""
数据库购物车存储，用于已登录客户。
"""
from typing import Any, Optional

from loguru import logger

from cart.domain import CartStore, CartStatus, CartLine, ShoppingCart
from cart.infrastructure.models.cart_models import Cart, CartItem


class DjangoCartStore(CartStore):
    """
    把购物车保存在 cart / cart_item 表中。

    行的键使用客户当前的分组。
    """

    def __init__(self, customer: Any, session_key: Optional[str] = None):
        self.customer = customer
        self.session_key = session_key or ''

    def _active_cart(self) -> Optional[Cart]:
        return Cart.objects.filter(customer_id=self.customer.id, status=CartStatus.ACTIVE).first()

    def load(self) -> ShoppingCart:
        cart_model = self._active_cart()
        if cart_model is None:
            return ShoppingCart()

        group_id = self.customer.customer_group_id
        lines = {}
        for item in cart_model.items.all():
            key = ShoppingCart.cart_key(item.product_id, group_id)
            lines[key] = CartLine(item.product_id, item.quantity, group_id)
        return ShoppingCart(lines, id=cart_model.id)

    def save(self, cart: ShoppingCart) -> None:
        cart_model, created = Cart.objects.get_or_create(
            customer_id=self.customer.id,
            status=CartStatus.ACTIVE,
            defaults={
                'customer_group_id': self.customer.customer_group_id,
                'session_id': self.session_key,
            }
        )
        if not created:
            cart_model.customer_group_id = self.customer.customer_group_id
            if self.session_key:
                cart_model.session_id = self.session_key
            cart_model.save(update_fields=['customer_group_id', 'session_id', 'updated_at'])

        # 同一商品可能以不同分组出现，入库时合并为一行
        quantities = {}
        for product_id, quantity in cart.product_quantities():
            quantities[product_id] = quantities.get(product_id, 0) + quantity

        CartItem.objects.filter(cart=cart_model).delete()
        CartItem.objects.bulk_create([
            CartItem(cart=cart_model, product_id=product_id, quantity=quantity)
            for product_id, quantity in quantities.items()
        ])

    def discard(self) -> None:
        cart_model = self._active_cart()
        if cart_model is None:
            return
        CartItem.objects.filter(cart=cart_model).delete()
        cart_model.status = CartStatus.CONVERTED
        cart_model.save(update_fields=['status', 'updated_at'])
        logger.info(f"客户{self.customer.id}的购物车{cart_model.id}已转为订单")
