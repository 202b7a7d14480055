"""
购物车基础设施层数据库模型。
已登录客户的购物车保存在这里，访客购物车只保存在会话中。
"""
import uuid
from django.db import models

from cart.domain.value_objects import CartStatus
from catalog.infrastructure.models.catalog_models import Product
from customers.infrastructure.models.customer_models import Customer, CustomerGroup


class Cart(models.Model):
    """客户购物车，每个客户最多一个 active 购物车"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    customer = models.ForeignKey(Customer, on_delete=models.CASCADE, related_name='carts', verbose_name="客户")
    customer_group = models.ForeignKey(
        CustomerGroup, on_delete=models.SET_NULL, null=True, blank=True, verbose_name="客户分组"
    )
    session_id = models.CharField(max_length=64, blank=True, verbose_name="会话ID")
    status = models.CharField(
        max_length=20, choices=CartStatus.CHOICES, default=CartStatus.ACTIVE, verbose_name="状态"
    )
    created_at = models.DateTimeField(auto_now_add=True, verbose_name="创建时间")
    updated_at = models.DateTimeField(auto_now=True, verbose_name="更新时间")

    class Meta:
        db_table = 'cart'
        verbose_name = "购物车"
        verbose_name_plural = "购物车"
        indexes = [
            models.Index(fields=['customer', 'status'], name='idx_cart_customer_status'),
        ]

    def __str__(self):
        return f"{self.customer_id} ({self.status})"


class CartItem(models.Model):
    """购物车商品行"""
    cart = models.ForeignKey(Cart, on_delete=models.CASCADE, related_name='items', verbose_name="购物车")
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name='cart_items', verbose_name="商品")
    quantity = models.PositiveIntegerField(default=1, verbose_name="数量")
    created_at = models.DateTimeField(auto_now_add=True, verbose_name="创建时间")

    class Meta:
        db_table = 'cart_item'
        verbose_name = "购物车商品"
        verbose_name_plural = "购物车商品"
        constraints = [
            models.UniqueConstraint(fields=['cart', 'product'], name='uniq_cart_product'),
        ]

    def __str__(self):
        return f"{self.product_id} x{self.quantity}"
