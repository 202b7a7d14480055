"""
评价基础设施层数据库模型。
"""
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from catalog.infrastructure.models.catalog_models import Product
from customers.infrastructure.models.customer_models import Customer
from orders.infrastructure.models.order_models import Order
from reviews.domain.config import MAX_RATING, MIN_RATING


class Review(models.Model):
    """商品评价，每个客户对每个商品一条"""
    customer = models.ForeignKey(Customer, on_delete=models.CASCADE, related_name='reviews', verbose_name="客户")
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name='reviews', verbose_name="商品")
    order = models.ForeignKey(
        Order,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='reviews',
        verbose_name="购买订单"
    )
    rating = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(MIN_RATING), MaxValueValidator(MAX_RATING)],
        verbose_name="评分"
    )
    comment = models.TextField(null=True, blank=True, verbose_name="评价内容")
    is_verified_purchase = models.BooleanField(default=False, verbose_name="是否已购买")
    useful_count = models.PositiveIntegerField(default=0, verbose_name="有用数")
    is_approved = models.BooleanField(default=True, verbose_name="是否已审核")
    created_at = models.DateTimeField(auto_now_add=True, verbose_name="创建时间")
    updated_at = models.DateTimeField(auto_now=True, verbose_name="更新时间")

    class Meta:
        db_table = 'review'
        verbose_name = "商品评价"
        verbose_name_plural = "商品评价"
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(fields=['customer', 'product'], name='uniq_review_customer_product'),
        ]
        indexes = [
            models.Index(fields=['product', 'is_approved'], name='idx_review_product_approved'),
        ]

    def __str__(self):
        return f"{self.product_id} {self.rating}/{MAX_RATING}"

    @property
    def customer_name(self) -> str:
        user = self.customer.user
        return f"{user.first_name} {user.last_name}".strip()


class ReviewUseful(models.Model):
    """客户把评价标记为有用的记录"""
    review = models.ForeignKey(Review, on_delete=models.CASCADE, related_name='useful_marks', verbose_name="评价")
    customer = models.ForeignKey(Customer, on_delete=models.CASCADE, related_name='useful_marks', verbose_name="客户")
    created_at = models.DateTimeField(auto_now_add=True, verbose_name="创建时间")

    class Meta:
        db_table = 'review_useful'
        verbose_name = "评价有用标记"
        verbose_name_plural = "评价有用标记"
        constraints = [
            models.UniqueConstraint(fields=['review', 'customer'], name='uniq_review_useful_customer'),
        ]
