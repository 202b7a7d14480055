"""
退货基础设施层数据库模型。
"""
from django.db import models

from returns.domain.value_objects import ReturnStatus, ReturnReason, ProductOpened
from orders.infrastructure.models.order_models import Order, OrderProduct


class ProductReturn(models.Model):
    """退货申请，订单和商品信息在申请时冻结"""
    order = models.ForeignKey(Order, on_delete=models.PROTECT, related_name='returns', verbose_name="订单")
    order_product = models.ForeignKey(
        OrderProduct,
        on_delete=models.PROTECT,
        related_name='returns',
        verbose_name="订单商品"
    )
    return_number = models.CharField(max_length=32, unique=True, verbose_name="退货单号")
    first_name = models.CharField(max_length=255, verbose_name="名")
    last_name = models.CharField(max_length=255, verbose_name="姓")
    email = models.EmailField(max_length=255, verbose_name="邮箱")
    phone = models.CharField(max_length=255, verbose_name="电话")
    order_number = models.CharField(max_length=32, verbose_name="订单号")
    order_date = models.DateField(verbose_name="下单日期")
    product_name = models.CharField(max_length=255, verbose_name="商品名称")
    product_sku = models.CharField(max_length=255, verbose_name="SKU")
    quantity = models.PositiveIntegerField(verbose_name="退货数量")
    return_reason = models.CharField(max_length=30, choices=ReturnReason.CHOICES, verbose_name="退货原因")
    return_reason_details = models.TextField(blank=True, verbose_name="原因说明")
    is_product_opened = models.CharField(
        max_length=3,
        choices=ProductOpened.CHOICES,
        blank=True,
        verbose_name="是否已拆封"
    )
    iban = models.CharField(max_length=255, blank=True, verbose_name="退款账户IBAN")
    refund_amount = models.DecimalField(
        max_digits=15,
        decimal_places=2,
        null=True,
        blank=True,
        verbose_name="退款金额"
    )
    restock_item = models.BooleanField(default=False, verbose_name="是否回库")
    restocked_at = models.DateTimeField(null=True, blank=True, verbose_name="回库时间")
    status = models.CharField(
        max_length=20,
        choices=ReturnStatus.CHOICES,
        default=ReturnStatus.PENDING,
        verbose_name="退货状态"
    )
    created_at = models.DateTimeField(auto_now_add=True, verbose_name="创建时间")
    updated_at = models.DateTimeField(auto_now=True, verbose_name="更新时间")

    class Meta:
        db_table = 'product_return'
        verbose_name = "退货单"
        verbose_name_plural = "退货单"
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status'], name='idx_return_status'),
            models.Index(fields=['order_number'], name='idx_return_order_number'),
        ]

    def __str__(self):
        return self.return_number

    @property
    def customer_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
