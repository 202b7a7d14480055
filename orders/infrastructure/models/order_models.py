"""
订单基础设施层数据库模型。
定义支付方式、配送方式、订单、订单行、地址快照、配送信息和订单历史的Django ORM模型。
"""
from decimal import Decimal
from django.conf import settings
from django.core.serializers.json import DjangoJSONEncoder
from django.db import models

from orders.domain.value_objects import OrderStatus, ShippingMethodType, OrderAddressType
from customers.infrastructure.models.customer_models import Country, Customer
from catalog.infrastructure.models.catalog_models import Product


class PaymentMethod(models.Model):
    """支付方式"""
    code = models.CharField(max_length=50, unique=True, verbose_name="支付方式编码")
    name = models.CharField(max_length=100, verbose_name="支付方式名称")
    description = models.TextField(blank=True, verbose_name="说明")
    is_active = models.BooleanField(default=True, verbose_name="是否启用")
    sort_order = models.IntegerField(default=0, verbose_name="排序")

    class Meta:
        db_table = 'payment_method'
        verbose_name = "支付方式"
        verbose_name_plural = "支付方式"
        ordering = ['sort_order', 'name']

    def __str__(self):
        return self.name


class ShippingMethod(models.Model):
    """配送方式，cost 为含税列伊运费"""
    name = models.CharField(max_length=100, verbose_name="配送方式名称")
    type = models.CharField(
        max_length=20,
        choices=ShippingMethodType.CHOICES,
        default=ShippingMethodType.COURIER,
        verbose_name="配送类型"
    )
    cost = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0'), verbose_name="运费(含税)")
    is_active = models.BooleanField(default=True, verbose_name="是否启用")
    sort_order = models.IntegerField(default=0, verbose_name="排序")

    class Meta:
        db_table = 'shipping_method'
        verbose_name = "配送方式"
        verbose_name_plural = "配送方式"
        ordering = ['sort_order', 'name']

    def __str__(self):
        return self.name

    @property
    def is_pickup(self) -> bool:
        return self.type == ShippingMethodType.PICKUP


def money_field(verbose_name):
    return models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0'), verbose_name=verbose_name)


class Order(models.Model):
    """订单，金额字段在下单时冻结"""
    customer = models.ForeignKey(
        Customer,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='orders',
        verbose_name="客户"
    )
    order_number = models.CharField(max_length=32, unique=True, verbose_name="订单号")
    invoice_series = models.CharField(max_length=20, blank=True, verbose_name="发票系列")
    invoice_number = models.CharField(max_length=50, blank=True, verbose_name="发票号")
    currency = models.CharField(max_length=3, default='RON', verbose_name="货币")
    exchange_rate = models.DecimalField(max_digits=15, decimal_places=4, default=Decimal('1'), verbose_name="汇率")
    vat_rate_applied = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal('0'), verbose_name="平均税率")
    is_vat_exempt = models.BooleanField(default=False, verbose_name="是否免增值税")
    total_excl_vat = money_field("不含税合计")
    total_incl_vat = money_field("含税合计")
    total_ron_excl_vat = money_field("不含税合计(列伊)")
    total_ron_incl_vat = money_field("含税合计(列伊)")
    payment_method = models.ForeignKey(
        PaymentMethod,
        on_delete=models.PROTECT,
        null=True,
        related_name='orders',
        verbose_name="支付方式"
    )
    status = models.CharField(
        max_length=20,
        choices=OrderStatus.CHOICES,
        default=OrderStatus.PENDING,
        verbose_name="订单状态"
    )
    is_paid = models.BooleanField(default=False, verbose_name="是否已支付")
    paid_at = models.DateTimeField(null=True, blank=True, verbose_name="支付时间")
    created_at = models.DateTimeField(auto_now_add=True, verbose_name="创建时间")
    updated_at = models.DateTimeField(auto_now=True, verbose_name="更新时间")

    class Meta:
        db_table = 'shop_order'
        verbose_name = "订单"
        verbose_name_plural = "订单"
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status'], name='idx_order_status'),
            models.Index(fields=['created_at'], name='idx_order_created'),
            models.Index(fields=['customer', 'created_at'], name='idx_order_customer_created'),
        ]

    def __str__(self):
        return self.order_number

    @property
    def has_invoice(self) -> bool:
        return bool(self.invoice_number)

    def address_of_type(self, address_type: str):
        for address in self.addresses.all():
            if address.type == address_type:
                return address
        return None

    @property
    def shipping_address(self):
        return self.address_of_type(OrderAddressType.SHIPPING)

    @property
    def billing_address(self):
        return self.address_of_type(OrderAddressType.BILLING)


class OrderProduct(models.Model):
    """订单行，商品名称和编码为下单时的快照"""
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name='products', verbose_name="订单")
    product = models.ForeignKey(
        Product,
        on_delete=models.SET_NULL,
        null=True,
        related_name='order_lines',
        verbose_name="商品"
    )
    name = models.CharField(max_length=255, verbose_name="商品名称")
    sku = models.CharField(max_length=100, verbose_name="SKU")
    ean = models.CharField(max_length=50, blank=True, verbose_name="EAN")
    quantity = models.PositiveIntegerField(verbose_name="数量")
    vat_percent = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal('0'), verbose_name="税率")
    exchange_rate = models.DecimalField(max_digits=15, decimal_places=4, default=Decimal('1'), verbose_name="汇率")
    unit_price_currency = money_field("含税单价")
    unit_price_ron = money_field("含税单价(列伊)")
    unit_price_ron_excl_vat = money_field("不含税单价(列伊)")
    unit_purchase_price_ron = money_field("进货单价(列伊)")
    total_currency_excl_vat = money_field("不含税小计")
    total_currency_incl_vat = money_field("含税小计")
    total_ron_excl_vat = money_field("不含税小计(列伊)")
    total_ron_incl_vat = money_field("含税小计(列伊)")
    profit_ron = money_field("毛利(列伊)")

    class Meta:
        db_table = 'order_product'
        verbose_name = "订单商品"
        verbose_name_plural = "订单商品"
        ordering = ['id']

    def __str__(self):
        return f"{self.name} x {self.quantity}"


class OrderAddress(models.Model):
    """订单地址快照"""
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name='addresses', verbose_name="订单")
    type = models.CharField(max_length=20, choices=OrderAddressType.CHOICES, verbose_name="地址类型")
    company_name = models.CharField(max_length=255, blank=True, verbose_name="公司名称")
    fiscal_code = models.CharField(max_length=255, blank=True, verbose_name="税号")
    reg_number = models.CharField(max_length=255, blank=True, verbose_name="注册号")
    first_name = models.CharField(max_length=255, verbose_name="名")
    last_name = models.CharField(max_length=255, verbose_name="姓")
    phone = models.CharField(max_length=255, blank=True, verbose_name="电话")
    email = models.EmailField(max_length=255, blank=True, verbose_name="邮箱")
    address_line_1 = models.CharField(max_length=500, verbose_name="地址行1")
    address_line_2 = models.CharField(max_length=500, blank=True, verbose_name="地址行2")
    city = models.CharField(max_length=255, blank=True, verbose_name="城市")
    county_name = models.CharField(max_length=255, blank=True, verbose_name="州县名称")
    county_code = models.CharField(max_length=10, blank=True, verbose_name="州县编码")
    country = models.ForeignKey(
        Country,
        on_delete=models.PROTECT,
        null=True,
        related_name='order_addresses',
        verbose_name="国家"
    )
    zip_code = models.CharField(max_length=20, blank=True, verbose_name="邮编")

    class Meta:
        db_table = 'order_address'
        verbose_name = "订单地址"
        verbose_name_plural = "订单地址"
        constraints = [
            models.UniqueConstraint(fields=['order', 'type'], name='uniq_order_address_type'),
        ]

    def __str__(self):
        return f"{self.first_name} {self.last_name}, {self.city}"


class OrderShipping(models.Model):
    """订单配送信息"""
    order = models.OneToOneField(Order, on_delete=models.CASCADE, related_name='shipping', verbose_name="订单")
    shipping_method = models.ForeignKey(
        ShippingMethod,
        on_delete=models.SET_NULL,
        null=True,
        related_name='order_shippings',
        verbose_name="配送方式"
    )
    title = models.CharField(max_length=255, verbose_name="配送方式名称")
    shipping_cost_excl_vat = money_field("不含税运费")
    shipping_cost_incl_vat = money_field("含税运费")
    shipping_cost_ron_excl_vat = money_field("不含税运费(列伊)")
    shipping_cost_ron_incl_vat = money_field("含税运费(列伊)")
    tracking_number = models.CharField(max_length=100, blank=True, verbose_name="快递单号")
    pickup_point_id = models.CharField(max_length=255, blank=True, verbose_name="自提点ID")
    courier_data = models.JSONField(null=True, blank=True, encoder=DjangoJSONEncoder, verbose_name="自提点数据")

    class Meta:
        db_table = 'order_shipping'
        verbose_name = "订单配送"
        verbose_name_plural = "订单配送"

    def __str__(self):
        return self.title

    @property
    def is_pickup(self) -> bool:
        if self.shipping_method is not None and self.shipping_method.is_pickup:
            return True
        return bool(self.pickup_point_id)


class OrderHistory(models.Model):
    """订单操作历史"""
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name='history', verbose_name="订单")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='order_history',
        verbose_name="操作人"
    )
    action = models.CharField(max_length=50, verbose_name="动作")
    old_value = models.JSONField(null=True, blank=True, encoder=DjangoJSONEncoder, verbose_name="旧值")
    new_value = models.JSONField(null=True, blank=True, encoder=DjangoJSONEncoder, verbose_name="新值")
    description = models.TextField(blank=True, verbose_name="说明")
    created_at = models.DateTimeField(auto_now_add=True, verbose_name="创建时间")

    class Meta:
        db_table = 'order_history'
        verbose_name = "订单历史"
        verbose_name_plural = "订单历史"
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['order', 'action'], name='idx_order_history_action'),
        ]

    def __str__(self):
        return f"{self.order_id}: {self.action}"
