"""
商品目录基础设施层数据库模型。
定义货币、增值税税率、品牌、分类、商品、分组阶梯价和收藏夹的Django ORM模型。
"""
import uuid
from decimal import Decimal
from django.db import models

from catalog.domain.value_objects import ProductType
from customers.infrastructure.models.customer_models import Country, Customer, CustomerGroup


class Currency(models.Model):
    """货币，value 为1单位该货币对应的列伊数"""
    code = models.CharField(max_length=3, unique=True, verbose_name="货币代码")
    name = models.CharField(max_length=50, verbose_name="货币名称")
    symbol = models.CharField(max_length=10, blank=True, verbose_name="货币符号")
    value = models.DecimalField(max_digits=15, decimal_places=6, default=Decimal('1'), verbose_name="汇率")
    status = models.BooleanField(default=True, verbose_name="是否启用")
    updated_at = models.DateTimeField(auto_now=True, verbose_name="更新时间")

    class Meta:
        db_table = 'currency'
        verbose_name = "货币"
        verbose_name_plural = "货币"
        ordering = ['code']

    def __str__(self):
        return self.code


class VatRate(models.Model):
    """国家增值税税率(百分比)"""
    country = models.ForeignKey(Country, on_delete=models.CASCADE, related_name='vat_rates', verbose_name="国家")
    rate = models.DecimalField(max_digits=5, decimal_places=2, verbose_name="税率")

    class Meta:
        db_table = 'vat_rate'
        verbose_name = "增值税税率"
        verbose_name_plural = "增值税税率"

    def __str__(self):
        return f"{self.country_id}: {self.rate}%"


class Brand(models.Model):
    """品牌"""
    name = models.CharField(max_length=100, verbose_name="品牌名称")
    slug = models.SlugField(max_length=120, unique=True, verbose_name="别名")

    class Meta:
        db_table = 'brand'
        verbose_name = "品牌"
        verbose_name_plural = "品牌"
        ordering = ['name']

    def __str__(self):
        return self.name


class Category(models.Model):
    """商品分类"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100, verbose_name="分类名称")
    slug = models.SlugField(max_length=120, unique=True, verbose_name="别名")
    description = models.TextField(blank=True, verbose_name="分类描述")
    parent = models.ForeignKey(
        'self',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='children',
        verbose_name="父分类"
    )
    status = models.BooleanField(default=True, verbose_name="是否启用")
    sort_order = models.IntegerField(default=0, verbose_name="排序")
    created_at = models.DateTimeField(auto_now_add=True, verbose_name="创建时间")
    updated_at = models.DateTimeField(auto_now=True, verbose_name="更新时间")

    class Meta:
        db_table = 'category'
        verbose_name = "商品分类"
        verbose_name_plural = "商品分类"
        ordering = ['sort_order', 'name']
        indexes = [
            models.Index(fields=['parent'], name='idx_category_parent'),
        ]

    def __str__(self):
        return self.name


class Product(models.Model):
    """商品，price_ron 为不含税的列伊价格"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    sku = models.CharField(max_length=100, unique=True, verbose_name="SKU")
    ean = models.CharField(max_length=20, blank=True, verbose_name="EAN")
    model = models.CharField(max_length=100, blank=True, verbose_name="型号")
    name = models.CharField(max_length=255, verbose_name="商品名称")
    slug = models.SlugField(max_length=280, blank=True, verbose_name="别名")
    description = models.TextField(blank=True, verbose_name="商品描述")
    short_description = models.CharField(max_length=500, blank=True, verbose_name="简短描述")
    price_ron = models.DecimalField(max_digits=15, decimal_places=2, verbose_name="不含税价格(RON)")
    purchase_price_ron = models.DecimalField(
        max_digits=15, decimal_places=2, null=True, blank=True, verbose_name="采购价(RON)"
    )
    stock_quantity = models.IntegerField(default=0, verbose_name="库存数量")
    weight = models.DecimalField(max_digits=10, decimal_places=3, null=True, blank=True, verbose_name="重量")
    main_image_url = models.CharField(max_length=500, blank=True, verbose_name="主图")
    type = models.CharField(
        max_length=20,
        choices=ProductType.CHOICES,
        default=ProductType.SIMPLE,
        verbose_name="商品类型"
    )
    parent = models.ForeignKey(
        'self',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='variants',
        verbose_name="所属可配置商品"
    )
    status = models.BooleanField(default=True, verbose_name="是否上架")
    brand = models.ForeignKey(
        Brand,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='products',
        verbose_name="品牌"
    )
    categories = models.ManyToManyField(Category, blank=True, related_name='products', verbose_name="分类")
    created_at = models.DateTimeField(auto_now_add=True, verbose_name="创建时间")
    updated_at = models.DateTimeField(auto_now=True, verbose_name="更新时间")

    # 版本号，用于乐观锁
    version = models.PositiveIntegerField(default=0, verbose_name="版本号")

    class Meta:
        db_table = 'product'
        verbose_name = "商品"
        verbose_name_plural = "商品"
        indexes = [
            models.Index(fields=['name'], name='idx_product_name'),
            models.Index(fields=['status', 'type'], name='idx_product_status_type'),
            models.Index(fields=['status', 'price_ron'], name='idx_product_status_price'),
            models.Index(fields=['stock_quantity'], name='idx_product_stock'),
        ]
        constraints = [
            models.CheckConstraint(condition=models.Q(price_ron__gte=0), name='price_ron_gte_0'),
        ]

    def __str__(self):
        return self.name

    @property
    def is_purchasable(self) -> bool:
        return self.type in ProductType.PURCHASABLE


class ProductGroupPrice(models.Model):
    """客户分组的数量阶梯价(不含税，RON)"""
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name='group_prices', verbose_name="商品")
    customer_group = models.ForeignKey(
        CustomerGroup, on_delete=models.CASCADE, related_name='product_prices', verbose_name="客户分组"
    )
    min_quantity = models.PositiveIntegerField(default=1, verbose_name="起订数量")
    price_ron = models.DecimalField(max_digits=15, decimal_places=2, verbose_name="价格(RON)")

    class Meta:
        db_table = 'product_group_price'
        verbose_name = "分组阶梯价"
        verbose_name_plural = "分组阶梯价"
        ordering = ['min_quantity']
        constraints = [
            models.UniqueConstraint(
                fields=['product', 'customer_group', 'min_quantity'],
                name='uniq_group_price_tier'
            ),
        ]

    def __str__(self):
        return f"{self.product_id} x{self.min_quantity}: {self.price_ron}"


class WishlistItem(models.Model):
    """客户收藏的商品，规格变体收藏为其可配置商品"""
    customer = models.ForeignKey(Customer, on_delete=models.CASCADE, related_name='wishlist', verbose_name="客户")
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name='wishlisted_by', verbose_name="商品")
    created_at = models.DateTimeField(auto_now_add=True, verbose_name="创建时间")
    updated_at = models.DateTimeField(auto_now=True, verbose_name="更新时间")

    class Meta:
        db_table = 'wishlist'
        verbose_name = "收藏夹"
        verbose_name_plural = "收藏夹"
        constraints = [
            models.UniqueConstraint(fields=['customer', 'product'], name='uniq_wishlist_item'),
        ]

    def __str__(self):
        return f"{self.customer_id}: {self.product_id}"
