"""
商品目录API序列化器。
"""
from decimal import Decimal

from rest_framework import serializers
from django.core.validators import MinValueValidator

from catalog.domain import ProductType, ProductSort


class ProductListQuerySerializer(serializers.Serializer):
    """前台商品列表查询参数"""
    search = serializers.CharField(max_length=200, required=False, allow_blank=True)
    category = serializers.CharField(max_length=120, required=False, allow_blank=True)
    brand = serializers.CharField(max_length=120, required=False, allow_blank=True)
    min_price = serializers.DecimalField(max_digits=15, decimal_places=2, required=False,
                                         validators=[MinValueValidator(0)])
    max_price = serializers.DecimalField(max_digits=15, decimal_places=2, required=False,
                                         validators=[MinValueValidator(0)])
    sort = serializers.ChoiceField(choices=ProductSort.ALL, required=False)


class ProductPriceQuerySerializer(serializers.Serializer):
    """商品价格查询参数"""
    quantity = serializers.IntegerField(min_value=1, default=1)


class SetCurrencySerializer(serializers.Serializer):
    """切换货币请求"""
    code = serializers.CharField(max_length=3)


class AdminProductUpdateSerializer(serializers.Serializer):
    """后台修改商品请求，所有字段可选"""
    name = serializers.CharField(max_length=255, required=False)
    description = serializers.CharField(required=False, allow_blank=True)
    short_description = serializers.CharField(max_length=500, required=False, allow_blank=True)
    ean = serializers.CharField(max_length=20, required=False, allow_blank=True)
    price_ron = serializers.DecimalField(
        max_digits=15, decimal_places=2, required=False, validators=[MinValueValidator(Decimal('0'))]
    )
    purchase_price_ron = serializers.DecimalField(
        max_digits=15, decimal_places=2, required=False, allow_null=True,
        validators=[MinValueValidator(Decimal('0'))]
    )
    stock_quantity = serializers.IntegerField(required=False)
    status = serializers.BooleanField(required=False)
    brand_id = serializers.IntegerField(required=False, allow_null=True)
    main_image_url = serializers.CharField(max_length=500, required=False, allow_blank=True)
    category_ids = serializers.ListField(child=serializers.UUIDField(), required=False)
    version = serializers.IntegerField(min_value=0, required=False)


class AdminProductListQuerySerializer(serializers.Serializer):
    """后台商品列表查询参数，status 和 low_stock 由视图解析"""
    search = serializers.CharField(max_length=200, required=False, allow_blank=True)
    type = serializers.ChoiceField(choices=ProductType.CHOICES, required=False)
    brand_id = serializers.IntegerField(required=False)
    category_id = serializers.UUIDField(required=False)


class CategorySerializer(serializers.Serializer):
    """新建或修改分类请求"""
    name = serializers.CharField(max_length=100)
    slug = serializers.SlugField(max_length=120, required=False, allow_blank=True, default='')
    description = serializers.CharField(required=False, allow_blank=True, default='')
    parent_id = serializers.UUIDField(required=False, allow_null=True, default=None)
    status = serializers.BooleanField(required=False, default=True)
    sort_order = serializers.IntegerField(required=False, default=0)


class WishlistAddSerializer(serializers.Serializer):
    """收藏商品请求"""
    product_id = serializers.UUIDField()
