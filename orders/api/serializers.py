"""
订单API序列化器。
"""
from decimal import Decimal

from django.core.validators import MinValueValidator
from rest_framework import serializers

from orders.domain import OrderAddressType, OrderChangeType, OrderStatus


class MyOrderListQuerySerializer(serializers.Serializer):
    """客户订单历史查询参数"""
    search = serializers.CharField(max_length=100, required=False, allow_blank=True)
    status = serializers.ChoiceField(choices=['all', 'active', 'cancelled'], required=False, default='all')


class AdminOrderListQuerySerializer(serializers.Serializer):
    """后台订单列表查询参数，payment_status 和 has_invoice 由视图解析"""
    filter = serializers.ChoiceField(choices=['all', *OrderStatus.FILTER_GROUPS], required=False, default='all')
    search = serializers.CharField(max_length=100, required=False, allow_blank=True)
    customer_id = serializers.UUIDField(required=False)
    order_status = serializers.ChoiceField(choices=OrderStatus.CHOICES, required=False)
    payment_method_id = serializers.IntegerField(required=False)
    shipping_method_id = serializers.IntegerField(required=False)
    date_from = serializers.DateField(required=False)
    date_to = serializers.DateField(required=False)
    amount_min = serializers.DecimalField(max_digits=12, decimal_places=2, required=False)
    amount_max = serializers.DecimalField(max_digits=12, decimal_places=2, required=False)
    city = serializers.CharField(max_length=255, required=False, allow_blank=True)


class OrderAddressSerializer(serializers.Serializer):
    """后台修改订单地址"""
    first_name = serializers.CharField(max_length=255)
    last_name = serializers.CharField(max_length=255)
    phone = serializers.CharField(max_length=255)
    email = serializers.EmailField(max_length=255, required=False, allow_blank=True)
    company_name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    fiscal_code = serializers.CharField(max_length=255, required=False, allow_blank=True)
    reg_number = serializers.CharField(max_length=255, required=False, allow_blank=True)
    address_line_1 = serializers.CharField(max_length=500)
    address_line_2 = serializers.CharField(max_length=500, required=False, allow_blank=True)
    city = serializers.CharField(max_length=255)
    county_name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    county_code = serializers.CharField(max_length=10, required=False, allow_blank=True)
    zip_code = serializers.CharField(max_length=20)
    country_id = serializers.IntegerField(min_value=1)


class OrderChangeFieldsMixin(serializers.Serializer):
    """单项修改和批量修改共用的参数"""
    product_id = serializers.UUIDField(required=False)
    order_product_id = serializers.IntegerField(required=False)
    quantity = serializers.IntegerField(min_value=1, required=False)
    custom_price_ron = serializers.DecimalField(
        max_digits=12, decimal_places=2, required=False, allow_null=True,
        validators=[MinValueValidator(Decimal('0'))]
    )
    address_type = serializers.ChoiceField(choices=OrderAddressType.CHOICES, required=False)
    address = OrderAddressSerializer(required=False)
    status = serializers.ChoiceField(choices=OrderStatus.CHOICES, required=False)
    is_paid = serializers.BooleanField(required=False)

    # 每种修改必需的参数
    REQUIRED_FIELDS = {
        OrderChangeType.ADD_PRODUCT: ('product_id', 'quantity'),
        OrderChangeType.UPDATE_QUANTITY: ('order_product_id', 'quantity'),
        OrderChangeType.REMOVE_PRODUCT: ('order_product_id',),
        OrderChangeType.UPDATE_ADDRESS: ('address_type', 'address'),
        OrderChangeType.UPDATE_STATUS: ('status',),
        OrderChangeType.UPDATE_PAYMENT_STATUS: ('is_paid',),
    }

    def check_required(self, change_type, attrs):
        missing = [name for name in self.REQUIRED_FIELDS.get(change_type, ()) if attrs.get(name) is None]
        if missing:
            raise serializers.ValidationError({name: ["该操作必须提供此字段"] for name in missing})
        return attrs


class UpdateOrderSerializer(OrderChangeFieldsMixin):
    """后台单项修改订单"""
    action = serializers.ChoiceField(choices=OrderChangeType.SINGLE_ACTIONS)

    def validate(self, attrs):
        return self.check_required(attrs['action'], attrs)


class OrderChangeSerializer(OrderChangeFieldsMixin):
    """批量修改中的一项修改"""
    type = serializers.ChoiceField(choices=OrderChangeType.BATCH_TYPES)

    def validate(self, attrs):
        return self.check_required(attrs['type'], attrs)


class BatchUpdateOrderSerializer(serializers.Serializer):
    """后台批量修改订单"""
    changes = OrderChangeSerializer(many=True, allow_empty=False)
    originalUpdatedAt = serializers.CharField(required=False, allow_blank=True, allow_null=True)
