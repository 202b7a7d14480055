"""
退货API序列化器。
"""
from rest_framework import serializers

from returns.domain import ReturnStatus, ReturnReason, ProductOpened, ReturnTimeRange
from returns.domain.config import REFUND_AMOUNT_MAX


class SearchOrderSerializer(serializers.Serializer):
    """查找订单，website 为机器人陷阱字段"""
    order_number = serializers.CharField(max_length=32)
    email = serializers.EmailField(max_length=255, required=False, allow_blank=True, allow_null=True)
    phone = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)
    website = serializers.CharField(required=False, allow_blank=True)


class CreateReturnSerializer(serializers.Serializer):
    """退货申请，说明、邮箱和电话是否必填由服务判断"""
    order_id = serializers.IntegerField(min_value=1)
    order_product_id = serializers.IntegerField(min_value=1)
    first_name = serializers.CharField(max_length=255)
    last_name = serializers.CharField(max_length=255)
    email = serializers.EmailField(max_length=255, required=False, allow_blank=True, allow_null=True)
    phone = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)
    quantity = serializers.IntegerField(min_value=1)
    return_reason = serializers.ChoiceField(choices=ReturnReason.CHOICES)
    return_reason_details = serializers.CharField(max_length=1000, required=False, allow_blank=True,
                                                  allow_null=True)
    is_product_opened = serializers.ChoiceField(choices=ProductOpened.CHOICES, required=False, allow_null=True)
    iban = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)
    website = serializers.CharField(required=False, allow_blank=True)


class MyReturnListQuerySerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=['all', *ReturnStatus.values()], required=False, default='all')
    time_range = serializers.ChoiceField(choices=ReturnTimeRange.CHOICES, required=False,
                                         default=ReturnTimeRange.THREE_MONTHS)
    search = serializers.CharField(max_length=100, required=False, allow_blank=True)


class AdminReturnListQuerySerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=ReturnStatus.CHOICES, required=False)
    order_number = serializers.CharField(max_length=32, required=False, allow_blank=True)
    date_from = serializers.DateField(required=False)
    date_to = serializers.DateField(required=False)
    email = serializers.CharField(max_length=255, required=False, allow_blank=True)
    search = serializers.CharField(max_length=100, required=False, allow_blank=True)


class ReturnStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=ReturnStatus.CHOICES)


class RefundAmountSerializer(serializers.Serializer):
    refund_amount = serializers.DecimalField(
        max_digits=15, decimal_places=2, min_value=0, max_value=REFUND_AMOUNT_MAX, allow_null=True
    )


class RestockItemSerializer(serializers.Serializer):
    restock_item = serializers.BooleanField()
