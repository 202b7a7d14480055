"""
结算API的请求序列化器。
"""
from collections.abc import Mapping

from rest_framework import serializers

from checkout.domain import CourierDataSerializer


class CountrySerializer(serializers.Serializer):
    country_id = serializers.IntegerField(min_value=1)


class GuestContactSerializer(serializers.Serializer):
    email = serializers.EmailField(max_length=255)
    phone = serializers.CharField(max_length=50, required=False, allow_blank=True)


class GuestAddressFieldsSerializer(serializers.Serializer):
    """访客地址表单"""
    first_name = serializers.CharField(max_length=255)
    last_name = serializers.CharField(max_length=255)
    phone = serializers.CharField(max_length=50)
    email = serializers.EmailField(max_length=255, required=False, allow_blank=True)
    company_name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    fiscal_code = serializers.CharField(max_length=50, required=False, allow_blank=True)
    address_line_1 = serializers.CharField(max_length=255)
    address_line_2 = serializers.CharField(max_length=255, required=False, allow_blank=True)
    city = serializers.CharField(max_length=255)
    county_name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    county_code = serializers.CharField(max_length=10, required=False, allow_blank=True)
    country_id = serializers.IntegerField(min_value=1)
    zip_code = serializers.CharField(max_length=20, required=False, allow_blank=True)


class GuestAddressSerializer(serializers.Serializer):
    shipping_address = GuestAddressFieldsSerializer()
    billing_address = GuestAddressFieldsSerializer(required=False)
    use_shipping_as_billing = serializers.BooleanField(default=False)

    def to_internal_value(self, data):
        # 使用收货地址作为账单地址时不校验账单表单
        flag = data.get('use_shipping_as_billing') if isinstance(data, Mapping) else None
        if isinstance(flag, (str, int)) and flag in serializers.BooleanField.TRUE_VALUES and 'billing_address' in data:
            data = data.copy()
            data.pop('billing_address')
        return super().to_internal_value(data)

    def validate(self, attrs):
        if not attrs.get('use_shipping_as_billing') and not attrs.get('billing_address'):
            raise serializers.ValidationError({'billing_address': ["请填写账单地址"]})
        return attrs


class PickupDataSerializer(serializers.Serializer):
    courier_data = CourierDataSerializer()
    shipping_address = serializers.DictField(required=False)


class SubmitOrderSerializer(serializers.Serializer):
    shipping_method_id = serializers.IntegerField(min_value=1)
    payment_method_id = serializers.IntegerField(min_value=1)
    shipping_address_id = serializers.UUIDField(required=False, allow_null=True)
    billing_address_id = serializers.UUIDField(required=False, allow_null=True)
    use_shipping_as_billing = serializers.BooleanField(default=False)
    idempotency_key = serializers.UUIDField(required=False, allow_null=True)
