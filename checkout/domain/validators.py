"""
自提点数据校验。
自提点数据由前端的快递柜地图组件提交，保存到会话和订单之前需要校验结构和长度。
"""
from typing import Any, Dict, List

from rest_framework import serializers

from customers.models import Country


class LockerDetailsSerializer(serializers.Serializer):
    """快递柜地址和坐标"""
    address = serializers.CharField(max_length=500, required=False, allow_blank=True, allow_null=True)
    city = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)
    county_name = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)
    county_code = serializers.CharField(max_length=10, required=False, allow_blank=True, allow_null=True)
    zip_code = serializers.CharField(max_length=20, required=False, allow_blank=True, allow_null=True)
    country_id = serializers.PrimaryKeyRelatedField(queryset=Country.objects.all(), required=False, allow_null=True)
    lat = serializers.FloatField(min_value=-90, max_value=90, required=False, allow_null=True)
    long = serializers.FloatField(min_value=-180, max_value=180, required=False, allow_null=True)

    def validate(self, attrs):
        # 会话和订单中只保存国家ID
        country = attrs.get('country_id')
        if country is not None:
            attrs['country_id'] = country.pk
        return attrs


class CourierDataSerializer(serializers.Serializer):
    """选中的自提点"""
    point_id = serializers.CharField(max_length=255)
    point_name = serializers.CharField(max_length=255)
    provider = serializers.CharField(max_length=255)
    locker_details = LockerDetailsSerializer(required=False, allow_null=True)


def _flatten(errors: Any, prefix: str) -> Dict[str, List[str]]:
    if isinstance(errors, dict):
        flat: Dict[str, List[str]] = {}
        for name, value in errors.items():
            key = prefix if name == 'non_field_errors' else f"{prefix}.{name}"
            flat.update(_flatten(value, key))
        return flat
    return {prefix: [str(message) for message in errors]}


def validate_courier_data(courier_data: Any) -> Dict[str, List[str]]:
    """
    校验会话中保存的自提点数据。

    Returns:
        字段路径(例如 courier_data.locker_details.lat) -> 错误消息列表，没有错误时为空字典
    """
    serializer = CourierDataSerializer(data=courier_data)
    if serializer.is_valid():
        return {}
    return _flatten(serializer.errors, 'courier_data')
