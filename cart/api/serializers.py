"""
购物车API序列化器。
"""
from rest_framework import serializers


class AddToCartSerializer(serializers.Serializer):
    """加入购物车请求"""
    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1, default=1)


class UpdateCartItemSerializer(serializers.Serializer):
    """修改购物车数量请求，数量不大于0表示移除"""
    cart_key = serializers.CharField(max_length=100)
    quantity = serializers.IntegerField()


class RemoveCartItemSerializer(serializers.Serializer):
    """移除购物车商品请求"""
    cart_key = serializers.CharField(max_length=100)
