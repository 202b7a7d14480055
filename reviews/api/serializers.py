"""
评价API序列化器。
"""
from rest_framework import serializers

from reviews.domain.config import COMMENT_MAX_LENGTH, MAX_RATING, MIN_RATING


class CreateReviewSerializer(serializers.Serializer):
    """提交评价请求"""
    product_id = serializers.UUIDField()
    rating = serializers.IntegerField(min_value=MIN_RATING, max_value=MAX_RATING)
    comment = serializers.CharField(
        max_length=COMMENT_MAX_LENGTH, required=False, allow_blank=True, allow_null=True, default=None
    )
