"""
评价数据传输对象。
"""
from typing import Any, Dict, Optional

from reviews.domain.config import ANONYMOUS_NAME


class ReviewDTO:
    """评价DTO"""

    def __init__(self, id: Any, product_id: Any, rating: int, comment: Optional[str],
                 is_verified_purchase: bool, useful_count: int, created_at: Any):
        self.id = id
        self.product_id = product_id
        self.rating = rating
        self.comment = comment
        self.is_verified_purchase = is_verified_purchase
        self.useful_count = useful_count
        self.created_at = created_at

    @classmethod
    def from_model(cls, review: Any) -> 'ReviewDTO':
        return cls(
            id=review.id,
            product_id=review.product_id,
            rating=review.rating,
            comment=review.comment,
            is_verified_purchase=review.is_verified_purchase,
            useful_count=review.useful_count,
            created_at=review.created_at,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'product_id': str(self.product_id),
            'rating': self.rating,
            'comment': self.comment,
            'is_verified_purchase': self.is_verified_purchase,
            'useful_count': self.useful_count,
            'created_at': self.created_at.strftime('%Y-%m-%d %H:%M:%S') if self.created_at else None,
        }


def public_review_dict(review: Any, has_marked_useful: bool) -> Dict[str, Any]:
    """商品页展示的评价，只带评价人姓名"""
    data = ReviewDTO.from_model(review).to_dict()
    data.pop('product_id')
    data['has_marked_useful'] = has_marked_useful
    data['customer_name'] = review.customer_name or ANONYMOUS_NAME
    return data


def own_review_dict(review: Any) -> Dict[str, Any]:
    """客户自己的评价，附带商品简要信息"""
    data = ReviewDTO.from_model(review).to_dict()
    product = review.product
    data['product'] = {
        'id': str(product.id),
        'name': product.name,
        'slug': product.slug,
        'main_image_url': product.main_image_url or None,
    } if product is not None else None
    return data
