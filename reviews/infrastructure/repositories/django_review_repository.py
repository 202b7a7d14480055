"""
评价仓储的Django实现。
"""
from typing import Any, Dict, List, Optional, Set

from django.db import IntegrityError, transaction
from django.db.models import Count, F

from orders.infrastructure.models.order_models import OrderProduct
from reviews.domain.repositories import ReviewRepository
from reviews.infrastructure.models.review_models import Review, ReviewUseful


class DjangoReviewRepository(ReviewRepository):
    """基于Django ORM的评价仓储"""

    def get_by_id(self, id: Any) -> Optional[Review]:
        try:
            return Review.objects.get(id=id)
        except (Review.DoesNotExist, ValueError, TypeError):
            return None

    def save(self, entity: Review) -> Review:
        entity.save()
        return entity

    def delete(self, entity: Review) -> None:
        entity.delete()

    def create(self, **fields) -> Optional[Review]:
        try:
            with transaction.atomic():
                return Review.objects.create(**fields)
        except IntegrityError:
            # 并发提交时由唯一约束兜底
            return None

    def exists_for(self, customer_id: Any, product_id: Any) -> bool:
        return Review.objects.filter(customer_id=customer_id, product_id=product_id).exists()

    def latest_order_id_with_product(self, customer_id: Any, product_id: Any) -> Optional[int]:
        return (
            OrderProduct.objects
            .filter(order__customer_id=customer_id, product_id=product_id)
            .order_by('-order__created_at', '-id')
            .values_list('order_id', flat=True)
            .first()
        )

    def list_approved_for_product(self, product_id: Any, limit: int) -> List[Review]:
        return list(
            Review.objects.select_related('customer__user')
            .filter(product_id=product_id, is_approved=True)
            .order_by('-created_at', '-id')[:limit]
        )

    def rating_counts(self, product_id: Any) -> Dict[int, int]:
        rows = (
            Review.objects.filter(product_id=product_id, is_approved=True)
            .values('rating')
            .annotate(total=Count('id'))
        )
        return {row['rating']: row['total'] for row in rows}

    def list_for_customer(self, customer_id: Any) -> List[Review]:
        return list(
            Review.objects.select_related('product')
            .filter(customer_id=customer_id)
            .order_by('-created_at', '-id')
        )

    def marked_useful_ids(self, customer_id: Any, review_ids: List[Any]) -> Set[Any]:
        if not review_ids:
            return set()
        return set(
            ReviewUseful.objects.filter(customer_id=customer_id, review_id__in=review_ids)
            .values_list('review_id', flat=True)
        )

    def mark_useful(self, review: Review, customer_id: Any) -> Optional[int]:
        _, created = ReviewUseful.objects.get_or_create(review=review, customer_id=customer_id)
        if not created:
            return None
        Review.objects.filter(id=review.id).update(useful_count=F('useful_count') + 1)
        return Review.objects.values_list('useful_count', flat=True).get(id=review.id)
