"""
商品评价应用服务。
客户提交评价、标记评价有用，商品页读取评价和评分统计。
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, Optional

from loguru import logger

from core.domain.exceptions import EntityNotFoundException
from core.infrastructure.transaction import TransactionManager

from catalog.domain import ProductRepository
from reviews.domain import AlreadyMarkedUsefulException, DuplicateReviewException, ReviewRepository
from reviews.domain.config import MAX_RATING, MIN_RATING, PRODUCT_REVIEWS_LIMIT
from reviews.application.commands import CreateReviewCommand
from reviews.application.dtos import ReviewDTO, own_review_dict, public_review_dict


class ReviewApplicationService:
    """
    商品评价应用服务。
    """

    def __init__(
        self,
        review_repository: ReviewRepository,
        product_repository: ProductRepository,
        transaction_manager: TransactionManager
    ):
        self.review_repository = review_repository
        self.product_repository = product_repository
        self.transaction_manager = transaction_manager

    def _get_product_or_raise(self, product_id: Any) -> Any:
        product = self.product_repository.get_by_id(product_id)
        if not product:
            raise EntityNotFoundException("商品", product_id)
        return product

    def create_review(self, command: CreateReviewCommand) -> Dict[str, Any]:
        """
        提交评价。

        客户买过该商品时评价标记为已购买，并关联最近一次包含该商品的订单。
        评价提交后直接展示。

        Raises:
            EntityNotFoundException: 商品不存在
            DuplicateReviewException: 客户已经评价过该商品
        """
        product = self._get_product_or_raise(command.product_id)
        if self.review_repository.exists_for(command.customer_id, product.id):
            raise DuplicateReviewException(product.id)

        order_id = self.review_repository.latest_order_id_with_product(command.customer_id, product.id)
        review = self.review_repository.create(
            customer_id=command.customer_id,
            product_id=product.id,
            order_id=order_id,
            rating=command.rating,
            comment=command.comment,
            is_verified_purchase=order_id is not None,
            is_approved=True,
        )
        if review is None:
            raise DuplicateReviewException(product.id)

        logger.info(
            f"客户{command.customer_id}评价商品 {product.id}: rating={review.rating}, "
            f"verified={review.is_verified_purchase}"
        )
        return ReviewDTO.from_model(review).to_dict()

    def get_product_stats(self, product_id: Any) -> Dict[str, Any]:
        """
        商品已审核评价的统计。

        Returns:
            total_reviews, average_rating(保留一位小数), rating_distribution(5分到1分)
        """
        counts = self.review_repository.rating_counts(product_id)
        total = sum(counts.values())
        average = Decimal('0')
        if total:
            average = Decimal(sum(rating * count for rating, count in counts.items())) / Decimal(total)
        return {
            'total_reviews': total,
            'average_rating': float(average.quantize(Decimal('0.1'), rounding=ROUND_HALF_UP)),
            'rating_distribution': {
                rating: counts.get(rating, 0) for rating in range(MAX_RATING, MIN_RATING - 1, -1)
            },
        }

    def get_product_reviews(self, product_id: Any, customer_id: Optional[Any] = None) -> Dict[str, Any]:
        """
        商品页的评价列表和统计，最新的在前。

        Args:
            product_id: 商品ID
            customer_id: 当前客户ID，用于标出已标记有用的评价，访客为None
        """
        product = self._get_product_or_raise(product_id)
        reviews = self.review_repository.list_approved_for_product(product.id, PRODUCT_REVIEWS_LIMIT)
        marked = set()
        if customer_id is not None:
            marked = self.review_repository.marked_useful_ids(customer_id, [r.id for r in reviews])
        return {
            'reviews': [public_review_dict(r, r.id in marked) for r in reviews],
            'stats': self.get_product_stats(product.id),
        }

    def list_customer_reviews(self, customer_id: Any) -> List[Dict[str, Any]]:
        return [own_review_dict(r) for r in self.review_repository.list_for_customer(customer_id)]

    def mark_useful(self, review_id: Any, customer_id: Any) -> Dict[str, Any]:
        """
        标记评价有用，每个客户每条评价只能标记一次。

        Raises:
            EntityNotFoundException: 评价不存在
            AlreadyMarkedUsefulException: 已经标记过
        """
        review = self.review_repository.get_by_id(review_id)
        if not review:
            raise EntityNotFoundException("评价", review_id)

        with self.transaction_manager.start():
            useful_count = self.review_repository.mark_useful(review, customer_id)
        if useful_count is None:
            raise AlreadyMarkedUsefulException(review.id, review.useful_count)

        logger.debug(f"客户{customer_id}标记评价 {review.id} 有用")
        return {'review_id': review.id, 'useful_count': useful_count}
