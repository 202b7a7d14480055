"""
评价基础设施层工厂。
"""
from core.infrastructure.transaction import TransactionManager

from reviews.domain import ReviewRepository
from reviews.infrastructure.repositories.django_review_repository import DjangoReviewRepository


class ReviewInfrastructureFactory:
    """
    评价基础设施层工厂类。
    """

    def __init__(self, transaction_manager: TransactionManager):
        self.transaction_manager = transaction_manager
        self._review_repository = None

    def create_review_repository(self) -> ReviewRepository:
        if not self._review_repository:
            self._review_repository = DjangoReviewRepository()
        return self._review_repository
