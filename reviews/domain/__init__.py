"""
评价领域层包。
"""
from reviews.domain.exceptions import DuplicateReviewException, AlreadyMarkedUsefulException
from reviews.domain.repositories import ReviewRepository

__all__ = [
    'DuplicateReviewException',
    'AlreadyMarkedUsefulException',
    'ReviewRepository',
]
