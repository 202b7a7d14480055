"""
评价应用服务层包。
"""
from reviews.application.commands import CreateReviewCommand
from reviews.application.review_service import ReviewApplicationService

__all__ = [
    'CreateReviewCommand',
    'ReviewApplicationService',
]
