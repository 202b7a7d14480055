"""
评价领域异常。
"""
from core.domain.exceptions import BusinessRuleViolationException


class DuplicateReviewException(BusinessRuleViolationException):
    """每个客户对同一商品只能评价一次"""

    def __init__(self, product_id):
        super().__init__("one_review_per_product", "您已经评价过该商品")
        self.product_id = product_id


class AlreadyMarkedUsefulException(BusinessRuleViolationException):
    """每个客户对同一评价只能标记一次有用"""

    def __init__(self, review_id, useful_count: int):
        super().__init__("useful_once", "您已经标记过该评价")
        self.review_id = review_id
        self.useful_count = useful_count
