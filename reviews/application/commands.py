"""
评价命令对象。
"""
from typing import Any, Optional


class CreateReviewCommand:
    """提交商品评价"""

    def __init__(self, customer_id: Any, product_id: Any, rating: int, comment: Optional[str] = None):
        """
        Args:
            customer_id: 评价人客户ID
            product_id: 商品ID
            rating: 评分 1-5
            comment: 评价内容，可为空
        """
        self.customer_id = customer_id
        self.product_id = product_id
        self.rating = rating
        self.comment = comment or None
