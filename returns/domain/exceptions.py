"""
退货领域异常。
"""
from typing import Dict, List, Optional

from core.domain.exceptions import BusinessRuleViolationException


class ReturnNotAllowedException(BusinessRuleViolationException):
    """
    订单或订单行不满足退货条件。
    errors 按字段给出原因，前端可直接显示在表单上。
    """

    def __init__(self, message: str, errors: Optional[Dict[str, List[str]]] = None):
        super().__init__("return_not_allowed", message)
        self.errors = errors or {}
