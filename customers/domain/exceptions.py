"""
客户领域异常。
"""
from core.domain.exceptions import BusinessRuleViolationException, DomainException


class IncorrectPasswordException(DomainException):
    """敏感操作需要的当前密码不正确"""

    def __init__(self, user_id):
        super().__init__("当前密码不正确")
        self.user_id = user_id


class NotCompanyCustomerException(BusinessRuleViolationException):
    """只有企业客户可以维护公司信息"""

    def __init__(self, customer_id):
        super().__init__("company_only", "只有企业客户可以修改公司信息")
        self.customer_id = customer_id
