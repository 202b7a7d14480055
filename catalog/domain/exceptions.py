"""
商品目录领域异常。
"""
from typing import Any

from core.domain.exceptions import BusinessRuleViolationException, DomainException, EntityNotFoundException


class VatRateNotFoundException(BusinessRuleViolationException):
    """国家没有配置增值税税率"""

    def __init__(self, country: Any):
        super().__init__("vat_rate_required", f"未配置国家 {country} 的增值税税率")
        self.country = country


class ProductNotPurchasableException(BusinessRuleViolationException):
    """可配置商品不能直接加入购物车，必须选择具体规格"""

    def __init__(self, product_id: Any):
        super().__init__("select_variant", "可配置商品不能直接购买，请先选择规格")
        self.product_id = product_id


class ExchangeRateUnavailableException(DomainException):
    """无法获取或解析汇率数据"""

    def __init__(self, reason: str):
        super().__init__(f"无法获取汇率: {reason}")
        self.reason = reason


class WishlistItemNotFoundException(EntityNotFoundException):
    """商品不在客户的收藏夹中"""

    def __init__(self, product_id: Any):
        super().__init__("收藏夹商品", product_id)
