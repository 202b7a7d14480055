# 引用基础设施层的模型
from catalog.infrastructure.models.catalog_models import (
    Currency,
    VatRate,
    Brand,
    Category,
    Product,
    ProductGroupPrice,
    WishlistItem,
)
