"""
商品目录应用服务层包。
"""
from catalog.application.queries import ListProductsQuery
from catalog.application.commands import UpdateProductCommand, SaveCategoryCommand
from catalog.application.dtos import ProductDTO
from catalog.application.pricing import ProductPriceService
from catalog.application.catalog_service import CatalogApplicationService
from catalog.application.admin_service import CatalogAdminService
from catalog.application.exchange_rate_service import ExchangeRateService
from catalog.application.wishlist_service import WishlistApplicationService

__all__ = [
    'ListProductsQuery',
    'UpdateProductCommand',
    'SaveCategoryCommand',
    'ProductDTO',
    'ProductPriceService',
    'CatalogApplicationService',
    'CatalogAdminService',
    'ExchangeRateService',
    'WishlistApplicationService',
]
