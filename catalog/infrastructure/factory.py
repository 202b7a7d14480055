"""
商品目录仓储的装配。
"""
from functools import cached_property

from core.infrastructure.cache import CacheService
from core.infrastructure.transaction import TransactionManager

from catalog.domain import ProductRepository, CategoryRepository, PricingRepository, WishlistRepository
from catalog.infrastructure.repositories.django_product_repository import DjangoProductRepository
from catalog.infrastructure.repositories.django_category_repository import DjangoCategoryRepository
from catalog.infrastructure.repositories.django_pricing_repository import DjangoPricingRepository
from catalog.infrastructure.repositories.django_wishlist_repository import DjangoWishlistRepository


class CatalogInfrastructureFactory:
    """一次请求内共用的商品、分类、价格和收藏夹仓储"""

    def __init__(self, cache_service: CacheService, transaction_manager: TransactionManager):
        self.cache_service = cache_service
        self.transaction_manager = transaction_manager

    @cached_property
    def products(self) -> ProductRepository:
        return DjangoProductRepository()

    @cached_property
    def categories(self) -> CategoryRepository:
        return DjangoCategoryRepository()

    @cached_property
    def pricing(self) -> PricingRepository:
        return DjangoPricingRepository()

    @cached_property
    def wishlist(self) -> WishlistRepository:
        return DjangoWishlistRepository()

