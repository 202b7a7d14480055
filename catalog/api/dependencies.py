"""
商品目录模块的应用服务装配。
购物车、结算和订单模块也通过这里获取价格服务。
"""
from typing import Optional

from core.infrastructure.cache import get_cache_service
from core.infrastructure.transaction import DjangoTransactionManager
from catalog.application import (
    ProductPriceService,
    CatalogApplicationService,
    CatalogAdminService,
    ExchangeRateService,
    WishlistApplicationService,
)
from catalog.domain import PricingContext
from catalog.domain.config import EXCHANGE_RATE_TIMEOUT, EXCHANGE_RATE_URL
from catalog.infrastructure.exchange_rates import BnrExchangeRateSource
from catalog.infrastructure.factory import CatalogInfrastructureFactory
from customers.api.dependencies import get_country_detection_service
from customers.application import ShopperContext


def get_catalog_factory() -> CatalogInfrastructureFactory:
    return CatalogInfrastructureFactory(
        cache_service=get_cache_service(),
        transaction_manager=DjangoTransactionManager()
    )


def get_price_service() -> ProductPriceService:
    """获取商品价格服务实例"""
    factory = get_catalog_factory()
    return ProductPriceService(
        pricing_repository=factory.pricing,
        product_repository=factory.products,
        country_detection=get_country_detection_service()
    )


def get_catalog_service(price_service: Optional[ProductPriceService] = None) -> CatalogApplicationService:
    """获取商品目录应用服务实例"""
    factory = get_catalog_factory()
    return CatalogApplicationService(
        product_repository=factory.products,
        category_repository=factory.categories,
        pricing_repository=factory.pricing,
        price_service=price_service or get_price_service(),
        cache_service=factory.cache_service
    )


def get_catalog_admin_service() -> CatalogAdminService:
    """获取后台商品管理服务实例"""
    factory = get_catalog_factory()
    return CatalogAdminService(
        product_repository=factory.products,
        category_repository=factory.categories,
        pricing_repository=factory.pricing,
        transaction_manager=factory.transaction_manager,
        cache_service=factory.cache_service
    )


def build_pricing_context(request, price_service: ProductPriceService, country_id: Optional[int] = None) -> PricingContext:
    """
    当前请求的计价上下文。

    未明确指定国家时，使用结算时选择的收货国家。
    """
    shopper = ShopperContext.from_request(request)
    return price_service.build_context(shopper, country_id or shopper.shipping_country_id)


def get_wishlist_service(price_service: Optional[ProductPriceService] = None) -> WishlistApplicationService:
    """获取收藏夹服务实例"""
    factory = get_catalog_factory()
    return WishlistApplicationService(
        wishlist_repository=factory.wishlist,
        product_repository=factory.products,
        price_service=price_service or get_price_service()
    )


def get_exchange_rate_service() -> ExchangeRateService:
    """获取汇率更新服务实例"""
    factory = get_catalog_factory()
    return ExchangeRateService(
        rate_source=BnrExchangeRateSource(EXCHANGE_RATE_URL, timeout=EXCHANGE_RATE_TIMEOUT),
        pricing_repository=factory.pricing,
        transaction_manager=factory.transaction_manager
    )
