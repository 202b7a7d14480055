"""
商品目录领域层包。
"""
from catalog.domain.value_objects import ProductType, ProductSort, PriceTier, PricingContext
from catalog.domain.exceptions import (
    VatRateNotFoundException,
    ProductNotPurchasableException,
    ExchangeRateUnavailableException,
    WishlistItemNotFoundException,
)
from catalog.domain.services import PriceCalculator
from catalog.domain.repositories import (
    ProductRepository,
    CategoryRepository,
    PricingRepository,
    WishlistRepository,
    ExchangeRateSource,
)

__all__ = [
    'ProductType',
    'ProductSort',
    'PriceTier',
    'PricingContext',
    'VatRateNotFoundException',
    'ProductNotPurchasableException',
    'ExchangeRateUnavailableException',
    'WishlistItemNotFoundException',
    'PriceCalculator',
    'ProductRepository',
    'CategoryRepository',
    'PricingRepository',
    'WishlistRepository',
    'ExchangeRateSource',
]
