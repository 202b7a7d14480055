"""
商品目录应用服务。
店铺前台的商品列表、详情、价格查询、搜索联想、分类和货币切换。
"""
from typing import Any, Dict, List, Optional, Tuple

from loguru import logger

from core.domain.exceptions import EntityNotFoundException, ValidationException
from core.infrastructure.cache import CacheService

from catalog.domain import PricingContext, PricingRepository, ProductRepository, CategoryRepository, ProductType
from catalog.domain.config import AUTOCOMPLETE_LIMIT, CATEGORY_TREE_CACHE_TIMEOUT
from catalog.application.pricing import ProductPriceService
from catalog.application.queries import ListProductsQuery
from catalog.application.dtos import ProductDTO, build_category_tree, category_to_dict, currency_to_dict

# 分类树缓存键
CATEGORY_TREE_CACHE_KEY = 'catalog:category_tree'


class CatalogApplicationService:
    """
    商品目录应用服务。
    """

    def __init__(
        self,
        product_repository: ProductRepository,
        category_repository: CategoryRepository,
        pricing_repository: PricingRepository,
        price_service: ProductPriceService,
        cache_service: CacheService
    ):
        self.product_repository = product_repository
        self.category_repository = category_repository
        self.pricing_repository = pricing_repository
        self.price_service = price_service
        self.cache_service = cache_service

    def _product_with_price(self, product: Any, context: PricingContext, quantity: int = 1) -> Dict[str, Any]:
        data = ProductDTO.from_model(product).to_summary()
        data['price'] = self.price_service.get_price_info(product, context, quantity)
        return data

    def _get_active_product(self, product_id: Any) -> Any:
        product = self.product_repository.get_active(product_id)
        if not product:
            raise EntityNotFoundException("商品", product_id)
        return product

    def list_products(self, query: ListProductsQuery, context: PricingContext) -> Tuple[List[Dict[str, Any]], int]:
        """
        前台商品列表，只包含上架的普通商品和可配置商品。

        Returns:
            (商品列表, 总数)
        """
        products, total = self.product_repository.storefront_search(query.to_filters(), query.page, query.page_size)
        return [self._product_with_price(p, context) for p in products], total

    def get_product(self, product_id: Any, context: PricingContext) -> Dict[str, Any]:
        """
        商品详情，包括价格、阶梯价和可配置商品的在售规格。

        Raises:
            EntityNotFoundException: 商品不存在或已下架
        """
        product = self._get_active_product(product_id)

        data = ProductDTO.from_model(product).to_detail()
        data['categories'] = [category_to_dict(c) for c in product.categories.all() if c.status]
        data['price'] = self.price_service.get_price_info(product, context)
        data['price_tiers'] = self.price_service.get_price_tiers(product, context)
        data['purchasable'] = product.is_purchasable

        if product.type == ProductType.CONFIGURABLE:
            data['variants'] = [
                self._product_with_price(variant, context)
                for variant in self.product_repository.list_active_variants(product.id)
            ]
        return data

    def get_product_price(self, product_id: Any, quantity: int, context: PricingContext) -> Dict[str, Any]:
        product = self._get_active_product(product_id)
        data = self.price_service.get_price_info(product, context, quantity)
        data['price_tiers'] = self.price_service.get_price_tiers(product, context, quantity)
        return data

    def autocomplete(self, keyword: str, limit: int = AUTOCOMPLETE_LIMIT) -> List[Dict[str, Any]]:
        keyword = (keyword or '').strip()
        if len(keyword) < 2:
            return []
        return [
            {'id': str(p.id), 'name': p.name, 'sku': p.sku, 'slug': p.slug, 'image': p.main_image_url or None}
            for p in self.product_repository.autocomplete(keyword, limit)
        ]

    def list_categories(self) -> List[Dict[str, Any]]:
        """启用的分类树，结果会被缓存"""
        tree = self.cache_service.get(CATEGORY_TREE_CACHE_KEY)
        if tree is None:
            tree = build_category_tree(self.category_repository.list_all(active_only=True))
            self.cache_service.set(CATEGORY_TREE_CACHE_KEY, tree, CATEGORY_TREE_CACHE_TIMEOUT)
        return tree

    def get_category(
        self,
        slug: str,
        context: PricingContext,
        page: int = 1,
        page_size: int = 20,
        sort: Optional[str] = None
    ) -> Tuple[Dict[str, Any], List[Dict[str, Any]], int]:
        """
        分类及其商品。

        Returns:
            (分类信息, 商品列表, 商品总数)
        """
        category = self.category_repository.get_by_slug(slug)
        if not category:
            raise EntityNotFoundException("分类", slug)

        data = category_to_dict(category)
        data['children'] = [category_to_dict(c) for c in category.children.filter(status=True)]

        query = ListProductsQuery(page=page, page_size=page_size, category=slug, sort=sort)
        products, total = self.list_products(query, context)
        return data, products, total

    def list_currencies(self) -> List[Dict[str, Any]]:
        return [currency_to_dict(c) for c in self.pricing_repository.list_active_currencies()]

    def set_currency(self, shopper: Any, code: str) -> Dict[str, Any]:
        """
        切换展示货币并保存到会话。

        Raises:
            ValidationException: 货币不存在或未启用
        """
        currency = self.pricing_repository.get_active_currency(code)
        if currency is None:
            raise ValidationException("code", "不支持该货币")
        shopper.set_currency(currency.code)
        logger.debug(f"切换货币为 {currency.code}")
        return currency_to_dict(currency)
