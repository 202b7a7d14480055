"""
基于Django ORM的商品仓储实现。
"""
from typing import Any, Dict, List, Optional, Tuple

from django.core.exceptions import ValidationError
from django.db.models import F, Q
from loguru import logger

from catalog.domain import ProductRepository, ProductType, ProductSort
from catalog.infrastructure.models.catalog_models import Product, ProductGroupPrice


class DjangoProductRepository(ProductRepository):
    """
    基于Django ORM的商品仓储实现。
    """

    def _base_queryset(self):
        return Product.objects.select_related('brand', 'parent')

    def get_by_id(self, id: Any) -> Optional[Product]:
        try:
            return self._base_queryset().prefetch_related('categories').get(id=id)
        except (Product.DoesNotExist, ValueError, TypeError, ValidationError):
            return None

    def get_for_update(self, product_id: Any) -> Optional[Product]:
        try:
            return Product.objects.select_for_update().get(id=product_id)
        except (Product.DoesNotExist, ValueError, TypeError, ValidationError):
            return None

    def get_active(self, product_id: Any) -> Optional[Product]:
        product = self.get_by_id(product_id)
        if product is None or not product.status:
            return None
        return product

    def save(self, entity: Product) -> Product:
        entity.save()
        return entity

    def delete(self, entity: Product) -> None:
        entity.delete()

    @staticmethod
    def _keyword_filter(keyword: str) -> Q:
        return (
            Q(name__icontains=keyword)
            | Q(sku__icontains=keyword)
            | Q(ean__icontains=keyword)
            | Q(model__icontains=keyword)
        )

    @staticmethod
    def _paginate(queryset, page: int, page_size: int) -> Tuple[List[Product], int]:
        total = queryset.count()
        offset = (page - 1) * page_size
        return list(queryset[offset:offset + page_size]), total

    def storefront_search(
        self,
        filters: Optional[Dict[str, Any]] = None,
        page: int = 1,
        page_size: int = 20
    ) -> Tuple[List[Product], int]:
        filters = filters or {}
        queryset = self._base_queryset().filter(status=True).exclude(type=ProductType.VARIANT)

        if filters.get('search'):
            queryset = queryset.filter(self._keyword_filter(filters['search']))
        if filters.get('category'):
            queryset = queryset.filter(categories__slug=filters['category'])
        if filters.get('brand'):
            queryset = queryset.filter(brand__slug=filters['brand'])
        if filters.get('min_price') is not None:
            queryset = queryset.filter(price_ron__gte=filters['min_price'])
        if filters.get('max_price') is not None:
            queryset = queryset.filter(price_ron__lte=filters['max_price'])

        ordering = {
            ProductSort.PRICE_ASC: ('price_ron', 'name'),
            ProductSort.PRICE_DESC: ('-price_ron', 'name'),
            ProductSort.NAME: ('name',),
        }.get(filters.get('sort'), ('-created_at', 'name'))

        return self._paginate(queryset.distinct().order_by(*ordering), page, page_size)

    def search(
        self,
        filters: Optional[Dict[str, Any]] = None,
        page: int = 1,
        page_size: int = 20
    ) -> Tuple[List[Product], int]:
        """
        后台商品列表。

        支持的过滤条件: search, type, status, brand_id, category_id, low_stock
        """
        filters = filters or {}
        queryset = self._base_queryset()

        if filters.get('search'):
            queryset = queryset.filter(self._keyword_filter(filters['search']))
        if filters.get('type'):
            queryset = queryset.filter(type=filters['type'])
        if filters.get('status') is not None:
            queryset = queryset.filter(status=filters['status'])
        if filters.get('brand_id'):
            queryset = queryset.filter(brand_id=filters['brand_id'])
        if filters.get('category_id'):
            queryset = queryset.filter(categories__id=filters['category_id'])
        if filters.get('low_stock') is not None:
            queryset = queryset.filter(stock_quantity__lt=filters['low_stock'])

        return self._paginate(queryset.distinct().order_by('-updated_at'), page, page_size)

    def autocomplete(self, keyword: str, limit: int) -> List[Product]:
        queryset = (
            Product.objects.filter(status=True)
            .exclude(type=ProductType.VARIANT)
            .filter(self._keyword_filter(keyword))
            .order_by('name')
        )
        return list(queryset[:limit])

    def list_active_variants(self, parent_id: Any) -> List[Product]:
        return list(
            Product.objects.filter(parent_id=parent_id, type=ProductType.VARIANT, status=True).order_by('name')
        )

    def get_group_prices(self, product_id: Any, customer_group_id: Optional[int]) -> List[ProductGroupPrice]:
        if not customer_group_id:
            return []
        return list(
            ProductGroupPrice.objects.filter(product_id=product_id, customer_group_id=customer_group_id)
            .order_by('min_quantity')
        )

    def adjust_stock(self, product_id: Any, delta: int) -> Optional[int]:
        product = Product.objects.select_for_update().filter(id=product_id).first()
        if product is None:
            logger.warning(f"调整库存失败，商品不存在: {product_id}")
            return None
        Product.objects.filter(id=product_id).update(stock_quantity=F('stock_quantity') + delta)
        new_quantity = product.stock_quantity + delta
        logger.info(f"商品{product.sku}库存调整 {delta:+d}: {product.stock_quantity} -> {new_quantity}")
        return new_quantity

    def _low_stock_queryset(self, threshold: int):
        return Product.objects.filter(
            status=True,
            type__in=ProductType.PURCHASABLE,
            stock_quantity__lt=threshold
        ).order_by('stock_quantity', 'name')

    def list_low_stock(self, threshold: int, limit: Optional[int] = None) -> List[Product]:
        queryset = self._low_stock_queryset(threshold)
        if limit:
            queryset = queryset[:limit]
        return list(queryset)

    def count_low_stock(self, threshold: int) -> int:
        return self._low_stock_queryset(threshold).count()

    def set_categories(self, product: Product, category_ids: List[Any]) -> None:
        product.categories.set(category_ids)
