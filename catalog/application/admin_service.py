"""
商品目录后台应用服务。
后台商品列表、商品修改和分类管理。
"""
from typing import Any, Dict, List, Optional, Tuple

from django.utils.text import slugify
from loguru import logger

from core.domain.exceptions import (
    BusinessRuleViolationException,
    ConcurrencyException,
    EntityNotFoundException,
    ValidationException,
)
from core.infrastructure.business_log import log_business_event
from core.infrastructure.cache import CacheService
from core.infrastructure.transaction import TransactionManager

from catalog.domain import ProductRepository, CategoryRepository, PricingRepository
from catalog.application.commands import UpdateProductCommand, SaveCategoryCommand
from catalog.application.dtos import ProductDTO, brand_to_dict, category_to_dict, build_category_tree

# 后台允许修改的商品字段
EDITABLE_PRODUCT_FIELDS = (
    'name', 'description', 'short_description', 'ean', 'price_ron',
    'purchase_price_ron', 'stock_quantity', 'status', 'brand_id', 'main_image_url',
)


class CatalogAdminService:
    """后台商品和分类管理服务"""

    def __init__(
        self,
        product_repository: ProductRepository,
        category_repository: CategoryRepository,
        pricing_repository: PricingRepository,
        transaction_manager: TransactionManager,
        cache_service: CacheService
    ):
        self.product_repository = product_repository
        self.category_repository = category_repository
        self.pricing_repository = pricing_repository
        self.transaction_manager = transaction_manager
        self.cache_service = cache_service

    # ==================== 商品 ====================

    def list_products(
        self,
        filters: Optional[Dict[str, Any]] = None,
        page: int = 1,
        page_size: int = 20
    ) -> Tuple[List[Dict[str, Any]], int]:
        products, total = self.product_repository.search(filters, page, page_size)
        return [ProductDTO.from_model(p).to_admin_dict() for p in products], total

    def _get_product_or_raise(self, product_id: Any) -> Any:
        product = self.product_repository.get_by_id(product_id)
        if not product:
            raise EntityNotFoundException("商品", product_id)
        return product

    def get_product(self, product_id: Any) -> Dict[str, Any]:
        product = self._get_product_or_raise(product_id)
        data = ProductDTO.from_model(product).to_admin_dict()
        data['categories'] = [category_to_dict(c) for c in product.categories.all()]
        data['category_ids'] = [str(c.id) for c in product.categories.all()]
        data['group_prices'] = [
            {
                'customer_group_id': gp.customer_group_id,
                'min_quantity': gp.min_quantity,
                'price_ron': gp.price_ron,
            }
            for gp in product.group_prices.all()
        ]
        data['variants'] = [ProductDTO.from_model(v).to_admin_dict() for v in product.variants.all()]
        return data

    def update_product(self, command: UpdateProductCommand) -> Dict[str, Any]:
        """
        修改商品。版本检查和写入在同一个事务中，对商品行加锁。

        Raises:
            EntityNotFoundException: 商品不存在
            ConcurrencyException: 商品在读取后已被修改
            ValidationException: 品牌或分类不存在
        """
        self._get_product_or_raise(command.product_id)

        fields = {k: v for k, v in command.fields.items() if k in EDITABLE_PRODUCT_FIELDS}
        brand_id = fields.get('brand_id')
        if brand_id is not None and not self.pricing_repository.brand_exists(brand_id):
            raise ValidationException("brand_id", "品牌不存在")
        if command.category_ids is not None:
            unique_ids = list(dict.fromkeys(command.category_ids))
            if self.category_repository.count_existing(unique_ids) != len(unique_ids):
                raise ValidationException("category_ids", "部分分类不存在")

        try:
            with self.transaction_manager.start():
                product = self.product_repository.get_for_update(command.product_id)
                if product is None:
                    raise EntityNotFoundException("商品", command.product_id)
                if command.version is not None and command.version != product.version:
                    raise ConcurrencyException("商品", product.id, current=product.version, expected=command.version)

                old_values = {name: getattr(product, name) for name in fields}
                for name, value in fields.items():
                    setattr(product, name, value)
                if 'name' in fields and not product.slug:
                    product.slug = slugify(product.name)
                product.version += 1
                self.product_repository.save(product)
                if command.category_ids is not None:
                    self.product_repository.set_categories(product, command.category_ids)
        except (EntityNotFoundException, ConcurrencyException):
            raise
        except Exception as e:
            logger.error(f"修改商品失败: {e}")
            raise

        log_business_event("product.updated", {
            "product_id": str(product.id),
            "sku": product.sku,
            "changes": {name: [str(old_values[name]), str(fields[name])] for name in fields},
        })
        return self.get_product(product.id)

    # ==================== 分类 ====================

    def _invalidate_category_cache(self) -> None:
        self.cache_service.delete_pattern('catalog:*')

    def list_categories(self) -> List[Dict[str, Any]]:
        return build_category_tree(self.category_repository.list_all())

    def _get_category_or_raise(self, category_id: Any) -> Any:
        category = self.category_repository.get_by_id(category_id)
        if not category:
            raise EntityNotFoundException("分类", category_id)
        return category

    def get_category(self, category_id: Any) -> Dict[str, Any]:
        category = self._get_category_or_raise(category_id)
        data = category_to_dict(category)
        data['products_count'] = category.products.count()
        data['children'] = [category_to_dict(c) for c in category.children.all()]
        return data

    def _unique_slug(self, name: str, slug: str, exclude_id: Any = None) -> str:
        base = slugify(slug or name) or 'category'
        candidate = base
        suffix = 2
        while self.category_repository.slug_exists(candidate, exclude_id=exclude_id):
            candidate = f"{base}-{suffix}"
            suffix += 1
        return candidate

    def _resolve_parent(self, parent_id: Any, category_id: Any = None) -> Any:
        """
        校验父分类存在，且修改时不能把分类挂到自己或自己的子孙下面。
        """
        if not parent_id:
            return None
        parent = self.category_repository.get_by_id(parent_id)
        if not parent:
            raise ValidationException("parent_id", "父分类不存在")
        node = parent
        while category_id is not None and node is not None:
            if node.id == category_id:
                raise ValidationException("parent_id", "不能把分类移动到自身或其子分类下")
            node = node.parent
        return parent

    def create_category(self, command: SaveCategoryCommand) -> Dict[str, Any]:
        parent = self._resolve_parent(command.parent_id)
        with self.transaction_manager.start():
            category = self.category_repository.create(
                name=command.name,
                slug=self._unique_slug(command.name, command.slug),
                description=command.description or '',
                parent=parent,
                status=command.status,
                sort_order=command.sort_order,
            )
        self._invalidate_category_cache()
        logger.info(f"新建分类 {category.id}: {category.name}")
        return category_to_dict(category)

    def update_category(self, command: SaveCategoryCommand) -> Dict[str, Any]:
        category = self._get_category_or_raise(command.category_id)
        parent = self._resolve_parent(command.parent_id, category.id)

        category.name = command.name
        category.slug = self._unique_slug(command.name, command.slug or category.slug, exclude_id=category.id)
        category.description = command.description or ''
        category.parent = parent
        category.status = command.status
        category.sort_order = command.sort_order

        with self.transaction_manager.start():
            self.category_repository.save(category)
        self._invalidate_category_cache()
        logger.info(f"修改分类 {category.id}: {category.name}")
        return category_to_dict(category)

    def delete_category(self, category_id: Any) -> None:
        """
        删除分类，解除商品关联。

        Raises:
            BusinessRuleViolationException: 分类下还有子分类
        """
        category = self._get_category_or_raise(category_id)
        if self.category_repository.has_children(category.id):
            raise BusinessRuleViolationException("category_has_children", "该分类下还有子分类，不能删除")

        with self.transaction_manager.start():
            self.category_repository.delete(category)
        self._invalidate_category_cache()
        logger.info(f"删除分类 {category_id}")

    def list_brands(self) -> List[Dict[str, Any]]:
        return [brand_to_dict(b) for b in self.pricing_repository.list_brands()]
