"""
基于Django ORM的分类仓储实现。
"""
from typing import Any, List, Optional

from django.core.exceptions import ValidationError

from catalog.domain import CategoryRepository
from catalog.infrastructure.models.catalog_models import Category


class DjangoCategoryRepository(CategoryRepository):
    """
    基于Django ORM的分类仓储实现。
    """

    def get_by_id(self, id: Any) -> Optional[Category]:
        try:
            return Category.objects.get(id=id)
        except (Category.DoesNotExist, ValueError, TypeError, ValidationError):
            return None

    def get_by_slug(self, slug: str, active_only: bool = True) -> Optional[Category]:
        queryset = Category.objects.filter(slug=slug)
        if active_only:
            queryset = queryset.filter(status=True)
        return queryset.first()

    def list_all(self, active_only: bool = False) -> List[Category]:
        queryset = Category.objects.all()
        if active_only:
            queryset = queryset.filter(status=True)
        return list(queryset.order_by('sort_order', 'name'))

    def slug_exists(self, slug: str, exclude_id: Any = None) -> bool:
        queryset = Category.objects.filter(slug=slug)
        if exclude_id:
            queryset = queryset.exclude(id=exclude_id)
        return queryset.exists()

    def has_children(self, category_id: Any) -> bool:
        return Category.objects.filter(parent_id=category_id).exists()

    def create(self, **fields) -> Category:
        return Category.objects.create(**fields)

    def count_existing(self, category_ids: List[Any]) -> int:
        return Category.objects.filter(id__in=category_ids).count()

    def save(self, entity: Category) -> Category:
        entity.save()
        return entity

    def delete(self, entity: Category) -> None:
        # 先解除与商品的关联，再删除分类
        entity.products.clear()
        entity.delete()
