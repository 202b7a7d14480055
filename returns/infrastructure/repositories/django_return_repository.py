"""
基于Django ORM的退货单仓储实现。
"""
from datetime import timedelta
from typing import Any, Dict, List, Optional, Tuple

from django.db.models import Q, Sum
from django.utils import timezone

from returns.domain import ReturnRepository, ReturnStatus, ReturnTimeRange
from returns.infrastructure.models.return_models import ProductReturn


class DjangoReturnRepository(ReturnRepository):
    """
    基于Django ORM的退货单仓储实现。
    """

    @staticmethod
    def _paginate(queryset, page: int, page_size: int) -> Tuple[List[ProductReturn], int]:
        total = queryset.count()
        offset = (page - 1) * page_size
        return list(queryset[offset:offset + page_size]), total

    def get_by_id(self, id: Any) -> Optional[ProductReturn]:
        try:
            return ProductReturn.objects.select_related('order_product').get(id=id)
        except (ProductReturn.DoesNotExist, ValueError, TypeError):
            return None

    def get_for_update(self, return_id: Any) -> Optional[ProductReturn]:
        try:
            return ProductReturn.objects.select_for_update().get(id=return_id)
        except (ProductReturn.DoesNotExist, ValueError, TypeError):
            return None

    def create(self, **fields) -> ProductReturn:
        return ProductReturn.objects.create(**fields)

    def save(self, entity: ProductReturn) -> ProductReturn:
        entity.save()
        return entity

    def delete(self, entity: ProductReturn) -> None:
        entity.delete()

    def returned_quantity(self, order_product_id: Any) -> int:
        result = ProductReturn.objects.filter(order_product_id=order_product_id).aggregate(total=Sum('quantity'))
        return result['total'] or 0

    def returned_quantities(self, order_id: Any) -> Dict[Any, int]:
        rows = (
            ProductReturn.objects.filter(order_id=order_id)
            .values('order_product_id')
            .annotate(total=Sum('quantity'))
        )
        return {row['order_product_id']: row['total'] for row in rows}

    def search(
        self,
        filters: Optional[Dict[str, Any]] = None,
        page: int = 1,
        page_size: int = 50
    ) -> Tuple[List[ProductReturn], int]:
        """
        后台退货列表。

        支持的过滤条件: status, order_number, date_from, date_to, email, search
        """
        filters = filters or {}
        queryset = ProductReturn.objects.all()

        if ReturnStatus.is_valid(filters.get('status')):
            queryset = queryset.filter(status=filters['status'])
        if filters.get('order_number'):
            queryset = queryset.filter(order_number__icontains=filters['order_number'])
        if filters.get('date_from'):
            queryset = queryset.filter(created_at__date__gte=filters['date_from'])
        if filters.get('date_to'):
            queryset = queryset.filter(created_at__date__lte=filters['date_to'])
        if filters.get('email'):
            queryset = queryset.filter(email__icontains=filters['email'])
        if filters.get('search'):
            keyword = filters['search']
            queryset = queryset.filter(
                Q(order_number__icontains=keyword)
                | Q(email__icontains=keyword)
                | Q(first_name__icontains=keyword)
                | Q(last_name__icontains=keyword)
                | Q(product_name__icontains=keyword)
                | Q(product_sku__icontains=keyword)
            )

        return self._paginate(queryset.order_by('-created_at', '-id'), page, page_size)

    def list_for_customer(
        self,
        customer_id: Any,
        filters: Optional[Dict[str, Any]] = None,
        page: int = 1,
        page_size: int = 10
    ) -> Tuple[List[ProductReturn], int]:
        filters = filters or {}
        queryset = ProductReturn.objects.filter(order__customer_id=customer_id)

        if ReturnStatus.is_valid(filters.get('status')):
            queryset = queryset.filter(status=filters['status'])

        time_range = filters.get('time_range') or ReturnTimeRange.THREE_MONTHS
        now = timezone.now()
        if time_range == ReturnTimeRange.THREE_MONTHS:
            queryset = queryset.filter(created_at__gte=now - timedelta(days=90))
        elif time_range == ReturnTimeRange.SIX_MONTHS:
            queryset = queryset.filter(created_at__gte=now - timedelta(days=180))
        elif time_range == ReturnTimeRange.YEAR:
            queryset = queryset.filter(created_at__year=now.year)

        if filters.get('search'):
            keyword = filters['search']
            queryset = queryset.filter(
                Q(order_number__icontains=keyword)
                | Q(product_name__icontains=keyword)
                | Q(product_sku__icontains=keyword)
            )

        return self._paginate(queryset.order_by('-created_at', '-id'), page, page_size)
