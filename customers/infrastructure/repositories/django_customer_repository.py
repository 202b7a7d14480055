"""
客户仓储的Django实现。
"""
from typing import Any, Dict, Iterable, List, Optional, Tuple

from django.core.exceptions import ValidationError
from django.db.models import Q, Count

from customers.domain.repositories import CustomerRepository
from customers.infrastructure.models.customer_models import Customer, CustomerGroup


class DjangoCustomerRepository(CustomerRepository):
    """
    基于Django ORM的客户仓储实现。
    """

    def _base_queryset(self):
        return Customer.objects.select_related('user', 'customer_group')

    def get_by_id(self, id: Any) -> Optional[Customer]:
        try:
            return self._base_queryset().get(id=id)
        except (Customer.DoesNotExist, ValueError, TypeError, ValidationError):
            return None

    def get_by_user_id(self, user_id: Any) -> Optional[Customer]:
        return self._base_queryset().filter(user_id=user_id).first()

    def get_group_by_code(self, code: str) -> Optional[CustomerGroup]:
        return CustomerGroup.objects.filter(code=code).first()

    def create(self, user: Any, customer_type: str, group: Any, **fields) -> Customer:
        return Customer.objects.create(
            user=user,
            customer_type=customer_type,
            customer_group=group,
            **fields
        )

    def save(self, entity: Customer) -> Customer:
        entity.save()
        return entity

    def delete(self, entity: Customer) -> None:
        entity.delete()

    def search(
        self,
        filters: Optional[Dict[str, Any]] = None,
        page: int = 1,
        page_size: int = 20
    ) -> Tuple[List[Customer], int]:
        """
        后台客户列表查询。

        支持的过滤条件: search, customer_type, is_active
        """
        filters = filters or {}
        queryset = self._base_queryset().annotate(orders_count=Count('orders'))

        keyword = filters.get('search')
        if keyword:
            queryset = queryset.filter(
                Q(user__username__icontains=keyword)
                | Q(user__email__icontains=keyword)
                | Q(user__first_name__icontains=keyword)
                | Q(user__last_name__icontains=keyword)
                | Q(company_name__icontains=keyword)
                | Q(phone__icontains=keyword)
            )
        if filters.get('customer_type'):
            queryset = queryset.filter(customer_type=filters['customer_type'])
        if filters.get('is_active') is not None:
            queryset = queryset.filter(is_active=filters['is_active'])

        total = queryset.count()
        offset = (page - 1) * page_size
        return list(queryset.order_by('-created_at')[offset:offset + page_size]), total

    def set_active(self, customer_ids: Iterable[Any], active: bool) -> int:
        return Customer.objects.filter(id__in=list(customer_ids)).update(is_active=active)

    def count_created_since(self, since: Any) -> int:
        return Customer.objects.filter(created_at__gte=since).count()
