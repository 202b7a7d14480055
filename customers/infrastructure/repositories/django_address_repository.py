"""
客户地址仓储的Django实现。
"""
from typing import Any, List, Optional

from django.core.exceptions import ValidationError

from customers.domain.repositories import AddressRepository
from customers.infrastructure.models.customer_models import Address


class DjangoAddressRepository(AddressRepository):
    """基于Django ORM的地址仓储实现"""

    def get_by_id(self, id: Any) -> Optional[Address]:
        try:
            return Address.objects.select_related('country').get(id=id)
        except (Address.DoesNotExist, ValueError, TypeError, ValidationError):
            return None

    def get_for_customer(self, customer_id: Any, address_id: Any) -> Optional[Address]:
        try:
            return Address.objects.select_related('country').get(id=address_id, customer_id=customer_id)
        except (Address.DoesNotExist, ValueError, TypeError, ValidationError):
            return None

    def list_for_customer(self, customer_id: Any, address_type: Optional[str] = None) -> List[Address]:
        queryset = Address.objects.select_related('country').filter(customer_id=customer_id)
        if address_type:
            queryset = queryset.filter(address_type=address_type)
        return list(queryset)

    def create(self, customer_id: Any, **fields) -> Address:
        return Address.objects.create(customer_id=customer_id, **fields)

    def get_preferred(self, customer_id: Any, address_type: str) -> Optional[Address]:
        return (
            Address.objects.select_related('country')
            .filter(customer_id=customer_id, address_type=address_type)
            .order_by('-is_preferred', 'created_at')
            .first()
        )

    def exists_of_type(self, customer_id: Any, address_type: str, exclude_id: Any = None) -> bool:
        queryset = Address.objects.filter(customer_id=customer_id, address_type=address_type)
        if exclude_id:
            queryset = queryset.exclude(id=exclude_id)
        return queryset.exists()

    def unset_preferred(self, customer_id: Any, address_type: str, exclude_id: Any = None) -> int:
        queryset = Address.objects.filter(customer_id=customer_id, address_type=address_type, is_preferred=True)
        if exclude_id:
            queryset = queryset.exclude(id=exclude_id)
        return queryset.update(is_preferred=False)

    def save(self, entity: Address) -> Address:
        entity.save()
        return entity

    def delete(self, entity: Address) -> None:
        entity.delete()
