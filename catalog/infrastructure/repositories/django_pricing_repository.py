"""
计价参考数据的Django实现。
"""
from decimal import Decimal
from typing import Any, List, Optional

from django.db.models import Max

from catalog.domain import PricingRepository
from catalog.infrastructure.models.catalog_models import Currency, VatRate, Brand
from customers.infrastructure.models.customer_models import CustomerGroup


class DjangoPricingRepository(PricingRepository):
    """货币、税率、品牌和客户分组查询"""

    def get_active_currency(self, code: str) -> Optional[Currency]:
        if not code:
            return None
        return Currency.objects.filter(code=code.upper(), status=True).first()

    def list_active_currencies(self) -> List[Currency]:
        return list(Currency.objects.filter(status=True))

    def get_max_vat_rate(self, country_id: Any) -> Optional[Decimal]:
        if not country_id:
            return None
        return VatRate.objects.filter(country_id=country_id).aggregate(rate=Max('rate'))['rate']

    def get_group_code(self, customer_group_id: int) -> Optional[str]:
        return CustomerGroup.objects.filter(id=customer_group_id).values_list('code', flat=True).first()

    def get_group_id_by_code(self, code: str) -> Optional[int]:
        return CustomerGroup.objects.filter(code=code).values_list('id', flat=True).first()

    def brand_exists(self, brand_id: Any) -> bool:
        return Brand.objects.filter(id=brand_id).exists()

    def list_brands(self) -> List[Brand]:
        return list(Brand.objects.all())

    def update_currency_rate(self, code: str, value: Decimal) -> bool:
        return Currency.objects.filter(code=code.upper()).update(value=value) > 0

    def ensure_base_currency(self, code: str) -> None:
        Currency.objects.update_or_create(
            code=code,
            defaults={'value': Decimal('1'), 'status': True},
            create_defaults={'name': code, 'symbol': 'lei', 'value': Decimal('1'), 'status': True},
        )
