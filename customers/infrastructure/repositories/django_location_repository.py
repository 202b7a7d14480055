"""
国家/州县/城市查询的Django实现。
"""
from typing import Any, List, Optional

from customers.domain.repositories import LocationRepository
from customers.infrastructure.models.customer_models import Country, State, City


class DjangoLocationRepository(LocationRepository):
    """基于Django ORM的地区查询"""

    def list_countries(self, active_only: bool = True) -> List[Country]:
        queryset = Country.objects.all()
        if active_only:
            queryset = queryset.filter(status=True)
        return list(queryset)

    def get_country(self, country_id: Any) -> Optional[Country]:
        if country_id in (None, ''):
            return None
        try:
            return Country.objects.get(id=country_id)
        except (Country.DoesNotExist, ValueError, TypeError):
            return None

    def get_country_by_code(self, iso_code: str) -> Optional[Country]:
        if not iso_code:
            return None
        return Country.objects.filter(iso_code_2__iexact=iso_code).first()

    def list_states(self, country_id: Any) -> List[State]:
        return list(State.objects.filter(country_id=country_id))

    def list_cities(self, state_id: Any) -> List[City]:
        return list(City.objects.filter(state_id=state_id))
