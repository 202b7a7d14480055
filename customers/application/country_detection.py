"""
增值税国家识别。
优先级: 明确指定的国家 > 客户首选收货地址的国家 > 默认国家。
"""
from typing import Any, Optional

from customers.domain.repositories import AddressRepository, LocationRepository
from customers.domain.value_objects import AddressType


class CountryDetectionService:
    """识别计算增值税所用的国家"""

    def __init__(
        self,
        address_repository: AddressRepository,
        location_repository: LocationRepository,
        default_country_code: str
    ):
        self.address_repository = address_repository
        self.location_repository = location_repository
        self.default_country_code = default_country_code

    def default_country_id(self) -> Optional[int]:
        country = self.location_repository.get_country_by_code(self.default_country_code)
        return country.id if country else None

    def detect(self, customer: Any = None, country_id: Any = None) -> Optional[int]:
        """
        Args:
            customer: 当前客户，访客为None
            country_id: 明确指定的国家ID，例如结算页选择的收货国家

        Returns:
            国家ID，数据库中没有任何可用国家时返回None
        """
        if country_id:
            country = self.location_repository.get_country(country_id)
            if country:
                return country.id

        if customer is not None:
            address = self.address_repository.get_preferred(customer.id, AddressType.SHIPPING)
            if address:
                return address.country_id

        return self.default_country_id()
