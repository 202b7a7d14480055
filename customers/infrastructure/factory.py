"""
客户基础设施层工厂。
负责创建和缓存客户模块的仓储实例。
"""
from core.infrastructure.transaction import TransactionManager

from customers.domain import CustomerRepository, AddressRepository, LocationRepository, UserRepository
from customers.infrastructure.repositories.django_customer_repository import DjangoCustomerRepository
from customers.infrastructure.repositories.django_address_repository import DjangoAddressRepository
from customers.infrastructure.repositories.django_location_repository import DjangoLocationRepository
from customers.infrastructure.repositories.django_user_repository import DjangoUserRepository


class CustomerInfrastructureFactory:
    """
    客户基础设施层工厂类。
    """

    def __init__(self, transaction_manager: TransactionManager):
        self.transaction_manager = transaction_manager

        self._customer_repository = None
        self._address_repository = None
        self._location_repository = None
        self._user_repository = None

    def create_customer_repository(self) -> CustomerRepository:
        if not self._customer_repository:
            self._customer_repository = DjangoCustomerRepository()
        return self._customer_repository

    def create_address_repository(self) -> AddressRepository:
        if not self._address_repository:
            self._address_repository = DjangoAddressRepository()
        return self._address_repository

    def create_location_repository(self) -> LocationRepository:
        if not self._location_repository:
            self._location_repository = DjangoLocationRepository()
        return self._location_repository

    def create_user_repository(self) -> UserRepository:
        if not self._user_repository:
            self._user_repository = DjangoUserRepository()
        return self._user_repository
