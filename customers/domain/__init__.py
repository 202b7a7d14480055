"""
客户领域层包。
"""
from customers.domain.value_objects import CustomerType, CustomerGroupCode, AddressType
from customers.domain.repositories import (
    CustomerRepository,
    AddressRepository,
    LocationRepository,
    UserRepository,
)
from customers.domain.exceptions import IncorrectPasswordException, NotCompanyCustomerException

__all__ = [
    'CustomerType',
    'CustomerGroupCode',
    'AddressType',
    'CustomerRepository',
    'AddressRepository',
    'LocationRepository',
    'UserRepository',
    'IncorrectPasswordException',
    'NotCompanyCustomerException',
]
