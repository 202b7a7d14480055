"""
客户应用服务层包。
"""
from customers.application.commands import (
    RegisterCustomerCommand,
    SaveAddressCommand,
    ChangeActiveStatusCommand,
    UpdateCompanyInfoCommand,
    UpdateProfileCommand,
)
from customers.application.dtos import AddressDTO, CustomerDTO, UserDTO
from customers.application.customer_service import CustomerApplicationService
from customers.application.admin_service import CustomerAdminService
from customers.application.country_detection import CountryDetectionService
from customers.application.context import ShopperContext

__all__ = [
    'RegisterCustomerCommand',
    'SaveAddressCommand',
    'ChangeActiveStatusCommand',
    'UpdateCompanyInfoCommand',
    'UpdateProfileCommand',
    'AddressDTO',
    'CustomerDTO',
    'UserDTO',
    'CustomerApplicationService',
    'CustomerAdminService',
    'CountryDetectionService',
    'ShopperContext',
]
