"""
客户模块的应用服务装配。
视图和其他模块通过这里获取服务实例。
"""
from django.conf import settings

from core.infrastructure.transaction import DjangoTransactionManager
from customers.application import CustomerApplicationService, CustomerAdminService, CountryDetectionService
from customers.infrastructure.factory import CustomerInfrastructureFactory


def get_customer_factory() -> CustomerInfrastructureFactory:
    return CustomerInfrastructureFactory(transaction_manager=DjangoTransactionManager())


def get_customer_service() -> CustomerApplicationService:
    """获取客户应用服务实例"""
    factory = get_customer_factory()
    return CustomerApplicationService(
        customer_repository=factory.create_customer_repository(),
        user_repository=factory.create_user_repository(),
        address_repository=factory.create_address_repository(),
        location_repository=factory.create_location_repository(),
        transaction_manager=factory.transaction_manager
    )


def get_customer_admin_service() -> CustomerAdminService:
    """获取后台客户管理服务实例"""
    factory = get_customer_factory()
    return CustomerAdminService(
        customer_repository=factory.create_customer_repository(),
        user_repository=factory.create_user_repository(),
        transaction_manager=factory.transaction_manager
    )


def get_country_detection_service() -> CountryDetectionService:
    """获取计税国家识别服务实例"""
    factory = get_customer_factory()
    return CountryDetectionService(
        address_repository=factory.create_address_repository(),
        location_repository=factory.create_location_repository(),
        default_country_code=settings.CHECKOUT_SETTINGS.get('DEFAULT_COUNTRY_CODE', 'RO')
    )
