"""
退货模块的应用服务装配。
"""
from core.domain.codes import ReadableCodeGenerator
from core.infrastructure.transaction import DjangoTransactionManager
from catalog.api.dependencies import get_catalog_factory
from orders.api.dependencies import get_order_factory
from returns.application import ReturnApplicationService, ReturnAdminService
from returns.domain.config import RETURN_CODE_LENGTH, RETURN_CODE_PREFIX, RETURN_CODE_SALT
from returns.infrastructure.factory import ReturnInfrastructureFactory


def get_return_factory() -> ReturnInfrastructureFactory:
    return ReturnInfrastructureFactory(transaction_manager=DjangoTransactionManager())


def get_return_code_generator() -> ReadableCodeGenerator:
    return ReadableCodeGenerator(RETURN_CODE_SALT, length=RETURN_CODE_LENGTH, prefix=RETURN_CODE_PREFIX)


def get_return_service() -> ReturnApplicationService:
    """获取前台退货服务实例"""
    factory = get_return_factory()
    return ReturnApplicationService(
        return_repository=factory.create_return_repository(),
        order_repository=get_order_factory().create_order_repository(),
        code_generator=get_return_code_generator(),
        transaction_manager=factory.transaction_manager
    )


def get_return_admin_service() -> ReturnAdminService:
    """获取后台退货管理服务实例"""
    factory = get_return_factory()
    return ReturnAdminService(
        return_repository=factory.create_return_repository(),
        product_repository=get_catalog_factory().products,
        transaction_manager=factory.transaction_manager
    )
