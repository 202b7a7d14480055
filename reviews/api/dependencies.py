"""
评价模块的应用服务装配。
"""
from core.infrastructure.transaction import DjangoTransactionManager
from catalog.api.dependencies import get_catalog_factory
from reviews.application import ReviewApplicationService
from reviews.infrastructure.factory import ReviewInfrastructureFactory


def get_review_factory() -> ReviewInfrastructureFactory:
    return ReviewInfrastructureFactory(transaction_manager=DjangoTransactionManager())


def get_review_service() -> ReviewApplicationService:
    """获取评价服务实例"""
    factory = get_review_factory()
    return ReviewApplicationService(
        review_repository=factory.create_review_repository(),
        product_repository=get_catalog_factory().products,
        transaction_manager=factory.transaction_manager
    )
