"""
退货基础设施层工厂。
"""
from core.infrastructure.transaction import TransactionManager

from returns.domain import ReturnRepository
from returns.infrastructure.repositories.django_return_repository import DjangoReturnRepository


class ReturnInfrastructureFactory:
    """
    退货基础设施层工厂类。
    """

    def __init__(self, transaction_manager: TransactionManager):
        self.transaction_manager = transaction_manager
        self._return_repository = None

    def create_return_repository(self) -> ReturnRepository:
        if not self._return_repository:
            self._return_repository = DjangoReturnRepository()
        return self._return_repository
