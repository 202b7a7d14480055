"""
事务管理器模块。
提供事务控制的接口和实现。
"""
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Callable, Generator
from django.db import transaction as django_transaction
from loguru import logger


class TransactionManager(ABC):
    """
    事务管理器接口。
    应用服务通过它划定写操作的事务边界。
    """

    @abstractmethod
    @contextmanager
    def start(self) -> Generator[None, None, None]:
        """
        开启一个事务，作用域正常结束时提交，抛出异常时回滚。

        Yields:
            None
        """
        pass

    @abstractmethod
    def on_commit(self, callback: Callable[[], None]) -> None:
        """
        注册在当前事务提交后执行的回调，例如发布领域事件。

        Args:
            callback: 无参回调
        """
        pass


class DjangoTransactionManager(TransactionManager):
    """
    基于Django atomic 的事务管理器实现。
    嵌套调用时使用保存点。
    """

    @contextmanager
    def start(self) -> Generator[None, None, None]:
        try:
            with django_transaction.atomic():
                logger.debug("事务已开启")
                yield
                logger.debug("事务已提交")
        except Exception as e:
            logger.error(f"事务回滚: {e}")
            raise

    def on_commit(self, callback: Callable[[], None]) -> None:
        django_transaction.on_commit(callback)
