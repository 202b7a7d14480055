"""
领域事件。
应用服务在事务提交后发布事件，各应用在 AppConfig.ready() 中注册处理器。
"""
from datetime import datetime
from typing import Callable, Dict, List, Type
import uuid

from loguru import logger


class DomainEvent:
    """已经发生的领域事实，例如订单已创建"""

    def __init__(self):
        self.id = uuid.uuid4()
        self.occurred_on = datetime.now()

    @property
    def name(self) -> str:
        return self.__class__.__name__


EventHandler = Callable[[DomainEvent], None]


class DomainEvents:
    """
    进程内的事件注册表，发布时按注册顺序同步调用处理器。
    """

    _handlers: Dict[Type[DomainEvent], List[EventHandler]] = {}

    @classmethod
    def register(cls, event_type: Type[DomainEvent], handler: EventHandler) -> None:
        """同一处理器重复注册只生效一次"""
        handlers = cls._handlers.setdefault(event_type, [])
        if handler not in handlers:
            handlers.append(handler)

    @classmethod
    def publish(cls, event: DomainEvent) -> None:
        handlers = cls._handlers.get(type(event), [])
        logger.debug(f"发布领域事件 {event.name}({event.id}), 处理器 {len(handlers)} 个")
        for handler in handlers:
            handler(event)
