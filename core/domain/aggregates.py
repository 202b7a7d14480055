"""
实体和聚合根基类。
"""
from typing import Any
import uuid


class Entity:
    """
    实体基类，相等性由标识决定，与属性值无关。
    """

    def __init__(self, id: Any = None):
        self.id = id if id is not None else uuid.uuid4()

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Entity):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} id={self.id}>"


class AggregateRoot(Entity):
    """
    聚合根基类。
    外部只能通过聚合根的方法修改聚合内部对象，仓储按聚合整体读取和保存。
    """
