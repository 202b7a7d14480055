"""
领域模型包。
提供实体、值对象、聚合根和领域事件等领域驱动设计(DDD)的核心概念。
"""

# 基础类
from core.domain.aggregates import Entity, AggregateRoot
from core.domain.value_objects import ValueObject, round_money, BASE_CURRENCY

# 领域事件
from core.domain.events import DomainEvent, DomainEvents

# 领域异常
from core.domain.exceptions import (
    DomainException,
    InvalidEntityStateException,
    EntityNotFoundException,
    BusinessRuleViolationException,
    ConcurrencyException,
    ValidationException,
    AuthorizationException,
)

# 仓储接口
from core.domain.repositories import Repository, SearchableRepository

# 业务编号
from core.domain.codes import ReadableCodeGenerator

__all__ = [
    # 基础类
    'Entity',
    'ValueObject',
    'round_money',
    'BASE_CURRENCY',
    'AggregateRoot',

    # 领域事件
    'DomainEvent',
    'DomainEvents',

    # 领域异常
    'DomainException',
    'InvalidEntityStateException',
    'EntityNotFoundException',
    'BusinessRuleViolationException',
    'ConcurrencyException',
    'ValidationException',
    'AuthorizationException',

    # 仓储接口
    'Repository',
    'SearchableRepository',

    # 业务编号
    'ReadableCodeGenerator',
]
