"""
领域异常模块。
包含领域模型中使用的各种异常类。
"""
from typing import Any, Dict, List, Optional


class DomainException(Exception):
    """
    领域异常基类。
    所有领域模型中的异常都应继承自此类。
    """

    def __init__(self, message: str):
        """
        初始化领域异常。

        Args:
            message: 异常消息
        """
        self.message = message
        super().__init__(self.message)


class InvalidEntityStateException(DomainException):
    """
    实体状态无效异常。
    当实体当前状态不允许执行某个操作时抛出。
    """

    def __init__(self, entity_name: str, reason: str):
        """
        Args:
            entity_name: 实体名称
            reason: 无效原因
        """
        message = f"{entity_name}当前状态不允许此操作: {reason}"
        super().__init__(message)
        self.entity_name = entity_name
        self.reason = reason


class EntityNotFoundException(DomainException):
    """
    实体未找到异常。
    当请求的实体不存在时抛出。
    """

    def __init__(self, entity_name: str, entity_id: Any):
        """
        Args:
            entity_name: 实体名称
            entity_id: 实体ID或业务编号
        """
        message = f"无法找到{entity_name}: ID={entity_id}"
        super().__init__(message)
        self.entity_name = entity_name
        self.entity_id = entity_id


class BusinessRuleViolationException(DomainException):
    """
    业务规则违反异常。
    """

    def __init__(self, rule_name: str, message: str):
        """
        Args:
            rule_name: 规则名称
            message: 面向用户的说明
        """
        full_message = f"违反业务规则 '{rule_name}': {message}"
        super().__init__(full_message)
        self.rule_name = rule_name
        self.detail = message


class ConcurrencyException(DomainException):
    """
    并发异常。
    当数据在读取之后已被其他请求修改时抛出。
    """

    def __init__(self, entity_name: str, entity_id: Any, current: Any = None, expected: Any = None):
        """
        Args:
            entity_name: 实体名称
            entity_id: 实体ID
            current: 当前版本标记(版本号或更新时间)
            expected: 客户端持有的版本标记
        """
        message = f"{entity_name}(ID={entity_id})已被另一个请求修改"
        super().__init__(message)
        self.entity_name = entity_name
        self.entity_id = entity_id
        self.current = current
        self.expected = expected


class ValidationException(DomainException):
    """
    数据验证异常。
    可以携带单个字段的错误，也可以携带 字段 -> 消息列表 的错误映射。
    """

    def __init__(
        self,
        field_name: Optional[str] = None,
        message: str = "数据验证失败",
        errors: Optional[Dict[str, List[str]]] = None
    ):
        """
        Args:
            field_name: 字段名称
            message: 异常消息
            errors: 多字段错误映射
        """
        if field_name:
            full_message = f"字段'{field_name}'验证失败: {message}"
        else:
            full_message = message
        super().__init__(full_message)
        self.field_name = field_name
        self.detail = message
        if errors is None and field_name:
            errors = {field_name: [message]}
        self.errors = errors or {}


class AuthorizationException(DomainException):
    """
    授权异常。
    当用户没有执行操作的权限时抛出。
    """

    def __init__(self, user_id: Any, operation: str, resource: Optional[str] = None):
        """
        Args:
            user_id: 用户ID，访客为None
            operation: 操作名称
            resource: 资源名称
        """
        if resource:
            message = f"用户(ID={user_id})没有权限执行'{operation}'操作，资源: {resource}"
        else:
            message = f"用户(ID={user_id})没有权限执行'{operation}'操作"
        super().__init__(message)
        self.user_id = user_id
        self.operation = operation
        self.resource = resource
