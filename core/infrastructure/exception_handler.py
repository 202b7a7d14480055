"""
统一异常处理器。
视图没有处理的异常在这里转换为统一的API响应格式，视图基类也复用这里的领域异常转换。
"""
import logging

from django.core.exceptions import PermissionDenied, ValidationError
from django.http import Http404
from rest_framework import exceptions as drf_exceptions
from rest_framework import status

from core.domain.exceptions import (
    AuthorizationException,
    BusinessRuleViolationException,
    ConcurrencyException,
    DomainException,
    EntityNotFoundException,
    ValidationException,
)
from core.infrastructure.response import ApiResponseBuilder, StatusCode, get_status_message

logger = logging.getLogger(__name__)

# 框架异常 -> (业务状态码, HTTP状态码)，按顺序匹配，子类必须排在父类前面
FRAMEWORK_EXCEPTIONS = (
    (Http404, StatusCode.NOT_FOUND, status.HTTP_404_NOT_FOUND),
    (PermissionDenied, StatusCode.FORBIDDEN, status.HTTP_403_FORBIDDEN),
    (drf_exceptions.NotAuthenticated, StatusCode.UNAUTHORIZED, None),
    (drf_exceptions.AuthenticationFailed, StatusCode.UNAUTHORIZED, None),
    (drf_exceptions.PermissionDenied, StatusCode.FORBIDDEN, status.HTTP_403_FORBIDDEN),
    (drf_exceptions.NotFound, StatusCode.NOT_FOUND, status.HTTP_404_NOT_FOUND),
    (drf_exceptions.MethodNotAllowed, StatusCode.METHOD_NOT_ALLOWED, status.HTTP_405_METHOD_NOT_ALLOWED),
)


def domain_exception_response(exc: DomainException, not_found_code=StatusCode.ENTITY_NOT_FOUND):
    """
    领域异常转换为失败响应。

    Args:
        exc: 领域异常
        not_found_code: 实体不存在时使用的业务状态码，例如 ORDER_NOT_FOUND

    Returns:
        Response: 统一格式的失败响应
    """
    if isinstance(exc, EntityNotFoundException):
        return ApiResponseBuilder.fail(str(exc), not_found_code, http_code=status.HTTP_404_NOT_FOUND)
    if isinstance(exc, ValidationException):
        return ApiResponseBuilder.fail(exc.detail, StatusCode.VALIDATION_ERROR, data=exc.errors)
    if isinstance(exc, ConcurrencyException):
        return ApiResponseBuilder.fail(
            str(exc), StatusCode.OPTIMISTIC_LOCK_ERROR,
            data={"current": exc.current, "expected": exc.expected},
            http_code=status.HTTP_409_CONFLICT
        )
    if isinstance(exc, AuthorizationException):
        return ApiResponseBuilder.fail(str(exc), StatusCode.FORBIDDEN, http_code=status.HTTP_403_FORBIDDEN)
    if isinstance(exc, BusinessRuleViolationException):
        return ApiResponseBuilder.fail(exc.detail, StatusCode.BAD_REQUEST, data={"rule": exc.rule_name})
    return ApiResponseBuilder.fail(str(exc), StatusCode.BAD_REQUEST)


def unified_exception_handler(exc, context):
    """
    DRF的 EXCEPTION_HANDLER。

    Args:
        exc: 异常对象
        context: 异常上下文，包含 request 和 view

    Returns:
        Response: 统一格式的API响应
    """
    request = context.get('request')
    where = f"{request.method} {request.path}" if request is not None else "-"

    if isinstance(exc, DomainException):
        logger.warning(f"未在视图中处理的领域异常 {where}: {exc}")
        return domain_exception_response(exc)

    if isinstance(exc, (ValidationError, drf_exceptions.ValidationError)):
        if isinstance(exc, ValidationError):
            detail = exc.message_dict if hasattr(exc, 'error_dict') else exc.messages
        else:
            detail = exc.detail
        return ApiResponseBuilder.fail("数据验证失败", StatusCode.VALIDATION_ERROR, data=detail)

    for exc_class, code, http_code in FRAMEWORK_EXCEPTIONS:
        if isinstance(exc, exc_class):
            # 会话认证没有认证头，DRF会把401降级为403，沿用异常自带的状态码
            http_code = http_code or getattr(exc, 'status_code', status.HTTP_403_FORBIDDEN)
            return ApiResponseBuilder.fail(get_status_message(code), code, http_code=http_code)

    if isinstance(exc, drf_exceptions.APIException):
        return ApiResponseBuilder.fail(str(exc.detail), StatusCode.BAD_REQUEST, http_code=exc.status_code)

    logger.exception(f"未处理的异常 {where}: {exc.__class__.__name__}")
    return ApiResponseBuilder.fail(
        get_status_message(StatusCode.SERVER_ERROR),
        StatusCode.SERVER_ERROR,
        http_code=status.HTTP_500_INTERNAL_SERVER_ERROR
    )
