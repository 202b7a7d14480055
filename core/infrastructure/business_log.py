"""
业务事件日志。
统一记录订单、退货等关键业务操作，附带操作者和请求信息。
"""
from typing import Any, Dict, Optional

from loguru import logger


def request_context(request) -> Dict[str, Any]:
    """提取请求中与审计相关的信息"""
    if request is None:
        return {}
    user = getattr(request, 'user', None)
    return {
        "user_id": user.pk if user is not None and user.is_authenticated else None,
        "ip": request.META.get('HTTP_X_FORWARDED_FOR', request.META.get('REMOTE_ADDR')),
        "method": request.method,
        "path": request.path,
    }


def log_business_event(event: str, context: Optional[Dict[str, Any]] = None, request=None) -> None:
    """
    记录业务事件。

    Args:
        event: 事件名称，例如 order.status.updated
        context: 事件相关数据
        request: 当前请求，可为空
    """
    payload = dict(context or {})
    payload.update(request_context(request))
    logger.bind(event=event, **payload).info(f"业务事件 {event}: {payload}")
