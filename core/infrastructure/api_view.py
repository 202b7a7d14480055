"""
API视图基类。
提供统一的API视图类，用于规范API响应格式和处理通用逻辑。
"""
from typing import Tuple

from rest_framework import status
from rest_framework.views import APIView

from core.domain.exceptions import DomainException
from core.infrastructure.exception_handler import domain_exception_response
from core.infrastructure.response import ApiResponseBuilder, StatusCode


def parse_bool(value):
    """查询参数中的布尔值，空值返回None"""
    if value in (None, ''):
        return None
    return str(value).lower() in ('1', 'true', 'yes', 'on')


class ApiBaseView(APIView):
    """API视图基类，提供统一的响应方法"""

    # 分页参数上限
    max_page_size = 100

    def success_response(self, data=None, message="操作成功", code=StatusCode.SUCCESS, metadata=None):
        """
        成功响应

        Args:
            data: 响应数据
            message: 响应消息
            code: 业务状态码
            metadata: 元数据

        Returns:
            Response: 统一格式的响应
        """
        return ApiResponseBuilder.success(data=data, message=message, code=code, metadata=metadata)

    def created_response(self, data=None, message="创建成功", code=StatusCode.CREATED, metadata=None):
        return ApiResponseBuilder.created(data=data, message=message, code=code, metadata=metadata)

    def failed_response(self, message=None, code=StatusCode.BAD_REQUEST,
                        data=None, http_code=status.HTTP_400_BAD_REQUEST, metadata=None):
        """
        失败响应

        Args:
            message: 错误消息，为空时使用状态码的默认消息
            code: 业务状态码
            data: 错误详情数据
            http_code: HTTP状态码
            metadata: 元数据

        Returns:
            Response: 统一格式的响应
        """
        return ApiResponseBuilder.fail(
            message=message, code=code, data=data,
            http_code=http_code, metadata=metadata
        )

    def validation_failed_response(self, errors, message="请求数据无效"):
        """表单验证失败响应，errors为 字段 -> 消息列表"""
        return self.failed_response(
            message=message,
            code=StatusCode.VALIDATION_ERROR,
            data=errors,
            http_code=status.HTTP_400_BAD_REQUEST
        )

    def domain_failed_response(self, exc: DomainException, not_found_code=StatusCode.ENTITY_NOT_FOUND):
        """
        将常见领域异常转换为失败响应。

        Args:
            exc: 领域异常
            not_found_code: 实体不存在时使用的业务状态码
        """
        return domain_exception_response(exc, not_found_code)

    def paginated_response(self, items, total, page, page_size,
                           message="查询成功", code=StatusCode.SUCCESS, metadata=None):
        """
        分页响应

        Args:
            items: 分页项列表
            total: 总项数
            page: 当前页码
            page_size: 每页大小
            message: 响应消息
            code: 业务状态码
            metadata: 元数据

        Returns:
            Response: 统一格式的响应
        """
        return ApiResponseBuilder.paginated(
            items=items, total=total, page=page, page_size=page_size,
            message=message, code=code, metadata=metadata
        )

    def get_page_params(self, request, default_page_size: int = 20) -> Tuple[int, int]:
        """
        解析分页参数，非法值回退为默认值。

        Returns:
            (page, page_size)
        """
        try:
            page = max(1, int(request.query_params.get('page', 1)))
        except (TypeError, ValueError):
            page = 1
        try:
            page_size = int(request.query_params.get('page_size', default_page_size))
        except (TypeError, ValueError):
            page_size = default_page_size
        return page, min(self.max_page_size, max(1, page_size))
