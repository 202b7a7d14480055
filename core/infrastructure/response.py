"""
统一响应封装。

所有接口返回相同的信封结构:
    {"code", "success", "message", "timestamp", "traceId", "data"?, "metadata"?}

code 是业务状态码，1xxxx 表示成功，4xxxx 与HTTP状态码的前三位对应，41xxx 是各业务模块的错误。
"""
import time
import uuid
from typing import Any, Dict, Optional

from rest_framework import status as http_status
from rest_framework.response import Response


class StatusCode:
    """业务状态码定义"""

    # 成功 (1xxxx)
    SUCCESS = 10000
    CREATED = 10001
    UPDATED = 10002
    DELETED = 10003

    # 通用客户端错误 (400xx)
    BAD_REQUEST = 40000
    VALIDATION_ERROR = 40001
    PARAM_ERROR = 40002

    # 认证和授权 (401xx, 403xx)
    UNAUTHORIZED = 40100
    LOGIN_FAILED = 40103
    FORBIDDEN = 40300

    # 资源不存在 (404xx)
    NOT_FOUND = 40400
    ENTITY_NOT_FOUND = 40401
    USER_NOT_FOUND = 40402
    PRODUCT_NOT_FOUND = 40403
    ORDER_NOT_FOUND = 40404
    ADDRESS_NOT_FOUND = 40405
    RETURN_NOT_FOUND = 40406
    CART_ITEM_NOT_FOUND = 40407
    REVIEW_NOT_FOUND = 40408
    WISHLIST_ITEM_NOT_FOUND = 40409

    METHOD_NOT_ALLOWED = 40500

    # 冲突 (409xx)
    CONFLICT = 40900
    OPTIMISTIC_LOCK_ERROR = 40901
    DUPLICATE_ENTITY = 40902

    # 商品 (410xx)
    PRODUCT_OFFLINE = 41000
    PRODUCT_NOT_PURCHASABLE = 41002
    VAT_RATE_NOT_FOUND = 41003

    # 订单 (411xx)
    ORDER_PAID = 41101
    ORDER_NOT_PAID = 41103
    ORDER_INVOICED = 41104

    # 结算 (412xx)
    CART_EMPTY = 41200
    CHECKOUT_INVALID = 41201

    # 退货 (413xx)
    RETURN_NOT_ALLOWED = 41300

    # 账户 (414xx)
    CUSTOMER_PROFILE_MISSING = 41400
    ACCOUNT_INACTIVE = 41401
    PASSWORD_INCORRECT = 41402

    # 评价 (415xx)
    REVIEW_EXISTS = 41500
    REVIEW_ALREADY_USEFUL = 41501

    SERVER_ERROR = 50000


STATUS_MESSAGES = {
    StatusCode.SUCCESS: "操作成功",
    StatusCode.CREATED: "创建成功",
    StatusCode.UPDATED: "更新成功",
    StatusCode.DELETED: "删除成功",

    StatusCode.BAD_REQUEST: "请求参数错误",
    StatusCode.VALIDATION_ERROR: "数据验证失败",
    StatusCode.PARAM_ERROR: "参数错误",

    StatusCode.UNAUTHORIZED: "请先登录",
    StatusCode.LOGIN_FAILED: "用户名或密码错误",
    StatusCode.FORBIDDEN: "权限不足",

    StatusCode.NOT_FOUND: "请求的资源不存在",
    StatusCode.ENTITY_NOT_FOUND: "实体不存在",
    StatusCode.USER_NOT_FOUND: "用户不存在",
    StatusCode.PRODUCT_NOT_FOUND: "商品不存在",
    StatusCode.ORDER_NOT_FOUND: "订单不存在",
    StatusCode.ADDRESS_NOT_FOUND: "地址不存在",
    StatusCode.RETURN_NOT_FOUND: "退货单不存在",
    StatusCode.CART_ITEM_NOT_FOUND: "购物车中没有该商品",
    StatusCode.REVIEW_NOT_FOUND: "评价不存在",
    StatusCode.WISHLIST_ITEM_NOT_FOUND: "收藏夹中没有该商品",

    StatusCode.METHOD_NOT_ALLOWED: "不支持该请求方法",

    StatusCode.CONFLICT: "资源冲突",
    StatusCode.OPTIMISTIC_LOCK_ERROR: "数据已被其他用户修改",
    StatusCode.DUPLICATE_ENTITY: "实体已存在",

    StatusCode.PRODUCT_OFFLINE: "商品已下线",
    StatusCode.PRODUCT_NOT_PURCHASABLE: "该商品不能直接购买",
    StatusCode.VAT_RATE_NOT_FOUND: "未配置该国家的增值税税率",

    StatusCode.ORDER_PAID: "订单已标记为已支付",
    StatusCode.ORDER_NOT_PAID: "订单已标记为未支付",
    StatusCode.ORDER_INVOICED: "订单已开具发票，不能修改",

    StatusCode.CART_EMPTY: "购物车为空",
    StatusCode.CHECKOUT_INVALID: "结算信息不完整",

    StatusCode.RETURN_NOT_ALLOWED: "该订单不能申请退货",

    StatusCode.CUSTOMER_PROFILE_MISSING: "当前用户没有客户资料",
    StatusCode.ACCOUNT_INACTIVE: "账户已停用",
    StatusCode.PASSWORD_INCORRECT: "密码不正确",

    StatusCode.REVIEW_EXISTS: "您已经评价过该商品",
    StatusCode.REVIEW_ALREADY_USEFUL: "您已经标记过该评价",

    StatusCode.SERVER_ERROR: "服务器内部错误",
}


def get_status_message(code: int) -> str:
    return STATUS_MESSAGES.get(code, "未知状态")


def build_envelope(
    success: bool,
    code: int,
    message: Optional[str] = None,
    data: Any = None,
    metadata: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """
    生成响应信封。data 和 metadata 为空时不出现在结果中。
    """
    body = {
        "code": code,
        "success": success,
        "message": message or get_status_message(code),
        "timestamp": int(time.time() * 1000),
        "traceId": uuid.uuid4().hex,
    }
    if data is not None:
        body["data"] = data
    if metadata:
        body["metadata"] = metadata
    return body


class ApiResponseBuilder:
    """统一格式的DRF响应"""

    @staticmethod
    def success(data=None, message=None, code=StatusCode.SUCCESS, metadata=None) -> Response:
        return Response(build_envelope(True, code, message, data, metadata), status=http_status.HTTP_200_OK)

    @staticmethod
    def created(data=None, message=None, code=StatusCode.CREATED, metadata=None) -> Response:
        return Response(build_envelope(True, code, message, data, metadata), status=http_status.HTTP_201_CREATED)

    @staticmethod
    def fail(message=None, code=StatusCode.BAD_REQUEST, data=None,
             http_code=http_status.HTTP_400_BAD_REQUEST, metadata=None) -> Response:
        """
        失败响应。

        Args:
            message: 错误消息，为空时使用状态码的默认消息
            code: 业务状态码
            data: 错误详情，表单错误为 字段 -> 消息列表
            http_code: HTTP状态码
            metadata: 元数据
        """
        return Response(build_envelope(False, code, message, data, metadata), status=http_code)

    @staticmethod
    def paginated(items, total, page, page_size, message=None, code=StatusCode.SUCCESS, metadata=None) -> Response:
        """
        分页响应，data 为 {"items": [...], "pagination": {...}}。
        """
        data = {
            "items": items,
            "pagination": {
                "total": total,
                "page": page,
                "pageSize": page_size,
                "hasMore": page * page_size < total,
            },
        }
        return Response(build_envelope(True, code, message, data, metadata), status=http_status.HTTP_200_OK)
