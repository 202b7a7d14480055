"""
后台退货管理API视图。
"""
import logging

from core.domain.exceptions import DomainException
from core.infrastructure.api_view import ApiBaseView
from core.infrastructure.permissions import IsAdminOrManager
from core.infrastructure.response import StatusCode
from returns.application import UpdateReturnCommand
from returns.domain.config import ADMIN_PAGE_SIZE
from returns.api.serializers import (
    AdminReturnListQuerySerializer,
    ReturnStatusSerializer,
    RefundAmountSerializer,
    RestockItemSerializer,
)
from returns.api.dependencies import get_return_admin_service

logger = logging.getLogger(__name__)


class AdminReturnBaseView(ApiBaseView):
    permission_classes = [IsAdminOrManager]


class AdminReturnListView(AdminReturnBaseView):
    """后台退货列表"""

    def get(self, request):
        serializer = AdminReturnListQuerySerializer(data=request.query_params)
        if not serializer.is_valid():
            return self.validation_failed_response(serializer.errors)

        filters = serializer.validated_data
        service = get_return_admin_service()
        page, page_size = self.get_page_params(request, ADMIN_PAGE_SIZE)
        items, total = service.list_returns(filters, page, page_size)
        return self.paginated_response(items, total, page, page_size, metadata={
            'filters': {k: str(v) for k, v in filters.items()},
            'statuses': service.get_statuses(),
        })


class AdminReturnDetailView(AdminReturnBaseView):
    """后台退货详情"""

    def get(self, request, return_id):
        try:
            data = get_return_admin_service().get_return(return_id)
        except DomainException as e:
            return self.domain_failed_response(e, StatusCode.RETURN_NOT_FOUND)
        return self.success_response(data=data)


class AdminReturnUpdateView(AdminReturnBaseView):
    """修改退货单单个属性的视图基类"""
    serializer_class = None
    field_name = None
    success_message = "退货单已更新"

    def perform(self, command: UpdateReturnCommand):
        raise NotImplementedError

    def post(self, request, return_id):
        serializer = self.serializer_class(data=request.data)
        if not serializer.is_valid():
            return self.validation_failed_response(serializer.errors)

        command = UpdateReturnCommand(return_id, serializer.validated_data[self.field_name], request.user.pk)
        try:
            data = self.perform(command)
        except DomainException as e:
            return self.domain_failed_response(e, StatusCode.RETURN_NOT_FOUND)
        return self.success_response(data=data, message=self.success_message, code=StatusCode.UPDATED)


class AdminReturnStatusView(AdminReturnUpdateView):
    serializer_class = ReturnStatusSerializer
    field_name = 'status'
    success_message = "退货状态已更新"

    def perform(self, command):
        return get_return_admin_service().update_status(command)


class AdminReturnRefundAmountView(AdminReturnUpdateView):
    serializer_class = RefundAmountSerializer
    field_name = 'refund_amount'
    success_message = "退款金额已更新"

    def perform(self, command):
        return get_return_admin_service().update_refund_amount(command)


class AdminReturnRestockItemView(AdminReturnUpdateView):
    serializer_class = RestockItemSerializer
    field_name = 'restock_item'
    success_message = "回库标记已更新"

    def perform(self, command):
        return get_return_admin_service().update_restock_item(command)
