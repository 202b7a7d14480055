"""
后台订单管理API视图。
"""
import logging

from core.domain.exceptions import DomainException
from core.infrastructure.api_view import ApiBaseView, parse_bool
from core.infrastructure.permissions import IsAdminOrManager
from core.infrastructure.response import StatusCode
from orders.application import UpdateOrderCommand, BatchUpdateOrderCommand
from orders.domain import OrderInvoicedException, PaymentStateUnchangedException
from orders.domain.config import ADMIN_PAGE_SIZE
from orders.api.serializers import AdminOrderListQuerySerializer, BatchUpdateOrderSerializer, UpdateOrderSerializer
from orders.api.dependencies import get_order_admin_service

logger = logging.getLogger(__name__)


class AdminOrderBaseView(ApiBaseView):
    """后台订单视图基类，统一处理订单领域异常"""
    permission_classes = [IsAdminOrManager]

    def order_failed_response(self, exc: DomainException):
        if isinstance(exc, OrderInvoicedException):
            return self.failed_response(exc.detail, StatusCode.ORDER_INVOICED)
        if isinstance(exc, PaymentStateUnchangedException):
            return self.failed_response(
                str(exc),
                StatusCode.ORDER_PAID if exc.is_paid else StatusCode.ORDER_NOT_PAID,
                data={
                    'is_paid': exc.is_paid,
                    'paid_at': exc.paid_at.isoformat() if exc.paid_at else None,
                }
            )
        return self.domain_failed_response(exc, StatusCode.ORDER_NOT_FOUND)


class AdminOrderListView(AdminOrderBaseView):
    """后台订单列表，附带筛选项"""

    def get(self, request):
        serializer = AdminOrderListQuerySerializer(data=request.query_params)
        if not serializer.is_valid():
            return self.validation_failed_response(serializer.errors)

        filters = dict(serializer.validated_data)
        filters['payment_status'] = parse_bool(request.query_params.get('payment_status'))
        filters['has_invoice'] = parse_bool(request.query_params.get('has_invoice'))

        service = get_order_admin_service()
        page, page_size = self.get_page_params(request, ADMIN_PAGE_SIZE)
        items, total = service.list_orders(filters, page, page_size)
        return self.paginated_response(items, total, page, page_size, metadata={
            'filters': {k: str(v) for k, v in filters.items() if v is not None},
            'options': service.get_filter_options(),
        })


class AdminOrderDetailView(AdminOrderBaseView):
    """后台订单详情"""

    def get(self, request, order_number):
        try:
            data = get_order_admin_service().get_order(order_number)
        except DomainException as e:
            return self.order_failed_response(e)
        return self.success_response(data=data)


class AdminOrderMarkPaidView(AdminOrderBaseView):
    """标记订单为已支付"""

    def post(self, request, order_number):
        try:
            data = get_order_admin_service().mark_as_paid(order_number, request.user.pk)
        except DomainException as e:
            return self.order_failed_response(e)
        return self.success_response(data=data, message="订单已标记为已支付", code=StatusCode.UPDATED)


class AdminOrderMarkUnpaidView(AdminOrderBaseView):
    """标记订单为未支付"""

    def post(self, request, order_number):
        try:
            data = get_order_admin_service().mark_as_unpaid(order_number, request.user.pk)
        except DomainException as e:
            return self.order_failed_response(e)
        return self.success_response(data=data, message="订单已标记为未支付", code=StatusCode.UPDATED)


class AdminOrderUpdateView(AdminOrderBaseView):
    """单项修改订单"""

    def post(self, request, order_number):
        serializer = UpdateOrderSerializer(data=request.data)
        if not serializer.is_valid():
            return self.validation_failed_response(serializer.errors)

        data = dict(serializer.validated_data)
        command = UpdateOrderCommand(
            order_number=order_number,
            action=data.pop('action'),
            data=data,
            user_id=request.user.pk
        )
        try:
            order = get_order_admin_service().update_order(command)
        except DomainException as e:
            return self.order_failed_response(e)
        return self.success_response(data=order, message="订单已更新", code=StatusCode.UPDATED)


class AdminOrderBatchUpdateView(AdminOrderBaseView):
    """批量修改订单，所有修改在一个事务中执行"""

    def post(self, request, order_number):
        serializer = BatchUpdateOrderSerializer(data=request.data)
        if not serializer.is_valid():
            return self.validation_failed_response(serializer.errors)

        command = BatchUpdateOrderCommand(
            order_number=order_number,
            changes=[dict(change) for change in serializer.validated_data['changes']],
            original_updated_at=serializer.validated_data.get('originalUpdatedAt'),
            user_id=request.user.pk
        )
        try:
            order = get_order_admin_service().batch_update(command)
        except DomainException as e:
            return self.order_failed_response(e)
        return self.success_response(data=order, message="订单已更新", code=StatusCode.UPDATED)
