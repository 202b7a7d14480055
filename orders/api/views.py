"""
客户订单API视图。
"""
import logging

from core.domain.exceptions import EntityNotFoundException
from core.infrastructure.api_view import ApiBaseView
from core.infrastructure.permissions import IsCustomer
from core.infrastructure.response import StatusCode
from orders.domain.config import CUSTOMER_PAGE_SIZE
from orders.api.serializers import MyOrderListQuerySerializer
from orders.api.dependencies import get_customer_order_service

logger = logging.getLogger(__name__)


class MyOrderListView(ApiBaseView):
    """当前客户的订单历史"""
    permission_classes = [IsCustomer]

    def get(self, request):
        serializer = MyOrderListQuerySerializer(data=request.query_params)
        if not serializer.is_valid():
            return self.validation_failed_response(serializer.errors)

        page, page_size = self.get_page_params(request, CUSTOMER_PAGE_SIZE)
        items, total = get_customer_order_service().list_my_orders(
            request.user.customer.id, serializer.validated_data, page, page_size
        )
        return self.paginated_response(items, total, page, page_size)


class MyOrderDetailView(ApiBaseView):
    """当前客户的订单详情"""
    permission_classes = [IsCustomer]

    def get(self, request, order_number):
        try:
            data = get_customer_order_service().get_my_order(request.user.customer.id, order_number)
        except EntityNotFoundException as e:
            return self.domain_failed_response(e, StatusCode.ORDER_NOT_FOUND)
        return self.success_response(data=data)
