"""
前台退货API视图。
"""
import logging

from core.domain.exceptions import DomainException
from core.infrastructure.api_view import ApiBaseView
from core.infrastructure.permissions import IsCustomer
from core.infrastructure.response import StatusCode
from customers.application import ShopperContext
from returns.application import SearchOrderCommand, CreateReturnCommand
from returns.domain import ReturnNotAllowedException
from returns.domain.config import CUSTOMER_PAGE_SIZE
from returns.api.serializers import SearchOrderSerializer, CreateReturnSerializer, MyReturnListQuerySerializer
from returns.api.dependencies import get_return_service

logger = logging.getLogger(__name__)


class ReturnBaseView(ApiBaseView):

    @staticmethod
    def shopper_identity(request):
        """(客户, 登录用户)，访客均为None"""
        shopper = ShopperContext.from_request(request)
        user = shopper.user if shopper.user is not None and shopper.user.is_authenticated else None
        return shopper.customer, user

    def return_failed_response(self, exc: DomainException):
        if isinstance(exc, ReturnNotAllowedException):
            return self.failed_response(exc.detail, StatusCode.RETURN_NOT_ALLOWED, data=exc.errors or None)
        return self.domain_failed_response(exc, StatusCode.ORDER_NOT_FOUND)


class ReturnSearchOrderView(ReturnBaseView):
    """按订单号和邮箱/电话查找可退货订单"""

    def post(self, request):
        serializer = SearchOrderSerializer(data=request.data)
        if not serializer.is_valid():
            return self.validation_failed_response(serializer.errors)

        data = serializer.validated_data
        customer, user = self.shopper_identity(request)
        try:
            order = get_return_service().search_order(SearchOrderCommand(
                order_number=data['order_number'],
                email=data.get('email'),
                phone=data.get('phone'),
                customer=customer,
                user=user,
                website=data.get('website'),
            ))
        except DomainException as e:
            return self.return_failed_response(e)
        return self.success_response(data=order)


class ReturnCreateView(ReturnBaseView):
    """提交退货申请"""

    def post(self, request):
        serializer = CreateReturnSerializer(data=request.data)
        if not serializer.is_valid():
            return self.validation_failed_response(serializer.errors)

        customer, user = self.shopper_identity(request)
        try:
            result = get_return_service().create_return(CreateReturnCommand(
                customer=customer, user=user, **serializer.validated_data
            ))
        except DomainException as e:
            logger.info(f"退货申请被拒绝: {e}")
            return self.return_failed_response(e)
        return self.created_response(data=result, message="退货申请已提交")


class MyReturnListView(ApiBaseView):
    """当前客户的退货历史"""
    permission_classes = [IsCustomer]

    def get(self, request):
        serializer = MyReturnListQuerySerializer(data=request.query_params)
        if not serializer.is_valid():
            return self.validation_failed_response(serializer.errors)

        page, page_size = self.get_page_params(request, CUSTOMER_PAGE_SIZE)
        items, total = get_return_service().list_my_returns(
            request.user.customer.id, serializer.validated_data, page, page_size
        )
        return self.paginated_response(items, total, page, page_size)
