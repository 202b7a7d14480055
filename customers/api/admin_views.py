"""
后台客户与用户管理API视图。
"""
import logging

from core.domain.exceptions import DomainException, EntityNotFoundException
from core.infrastructure.api_view import ApiBaseView, parse_bool
from core.infrastructure.permissions import IsAdminOrManager
from core.infrastructure.response import StatusCode
from customers.application import ChangeActiveStatusCommand
from customers.api.serializers import IdListSerializer, UserIdListSerializer
from customers.api.dependencies import get_customer_admin_service

logger = logging.getLogger(__name__)


class AdminCustomerListView(ApiBaseView):
    """后台客户列表"""
    permission_classes = [IsAdminOrManager]

    def get(self, request):
        page, page_size = self.get_page_params(request)
        filters = {
            'search': request.query_params.get('search'),
            'customer_type': request.query_params.get('customer_type'),
            'is_active': parse_bool(request.query_params.get('is_active')),
        }
        items, total = get_customer_admin_service().list_customers(filters, page, page_size)
        return self.paginated_response(items, total, page, page_size, metadata={"filters": filters})


class AdminCustomerDetailView(ApiBaseView):
    """后台客户详情"""
    permission_classes = [IsAdminOrManager]

    def get(self, request, customer_id):
        try:
            data = get_customer_admin_service().get_customer(customer_id)
        except EntityNotFoundException as e:
            return self.domain_failed_response(e, StatusCode.USER_NOT_FOUND)
        return self.success_response(data=data)


class AdminCustomerStatusView(ApiBaseView):
    """批量启用或停用客户，active 由路由决定"""
    permission_classes = [IsAdminOrManager]
    active = True

    def post(self, request):
        serializer = IdListSerializer(data=request.data)
        if not serializer.is_valid():
            return self.validation_failed_response(serializer.errors)

        command = ChangeActiveStatusCommand(ids=serializer.validated_data['ids'], active=self.active)
        updated = get_customer_admin_service().change_customers_status(command)
        return self.success_response(data={"updated": updated}, message="客户状态已更新")


class AdminUserListView(ApiBaseView):
    """后台用户(管理员和运营经理)列表"""
    permission_classes = [IsAdminOrManager]

    def get(self, request):
        page, page_size = self.get_page_params(request)
        filters = {
            'search': request.query_params.get('search'),
            'is_active': parse_bool(request.query_params.get('is_active')),
        }
        items, total = get_customer_admin_service().list_users(filters, page, page_size)
        return self.paginated_response(items, total, page, page_size, metadata={"filters": filters})


class AdminUserStatusView(ApiBaseView):
    """批量启用或停用后台用户"""
    permission_classes = [IsAdminOrManager]
    active = True

    def post(self, request):
        serializer = UserIdListSerializer(data=request.data)
        if not serializer.is_valid():
            return self.validation_failed_response(serializer.errors)

        command = ChangeActiveStatusCommand(
            ids=serializer.validated_data['ids'],
            active=self.active,
            acting_user_id=request.user.pk
        )
        try:
            updated = get_customer_admin_service().change_users_status(command)
        except DomainException as e:
            return self.domain_failed_response(e)
        return self.success_response(data={"updated": updated}, message="用户状态已更新")
