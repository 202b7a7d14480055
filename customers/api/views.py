"""
客户API视图。
注册、登录、当前用户、地址簿和地区查询接口。
"""
import logging

from django.contrib.auth import authenticate, login, logout
from rest_framework import status
from rest_framework.permissions import IsAuthenticated

from core.domain.exceptions import DomainException, EntityNotFoundException
from core.infrastructure.api_view import ApiBaseView
from core.infrastructure.permissions import IsCustomer
from core.infrastructure.response import StatusCode
from customers.application import (
    CustomerDTO,
    RegisterCustomerCommand,
    SaveAddressCommand,
    UpdateCompanyInfoCommand,
    UpdateProfileCommand,
)
from customers.domain import IncorrectPasswordException
from customers.api.serializers import (
    AddressSerializer,
    CompanyInfoSerializer,
    DeleteAccountSerializer,
    LoginSerializer,
    ProfileSerializer,
    RegisterSerializer,
)
from customers.api.dependencies import get_customer_service

logger = logging.getLogger(__name__)

# 注册后直接登录使用的认证后端
AUTH_BACKEND = 'django.contrib.auth.backends.ModelBackend'


def serialize_me(user) -> dict:
    """当前登录用户及其客户资料"""
    customer = getattr(user, 'customer', None)
    return {
        "user": {
            "id": user.pk,
            "username": user.get_username(),
            "email": user.email,
            "first_name": user.first_name,
            "last_name": user.last_name,
            "is_staff": user.is_staff,
            "is_superuser": user.is_superuser,
        },
        "customer": CustomerDTO.from_model(customer).to_dict() if customer is not None else None,
    }


class RegisterView(ApiBaseView):
    """客户注册接口，注册成功后自动登录"""

    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        if not serializer.is_valid():
            return self.validation_failed_response(serializer.errors)

        data = serializer.validated_data
        command = RegisterCustomerCommand(
            username=data['username'],
            email=data['email'],
            password=data['password'],
            first_name=data['first_name'],
            last_name=data['last_name'],
            phone=data['phone'],
            customer_type=data['customer_type'],
            company_name=data['company_name'],
            fiscal_code=data['fiscal_code'],
            reg_number=data['reg_number'],
        )

        try:
            user = get_customer_service().register(command)
        except DomainException as e:
            return self.domain_failed_response(e)

        login(request, user, backend=AUTH_BACKEND)
        return self.created_response(data=serialize_me(user), message="注册成功")


class LoginView(ApiBaseView):
    """登录接口，用户名或邮箱均可"""

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        if not serializer.is_valid():
            return self.validation_failed_response(serializer.errors)

        data = serializer.validated_data
        username = get_customer_service().resolve_login_username(data['login'])
        user = authenticate(request, username=username, password=data['password']) if username else None
        if user is None:
            logger.info(f"登录失败: {data['login']}")
            return self.failed_response(
                code=StatusCode.LOGIN_FAILED,
                http_code=status.HTTP_401_UNAUTHORIZED
            )

        customer = getattr(user, 'customer', None)
        if customer is not None and not customer.is_active:
            return self.failed_response(
                code=StatusCode.ACCOUNT_INACTIVE,
                http_code=status.HTTP_403_FORBIDDEN
            )

        # 登录时触发 user_logged_in 信号，会话购物车在信号中合并
        login(request, user)
        return self.success_response(data=serialize_me(user), message="登录成功")


class LogoutView(ApiBaseView):
    """退出登录"""

    def post(self, request):
        logout(request)
        return self.success_response(message="已退出登录")


class MeView(ApiBaseView):
    """当前登录用户"""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return self.success_response(data=serialize_me(request.user))


class ProfileView(ApiBaseView):
    """修改个人资料"""
    permission_classes = [IsCustomer]

    def put(self, request):
        serializer = ProfileSerializer(data=request.data)
        if not serializer.is_valid():
            return self.validation_failed_response(serializer.errors)

        command = UpdateProfileCommand(customer_id=request.user.customer.id, **serializer.validated_data)
        try:
            customer = get_customer_service().update_profile(command)
        except DomainException as e:
            return self.domain_failed_response(e)
        return self.success_response(data=customer.to_dict(), message="资料已更新")


class CompanyInfoView(ApiBaseView):
    """修改企业客户的公司信息"""
    permission_classes = [IsCustomer]

    def put(self, request):
        serializer = CompanyInfoSerializer(data=request.data)
        if not serializer.is_valid():
            return self.validation_failed_response(serializer.errors)

        command = UpdateCompanyInfoCommand(customer_id=request.user.customer.id, **serializer.validated_data)
        try:
            customer = get_customer_service().update_company_info(command)
        except DomainException as e:
            return self.domain_failed_response(e)
        return self.success_response(data=customer.to_dict(), message="公司信息已更新")


class AccountView(ApiBaseView):
    """删除当前账户，成功后退出登录"""
    permission_classes = [IsCustomer]

    def delete(self, request):
        serializer = DeleteAccountSerializer(data=request.data)
        if not serializer.is_valid():
            return self.validation_failed_response(serializer.errors)

        user_id = request.user.pk
        try:
            get_customer_service().delete_account(user_id, serializer.validated_data['password'])
        except IncorrectPasswordException as e:
            return self.failed_response(
                e.message, StatusCode.PASSWORD_INCORRECT, data={'password': [e.message]}
            )
        except DomainException as e:
            return self.domain_failed_response(e)

        logout(request)
        return self.success_response(message="账户已删除", code=StatusCode.DELETED)


class AddressListCreateView(ApiBaseView):
    """地址列表和新建接口"""
    permission_classes = [IsCustomer]

    def get(self, request):
        address_type = request.query_params.get('type')
        addresses = get_customer_service().list_addresses(request.user.customer.id, address_type)
        return self.success_response(data=[a.to_dict() for a in addresses])

    def post(self, request):
        serializer = AddressSerializer(data=request.data)
        if not serializer.is_valid():
            return self.validation_failed_response(serializer.errors)

        command = SaveAddressCommand(customer_id=request.user.customer.id, data=serializer.validated_data)
        try:
            address = get_customer_service().create_address(command)
        except DomainException as e:
            return self.domain_failed_response(e)
        return self.created_response(data=address.to_dict(), message="地址已保存")


class AddressDetailView(ApiBaseView):
    """地址详情、修改和删除接口"""
    permission_classes = [IsCustomer]

    def get(self, request, address_id):
        try:
            address = get_customer_service().get_address(request.user.customer.id, address_id)
        except EntityNotFoundException as e:
            return self.domain_failed_response(e, StatusCode.ADDRESS_NOT_FOUND)
        return self.success_response(data=address.to_dict())

    def put(self, request, address_id):
        serializer = AddressSerializer(data=request.data)
        if not serializer.is_valid():
            return self.validation_failed_response(serializer.errors)

        command = SaveAddressCommand(
            customer_id=request.user.customer.id,
            data=serializer.validated_data,
            address_id=address_id
        )
        try:
            address = get_customer_service().update_address(command)
        except DomainException as e:
            return self.domain_failed_response(e, StatusCode.ADDRESS_NOT_FOUND)
        return self.success_response(data=address.to_dict(), message="地址已更新", code=StatusCode.UPDATED)

    def delete(self, request, address_id):
        try:
            get_customer_service().delete_address(request.user.customer.id, address_id)
        except EntityNotFoundException as e:
            return self.domain_failed_response(e, StatusCode.ADDRESS_NOT_FOUND)
        return self.success_response(message="地址已删除", code=StatusCode.DELETED)


class SetPreferredAddressView(ApiBaseView):
    """设置首选收货地址"""
    permission_classes = [IsCustomer]

    def post(self, request, address_id):
        try:
            address = get_customer_service().set_preferred_address(request.user.customer.id, address_id)
        except DomainException as e:
            return self.domain_failed_response(e, StatusCode.ADDRESS_NOT_FOUND)
        return self.success_response(data=address.to_dict(), message="已设为首选地址")


class CountryListView(ApiBaseView):
    """可用国家列表"""

    def get(self, request):
        return self.success_response(data=get_customer_service().list_countries())


class StateListView(ApiBaseView):
    """国家下的州县列表"""

    def get(self, request, country_id):
        try:
            states = get_customer_service().list_states(country_id)
        except EntityNotFoundException as e:
            return self.domain_failed_response(e, StatusCode.NOT_FOUND)
        return self.success_response(data=states)


class CityListView(ApiBaseView):
    """州县下的城市列表"""

    def get(self, request, state_id):
        return self.success_response(data=get_customer_service().list_cities(state_id))
