"""
客户应用服务。
处理注册、个人资料、地址簿和地区查询。
"""
from typing import Any, Dict, List, Optional

from loguru import logger

from core.domain.exceptions import (
    BusinessRuleViolationException,
    EntityNotFoundException,
    ValidationException,
)
from core.infrastructure.transaction import TransactionManager

from customers.domain.value_objects import AddressType, CustomerGroupCode, CustomerType
from customers.domain.exceptions import IncorrectPasswordException, NotCompanyCustomerException
from customers.domain.repositories import (
    AddressRepository,
    CustomerRepository,
    LocationRepository,
    UserRepository,
)
from customers.application.commands import (
    RegisterCustomerCommand,
    SaveAddressCommand,
    UpdateCompanyInfoCommand,
    UpdateProfileCommand,
)
from customers.application.dtos import AddressDTO, CustomerDTO, location_to_dict


class CustomerApplicationService:
    """
    客户应用服务。
    协调客户、地址和地区仓储。
    """

    def __init__(
        self,
        customer_repository: CustomerRepository,
        user_repository: UserRepository,
        address_repository: AddressRepository,
        location_repository: LocationRepository,
        transaction_manager: TransactionManager
    ):
        self.customer_repository = customer_repository
        self.user_repository = user_repository
        self.address_repository = address_repository
        self.location_repository = location_repository
        self.transaction_manager = transaction_manager

    # ==================== 注册与资料 ====================

    def register(self, command: RegisterCustomerCommand) -> Any:
        """
        注册新客户。

        个人客户进入B2C分组，企业客户进入B2B分组。

        Args:
            command: 注册命令

        Returns:
            新建的登录用户

        Raises:
            ValidationException: 用户名或邮箱已被使用，企业客户缺少公司信息
        """
        errors: Dict[str, List[str]] = {}
        if self.user_repository.username_exists(command.username):
            errors['username'] = ["该用户名已被使用"]
        if self.user_repository.email_exists(command.email):
            errors['email'] = ["该邮箱已被注册"]
        if command.customer_type == CustomerType.COMPANY:
            if not command.company_name:
                errors['company_name'] = ["企业客户必须填写公司名称"]
            if not command.fiscal_code:
                errors['fiscal_code'] = ["企业客户必须填写税号"]
        if errors:
            raise ValidationException(message="注册信息无效", errors=errors)

        group_code = CustomerGroupCode.B2B if command.customer_type == CustomerType.COMPANY else CustomerGroupCode.B2C

        try:
            with self.transaction_manager.start():
                user = self.user_repository.create_user(
                    username=command.username,
                    email=command.email,
                    password=command.password,
                    first_name=command.first_name,
                    last_name=command.last_name,
                )
                customer = self.customer_repository.create(
                    user=user,
                    customer_type=command.customer_type,
                    group=self.customer_repository.get_group_by_code(group_code),
                    phone=command.phone,
                    company_name=command.company_name,
                    fiscal_code=command.fiscal_code,
                    reg_number=command.reg_number,
                )
            logger.info(f"新客户注册: user={user.pk}, customer={customer.id}, type={customer.customer_type}")
            return user
        except Exception as e:
            logger.error(f"客户注册失败: {e}")
            raise

    def get_profile(self, customer: Any) -> CustomerDTO:
        return CustomerDTO.from_model(customer)

    def _get_customer_or_raise(self, customer_id: Any) -> Any:
        customer = self.customer_repository.get_by_id(customer_id)
        if customer is None:
            raise EntityNotFoundException("客户", customer_id)
        return customer

    def update_profile(self, command: UpdateProfileCommand) -> CustomerDTO:
        """
        修改个人资料，邮箱在所有用户中唯一。

        Raises:
            ValidationException: 邮箱已被其他用户使用
        """
        customer = self._get_customer_or_raise(command.customer_id)
        user = customer.user
        if self.user_repository.email_exists(command.email, exclude_user_id=user.pk):
            raise ValidationException(message="资料信息无效", errors={'email': ["该邮箱已被注册"]})

        user.first_name = command.first_name
        user.last_name = command.last_name
        user.email = command.email
        customer.phone = command.phone or ''
        with self.transaction_manager.start():
            self.user_repository.save(user)
            self.customer_repository.save(customer)
        logger.info(f"客户{customer.id}修改个人资料")
        return CustomerDTO.from_model(customer)

    def update_company_info(self, command: UpdateCompanyInfoCommand) -> CustomerDTO:
        """
        修改公司信息。

        Raises:
            NotCompanyCustomerException: 个人客户
        """
        customer = self._get_customer_or_raise(command.customer_id)
        if customer.customer_type != CustomerType.COMPANY:
            raise NotCompanyCustomerException(customer.id)

        customer.company_name = command.company_name
        customer.fiscal_code = command.fiscal_code
        customer.reg_number = command.reg_number
        customer.bank_name = command.bank_name or ''
        customer.iban = command.iban or ''
        self.customer_repository.save(customer)
        logger.info(f"客户{customer.id}修改公司信息")
        return CustomerDTO.from_model(customer)

    def delete_account(self, user_id: Any, password: str) -> None:
        """
        删除登录用户，客户资料、地址和购物车随之删除。

        Raises:
            EntityNotFoundException: 用户不存在
            IncorrectPasswordException: 密码不正确
        """
        user = self.user_repository.get_by_id(user_id)
        if user is None:
            raise EntityNotFoundException("用户", user_id)
        if not user.check_password(password):
            logger.info(f"删除账户被拒绝，密码错误: user={user_id}")
            raise IncorrectPasswordException(user_id)

        with self.transaction_manager.start():
            self.user_repository.delete(user)
        logger.info(f"用户{user_id}删除了账户")

    # ==================== 地址簿 ====================

    def _get_address_or_raise(self, customer_id: Any, address_id: Any) -> Any:
        address = self.address_repository.get_for_customer(customer_id, address_id)
        if not address:
            raise EntityNotFoundException("地址", address_id)
        return address

    def _ensure_country(self, country_id: Any) -> Any:
        country = self.location_repository.get_country(country_id)
        if not country:
            raise ValidationException("country_id", "所选国家不存在")
        return country

    def list_addresses(self, customer_id: Any, address_type: Optional[str] = None) -> List[AddressDTO]:
        return [AddressDTO.from_model(a) for a in self.address_repository.list_for_customer(customer_id, address_type)]

    def get_address(self, customer_id: Any, address_id: Any) -> AddressDTO:
        return AddressDTO.from_model(self._get_address_or_raise(customer_id, address_id))

    def create_address(self, command: SaveAddressCommand) -> AddressDTO:
        """
        新建地址。客户的第一个收货地址自动成为首选地址。
        """
        data = dict(command.data)
        country = self._ensure_country(data.pop('country_id'))
        address_type = data.pop('address_type', AddressType.SHIPPING)
        wants_preferred = bool(data.pop('is_preferred', False))

        try:
            with self.transaction_manager.start():
                is_first_shipping = (
                    address_type == AddressType.SHIPPING
                    and not self.address_repository.exists_of_type(command.customer_id, AddressType.SHIPPING)
                )
                preferred = address_type == AddressType.SHIPPING and (wants_preferred or is_first_shipping)
                if preferred:
                    self.address_repository.unset_preferred(command.customer_id, AddressType.SHIPPING)

                address = self.address_repository.create(
                    command.customer_id,
                    address_type=address_type,
                    country=country,
                    is_preferred=preferred,
                    **{k: (v or '') for k, v in data.items()}
                )
            logger.info(f"客户{command.customer_id}新建地址 {address.id} ({address_type})")
            return AddressDTO.from_model(address)
        except Exception as e:
            logger.error(f"新建地址失败: {e}")
            raise

    def _ensure_preferred_shipping(self, customer_id: Any) -> None:
        """客户仍有收货地址但没有首选时，最早的收货地址成为首选"""
        candidate = self.address_repository.get_preferred(customer_id, AddressType.SHIPPING)
        if candidate and not candidate.is_preferred:
            candidate.is_preferred = True
            self.address_repository.save(candidate)

    def update_address(self, command: SaveAddressCommand) -> AddressDTO:
        """
        修改地址。地址类型改变时重新确定首选收货地址。
        """
        address = self._get_address_or_raise(command.customer_id, command.address_id)
        data = dict(command.data)
        data.pop('is_preferred', None)

        if 'country_id' in data:
            address.country = self._ensure_country(data.pop('country_id'))

        new_type = data.pop('address_type', address.address_type)
        type_changed = new_type != address.address_type
        if type_changed:
            address.is_preferred = False
        address.address_type = new_type

        for field, value in data.items():
            setattr(address, field, value or '')

        with self.transaction_manager.start():
            self.address_repository.save(address)
            if type_changed:
                self._ensure_preferred_shipping(command.customer_id)
        logger.info(f"客户{command.customer_id}修改地址 {address.id}")
        if type_changed:
            address = self.address_repository.get_for_customer(command.customer_id, address.id)
        return AddressDTO.from_model(address)

    def delete_address(self, customer_id: Any, address_id: Any) -> None:
        """
        删除地址。删除首选收货地址后，最早的另一个收货地址成为首选。
        """
        address = self._get_address_or_raise(customer_id, address_id)
        was_preferred_shipping = address.is_preferred and address.address_type == AddressType.SHIPPING

        with self.transaction_manager.start():
            self.address_repository.delete(address)
            if was_preferred_shipping:
                self._ensure_preferred_shipping(customer_id)
        logger.info(f"客户{customer_id}删除地址 {address_id}")

    def set_preferred_address(self, customer_id: Any, address_id: Any) -> AddressDTO:
        """
        设置首选收货地址，同时取消该客户其他收货地址的首选标记。

        Raises:
            BusinessRuleViolationException: 地址不是收货地址
        """
        address = self._get_address_or_raise(customer_id, address_id)
        if address.address_type != AddressType.SHIPPING:
            raise BusinessRuleViolationException("preferred_shipping_only", "只有收货地址可以设为首选")

        with self.transaction_manager.start():
            self.address_repository.unset_preferred(customer_id, AddressType.SHIPPING, exclude_id=address.id)
            address.is_preferred = True
            self.address_repository.save(address)
        return AddressDTO.from_model(address)

    # ==================== 地区查询 ====================

    def list_countries(self) -> List[Dict[str, Any]]:
        return [
            location_to_dict(c, iso_code_2=c.iso_code_2)
            for c in self.location_repository.list_countries()
        ]

    def list_states(self, country_id: Any) -> List[Dict[str, Any]]:
        if not self.location_repository.get_country(country_id):
            raise EntityNotFoundException("国家", country_id)
        return [location_to_dict(s, code=s.code) for s in self.location_repository.list_states(country_id)]

    def list_cities(self, state_id: Any) -> List[Dict[str, Any]]:
        return [location_to_dict(c) for c in self.location_repository.list_cities(state_id)]

    # ==================== 登录 ====================

    def resolve_login_username(self, login: str) -> Optional[str]:
        """
        把登录名(用户名或邮箱)解析为用户名，找不到时返回None。
        """
        user = self.user_repository.find_for_login(login)
        return user.get_username() if user else None
