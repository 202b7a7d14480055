"""
客户后台应用服务。
后台客户列表、客户详情、批量启用停用，以及运营人员账户管理。
"""
from typing import Any, Dict, List, Optional, Tuple

from loguru import logger

from core.domain.exceptions import BusinessRuleViolationException, EntityNotFoundException
from core.infrastructure.transaction import TransactionManager

from customers.domain.repositories import CustomerRepository, UserRepository
from customers.application.commands import ChangeActiveStatusCommand
from customers.application.dtos import CustomerDTO, UserDTO


class CustomerAdminService:
    """后台客户与用户管理服务"""

    def __init__(
        self,
        customer_repository: CustomerRepository,
        user_repository: UserRepository,
        transaction_manager: TransactionManager
    ):
        self.customer_repository = customer_repository
        self.user_repository = user_repository
        self.transaction_manager = transaction_manager

    def list_customers(
        self,
        filters: Optional[Dict[str, Any]] = None,
        page: int = 1,
        page_size: int = 20
    ) -> Tuple[List[Dict[str, Any]], int]:
        customers, total = self.customer_repository.search(filters, page, page_size)
        return [CustomerDTO.from_model(c).to_dict() for c in customers], total

    def get_customer(self, customer_id: Any) -> Dict[str, Any]:
        customer = self.customer_repository.get_by_id(customer_id)
        if not customer:
            raise EntityNotFoundException("客户", customer_id)
        data = CustomerDTO.from_model(customer, include_addresses=True).to_dict()
        data['orders_count'] = customer.orders.count()
        return data

    def change_customers_status(self, command: ChangeActiveStatusCommand) -> int:
        """
        批量启用或停用客户。

        Returns:
            更新的客户数量
        """
        with self.transaction_manager.start():
            updated = self.customer_repository.set_active(command.ids, command.active)
        logger.info(f"批量{'启用' if command.active else '停用'}客户 {updated} 个: {command.ids}")
        return updated

    def list_users(
        self,
        filters: Optional[Dict[str, Any]] = None,
        page: int = 1,
        page_size: int = 20
    ) -> Tuple[List[Dict[str, Any]], int]:
        users, total = self.user_repository.search(filters, page, page_size)
        return [UserDTO.from_model(u).to_dict() for u in users], total

    def change_users_status(self, command: ChangeActiveStatusCommand) -> int:
        """
        批量启用或停用后台用户，不能停用自己。

        Raises:
            BusinessRuleViolationException: 尝试停用当前登录的账户
        """
        if not command.active and command.acting_user_id in command.ids:
            raise BusinessRuleViolationException("cannot_deactivate_self", "不能停用当前登录的账户")

        with self.transaction_manager.start():
            updated = self.user_repository.set_active(command.ids, command.active)
        logger.info(f"批量{'启用' if command.active else '停用'}后台用户 {updated} 个: {command.ids}")
        return updated
