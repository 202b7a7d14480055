"""
后台退货管理服务。
"""
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from django.utils import timezone
from loguru import logger

from core.domain.exceptions import EntityNotFoundException, ValidationException
from core.infrastructure.business_log import log_business_event
from core.infrastructure.transaction import TransactionManager
from catalog.domain import ProductRepository
from returns.domain import ReturnRepository, ReturnStatus
from returns.domain.config import REFUND_AMOUNT_MAX
from returns.application.commands import UpdateReturnCommand
from returns.application.dtos import return_to_detail, return_to_list_item


class ReturnAdminService:
    """
    后台退货管理。
    退货单进入 completed 且需要回库时增加库存，离开 completed 时撤销回库。
    """

    def __init__(
        self,
        return_repository: ReturnRepository,
        product_repository: ProductRepository,
        transaction_manager: TransactionManager
    ):
        self.return_repository = return_repository
        self.product_repository = product_repository
        self.transaction_manager = transaction_manager

    def list_returns(
        self,
        filters: Optional[Dict[str, Any]] = None,
        page: int = 1,
        page_size: int = 50
    ) -> Tuple[List[Dict[str, Any]], int]:
        items, total = self.return_repository.search(filters, page, page_size)
        return [return_to_list_item(item) for item in items], total

    def get_statuses(self) -> List[Dict[str, str]]:
        return ReturnStatus.all()

    def _get_or_raise(self, return_id: Any, for_update: bool = False) -> Any:
        if for_update:
            item = self.return_repository.get_for_update(return_id)
        else:
            item = self.return_repository.get_by_id(return_id)
        if item is None:
            raise EntityNotFoundException("退货单", return_id)
        return item

    def get_return(self, return_id: Any) -> Dict[str, Any]:
        data = return_to_detail(self._get_or_raise(return_id))
        data['statuses'] = self.get_statuses()
        return data

    def _product_id(self, item: Any) -> Optional[Any]:
        line = item.order_product
        return line.product_id if line is not None else None

    def _restock(self, item: Any) -> None:
        product_id = self._product_id(item)
        if product_id is None:
            return
        self.product_repository.adjust_stock(product_id, item.quantity)
        item.restocked_at = timezone.now()
        logger.info(f"退货单 {item.return_number} 回库 {item.quantity} 件")

    def _reverse_restock(self, item: Any) -> None:
        product_id = self._product_id(item)
        if product_id is None:
            return
        self.product_repository.adjust_stock(product_id, -item.quantity)
        item.restocked_at = None
        logger.info(f"退货单 {item.return_number} 撤销回库 {item.quantity} 件")

    def update_status(self, command: UpdateReturnCommand) -> Dict[str, Any]:
        """
        修改退货状态并处理库存。

        Raises:
            ValidationException: 状态无效
            EntityNotFoundException: 退货单不存在
        """
        new_status = command.value
        if not ReturnStatus.is_valid(new_status):
            raise ValidationException("status", "退货状态无效")

        with self.transaction_manager.start():
            item = self._get_or_raise(command.return_id, for_update=True)
            old_status = item.status

            if old_status == ReturnStatus.COMPLETED and new_status != ReturnStatus.COMPLETED:
                if item.restocked_at is not None:
                    self._reverse_restock(item)
            if new_status == ReturnStatus.COMPLETED and old_status != ReturnStatus.COMPLETED:
                if item.restock_item and item.restocked_at is None:
                    self._restock(item)

            if old_status != new_status:
                item.status = new_status
                self.return_repository.save(item)

        log_business_event("return.status.updated", {
            "return_number": item.return_number,
            "old_status": old_status,
            "new_status": new_status,
            "user_id": command.user_id,
        })
        return self.get_return(item.id)

    def update_refund_amount(self, command: UpdateReturnCommand) -> Dict[str, Any]:
        """
        修改预计退款金额，None 表示清空。

        Raises:
            ValidationException: 金额超出范围
        """
        amount = command.value
        if amount is not None:
            amount = Decimal(str(amount))
            if amount < 0 or amount > REFUND_AMOUNT_MAX:
                raise ValidationException("refund_amount", f"退款金额必须在 0 到 {REFUND_AMOUNT_MAX} 之间")

        with self.transaction_manager.start():
            item = self._get_or_raise(command.return_id, for_update=True)
            item.refund_amount = amount
            self.return_repository.save(item)

        log_business_event("return.refund_amount.updated", {
            "return_number": item.return_number,
            "refund_amount": str(amount) if amount is not None else None,
            "user_id": command.user_id,
        })
        return self.get_return(item.id)

    def update_restock_item(self, command: UpdateReturnCommand) -> Dict[str, Any]:
        with self.transaction_manager.start():
            item = self._get_or_raise(command.return_id, for_update=True)
            item.restock_item = bool(command.value)
            self.return_repository.save(item)
        logger.info(f"退货单 {item.return_number} 回库标记: {item.restock_item}")
        return self.get_return(item.id)
