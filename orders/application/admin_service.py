"""
订单后台应用服务。
订单列表、详情、支付状态和订单修改(单项修改和批量修改)。
"""
from typing import Any, Callable, Dict, List, Optional, Tuple

from django.utils import timezone
from django.utils.dateparse import parse_datetime
from loguru import logger

from core.domain.events import DomainEvents
from core.domain.exceptions import (
    ConcurrencyException,
    EntityNotFoundException,
    ValidationException,
)
from core.infrastructure.business_log import log_business_event
from core.infrastructure.transaction import TransactionManager

from catalog.application.pricing import ProductPriceService
from catalog.domain import PriceCalculator, ProductRepository
from orders.domain import (
    CheckoutMethodRepository,
    HistoryAction,
    OrderAddressType,
    OrderChangeType,
    OrderInvoicedException,
    OrderRepository,
    OrderStatus,
    OrderStatusChangedEvent,
    OrderTotalsCalculator,
    PaymentStateUnchangedException,
)
from orders.application.commands import BatchUpdateOrderCommand, UpdateOrderCommand
from orders.application.dtos import (
    order_to_detail,
    order_to_summary,
    payment_method_to_dict,
    shipping_method_to_dict,
)


class OrderAdminService:
    """后台订单管理服务"""

    def __init__(
        self,
        order_repository: OrderRepository,
        method_repository: CheckoutMethodRepository,
        product_repository: ProductRepository,
        price_service: ProductPriceService,
        transaction_manager: TransactionManager,
        location_repository: Any = None
    ):
        """
        Args:
            location_repository: 国家查询，用于校验修改后的地址国家
        """
        self.order_repository = order_repository
        self.location_repository = location_repository
        self.method_repository = method_repository
        self.product_repository = product_repository
        self.price_service = price_service
        self.transaction_manager = transaction_manager

        self._change_handlers: Dict[str, Callable[[Any, Dict[str, Any], Any], None]] = {
            OrderChangeType.ADD_PRODUCT: self._add_product,
            OrderChangeType.UPDATE_QUANTITY: self._update_quantity,
            OrderChangeType.REMOVE_PRODUCT: self._remove_product,
            OrderChangeType.UPDATE_ADDRESS: self._update_address,
            OrderChangeType.UPDATE_STATUS: self._update_status,
            OrderChangeType.UPDATE_PAYMENT_STATUS: self._update_payment_status,
        }

    # ==================== 查询 ====================

    def list_orders(
        self,
        filters: Optional[Dict[str, Any]] = None,
        page: int = 1,
        page_size: int = 50
    ) -> Tuple[List[Dict[str, Any]], int]:
        orders, total = self.order_repository.search(filters, page, page_size)
        return [order_to_summary(order) for order in orders], total

    def get_filter_options(self) -> Dict[str, Any]:
        """后台订单列表的筛选项"""
        return {
            'payment_methods': [
                payment_method_to_dict(m) for m in self.method_repository.list_payment_methods(active_only=False)
            ],
            'shipping_methods': [
                shipping_method_to_dict(m) for m in self.method_repository.list_shipping_methods(active_only=False)
            ],
            'statuses': OrderStatus.all(),
            'filters': ['all', *OrderStatus.FILTER_GROUPS],
            'cities': self.order_repository.list_shipping_cities(),
        }

    def _get_order_or_raise(self, order_number: str, for_update: bool = False) -> Any:
        order = self.order_repository.get_by_number(order_number, for_update=for_update)
        if order is None:
            raise EntityNotFoundException("订单", order_number)
        return order

    def get_order(self, order_number: str) -> Dict[str, Any]:
        """
        订单详情，包含历史记录和可选的状态。

        Raises:
            EntityNotFoundException: 订单不存在
        """
        order = self._get_order_or_raise(order_number)
        data = order_to_detail(order, include_history=True)
        data['status_options'] = OrderStatus.all()
        return data

    # ==================== 支付状态 ====================

    def _set_paid(self, order: Any, is_paid: bool, user_id: Any, strict: bool = True) -> bool:
        """
        修改支付状态。

        Args:
            strict: 状态未变化时是否抛出异常，批量修改中为False

        Returns:
            是否发生了变化
        """
        if order.is_paid == is_paid:
            if strict:
                raise PaymentStateUnchangedException(order.order_number, order.is_paid, order.paid_at)
            return False

        old_value = {'is_paid': order.is_paid, 'paid_at': order.paid_at.isoformat() if order.paid_at else None}
        order.is_paid = is_paid
        order.paid_at = timezone.now() if is_paid else None
        self.order_repository.save(order)
        self.order_repository.add_history(
            order,
            HistoryAction.PAYMENT_RECEIVED if is_paid else HistoryAction.PAYMENT_REVERSED,
            old_value=old_value,
            new_value={'is_paid': order.is_paid, 'paid_at': order.paid_at.isoformat() if order.paid_at else None},
            description="订单标记为已支付" if is_paid else "订单标记为未支付",
            user_id=user_id,
        )
        return True

    def _change_payment(self, order_number: str, is_paid: bool, user_id: Any) -> Dict[str, Any]:
        with self.transaction_manager.start():
            order = self._get_order_or_raise(order_number, for_update=True)
            self._set_paid(order, is_paid, user_id)

        log_business_event("order.payment.updated", {
            "order_number": order_number,
            "is_paid": is_paid,
            "user_id": user_id,
        })
        return self.get_order(order_number)

    def mark_as_paid(self, order_number: str, user_id: Any = None) -> Dict[str, Any]:
        """
        Raises:
            EntityNotFoundException: 订单不存在
            PaymentStateUnchangedException: 订单已经是已支付状态
        """
        return self._change_payment(order_number, True, user_id)

    def mark_as_unpaid(self, order_number: str, user_id: Any = None) -> Dict[str, Any]:
        return self._change_payment(order_number, False, user_id)

    # ==================== 修改订单 ====================

    @staticmethod
    def _ensure_not_invoiced(order: Any) -> None:
        if order.has_invoice:
            raise OrderInvoicedException(order.order_number)

    def _get_line_or_raise(self, order: Any, data: Dict[str, Any]) -> Any:
        line = self.order_repository.get_line(order, data.get('order_product_id'))
        if line is None:
            raise ValidationException("order_product_id", "订单中没有该商品")
        return line

    def _adjust_stock(self, product_id: Any, delta: int) -> None:
        if product_id is None or delta == 0:
            return
        if self.product_repository.adjust_stock(product_id, delta) is None:
            logger.warning(f"调整库存时商品{product_id}不存在")

    def _add_product(self, order: Any, data: Dict[str, Any], user_id: Any) -> None:
        product = self.product_repository.get_by_id(data.get('product_id'))
        if product is None:
            raise ValidationException("product_id", "商品不存在")
        quantity = int(data.get('quantity') or 1)

        group_id = order.customer.customer_group_id if order.customer else None
        custom_price = data.get('custom_price_ron')
        unit_excl = (
            PriceCalculator.to_decimal(custom_price) if custom_price is not None
            else self.price_service.calculate_price_ron(product, quantity, group_id)
        )
        vat_rate = PriceCalculator.to_decimal(0 if order.is_vat_exempt else order.vat_rate_applied)
        unit_incl = PriceCalculator.incl_vat(unit_excl, vat_rate)

        amounts = OrderTotalsCalculator.line_amounts(
            unit_excl, unit_incl, quantity, order.currency, order.exchange_rate, product.purchase_price_ron
        )
        line = self.order_repository.create_line(
            order,
            product=product,
            name=product.name,
            sku=product.sku,
            ean=product.ean or '',
            quantity=quantity,
            vat_percent=vat_rate,
            exchange_rate=order.exchange_rate,
            **amounts,
        )
        self._adjust_stock(product.id, -quantity)
        self.order_repository.add_history(
            order,
            HistoryAction.PRODUCT_ADDED,
            new_value={'order_product_id': line.id, 'sku': line.sku, 'quantity': quantity,
                       'unit_price_ron_excl_vat': str(amounts['unit_price_ron_excl_vat'])},
            description=f"添加商品 {line.name} x{quantity}",
            user_id=user_id,
        )

    def _update_quantity(self, order: Any, data: Dict[str, Any], user_id: Any) -> None:
        line = self._get_line_or_raise(order, data)
        quantity = int(data.get('quantity') or 0)
        if quantity < 1:
            raise ValidationException("quantity", "数量必须大于0")
        old_quantity = line.quantity
        if quantity == old_quantity:
            return

        amounts = OrderTotalsCalculator.line_amounts(
            line.unit_price_ron_excl_vat,
            line.unit_price_ron,
            quantity,
            order.currency,
            line.exchange_rate,
            line.unit_purchase_price_ron,
        )
        line.quantity = quantity
        for name, value in amounts.items():
            setattr(line, name, value)
        self.order_repository.save_line(line)
        self._adjust_stock(line.product_id, old_quantity - quantity)
        self.order_repository.add_history(
            order,
            HistoryAction.PRODUCT_QUANTITY_UPDATED,
            old_value={'order_product_id': line.id, 'quantity': old_quantity},
            new_value={'order_product_id': line.id, 'quantity': quantity},
            description=f"{line.name} 数量 {old_quantity} -> {quantity}",
            user_id=user_id,
        )

    def _remove_product(self, order: Any, data: Dict[str, Any], user_id: Any) -> None:
        line = self._get_line_or_raise(order, data)
        old_value = {'order_product_id': line.id, 'sku': line.sku, 'quantity': line.quantity}
        self._adjust_stock(line.product_id, line.quantity)
        self.order_repository.delete_line(line)
        self.order_repository.add_history(
            order,
            HistoryAction.PRODUCT_REMOVED,
            old_value=old_value,
            description=f"移除商品 {old_value['sku']}",
            user_id=user_id,
        )

    def _update_address(self, order: Any, data: Dict[str, Any], user_id: Any) -> None:
        address_type = data.get('address_type')
        if address_type not in (OrderAddressType.SHIPPING, OrderAddressType.BILLING):
            raise ValidationException("address_type", "地址类型必须是 shipping 或 billing")

        current = self.order_repository.get_address(order, address_type)
        new_data = data.get('address') or {}
        country_id = new_data.get('country_id')
        if country_id and self.location_repository is not None and not self.location_repository.get_country(country_id):
            raise ValidationException("country_id", "所选国家不存在")
        old_value = {name: getattr(current, name) for name in new_data if hasattr(current, name)} if current else None
        self.order_repository.save_address(order, address_type, new_data)
        self.order_repository.add_history(
            order,
            HistoryAction.ADDRESS_UPDATED,
            old_value=old_value,
            new_value={'type': address_type, **new_data},
            description=f"修改{address_type}地址",
            user_id=user_id,
        )

    def _update_status(self, order: Any, data: Dict[str, Any], user_id: Any) -> None:
        new_status = data.get('status')
        if not OrderStatus.is_valid(new_status):
            raise ValidationException("status", "无效的订单状态")
        old_status = order.status
        if old_status == new_status:
            return

        order.status = new_status
        self.order_repository.save(order)
        self.order_repository.add_history(
            order,
            HistoryAction.STATUS_CHANGED,
            old_value={'status': old_status},
            new_value={'status': new_status},
            description=f"状态 {OrderStatus.label(old_status)} -> {OrderStatus.label(new_status)}",
            user_id=user_id,
        )
        event = OrderStatusChangedEvent(
            order_id=order.id,
            order_number=order.order_number,
            old_status=old_status,
            new_status=new_status,
            user_id=user_id,
        )
        self.transaction_manager.on_commit(lambda: DomainEvents.publish(event))

    def _update_payment_status(self, order: Any, data: Dict[str, Any], user_id: Any) -> None:
        self._set_paid(order, bool(data.get('is_paid')), user_id, strict=False)

    def _recalculate_totals(self, order: Any) -> None:
        """按订单行重新计算订单合计"""
        totals = OrderTotalsCalculator.accumulate(self.order_repository.list_lines(order))
        order.total_excl_vat = totals['total_excl_vat']
        order.total_incl_vat = totals['total_incl_vat']
        order.total_ron_excl_vat = totals['total_ron_excl_vat']
        order.total_ron_incl_vat = totals['total_ron_incl_vat']
        if not order.is_vat_exempt:
            order.vat_rate_applied = totals['average_vat_rate']
        self.order_repository.save(order)

    def update_order(self, command: UpdateOrderCommand) -> Dict[str, Any]:
        """
        单项修改订单。

        Raises:
            EntityNotFoundException: 订单不存在
            OrderInvoicedException: 订单已开票
            ValidationException: 操作参数无效
        """
        if command.action not in OrderChangeType.SINGLE_ACTIONS:
            raise ValidationException("action", f"不支持的操作: {command.action}")

        with self.transaction_manager.start():
            order = self._get_order_or_raise(command.order_number, for_update=True)
            self._ensure_not_invoiced(order)
            self._change_handlers[command.action](order, command.data, command.user_id)
            if command.action in (OrderChangeType.ADD_PRODUCT, OrderChangeType.UPDATE_QUANTITY,
                                  OrderChangeType.REMOVE_PRODUCT):
                self._recalculate_totals(order)

        logger.info(f"订单{command.order_number}修改: {command.action}")
        return self.get_order(command.order_number)

    @staticmethod
    def _parse_timestamp(value: str) -> Any:
        parsed = parse_datetime(value)
        if parsed is None:
            raise ValidationException("originalUpdatedAt", "时间格式无效")
        if timezone.is_naive(parsed):
            parsed = timezone.make_aware(parsed)
        return parsed

    def batch_update(self, command: BatchUpdateOrderCommand) -> Dict[str, Any]:
        """
        批量修改订单，按优先级顺序在一个事务中执行所有修改，然后重新计算合计。

        Raises:
            EntityNotFoundException: 订单不存在
            OrderInvoicedException: 订单已开票
            ConcurrencyException: 订单在读取后已被修改
            ValidationException: 修改参数无效
        """
        with self.transaction_manager.start():
            order = self._get_order_or_raise(command.order_number, for_update=True)
            self._ensure_not_invoiced(order)

            if command.original_updated_at:
                expected = self._parse_timestamp(command.original_updated_at)
                if expected != order.updated_at:
                    raise ConcurrencyException(
                        "订单",
                        order.order_number,
                        current=order.updated_at.isoformat(),
                        expected=command.original_updated_at,
                    )

            for change in OrderChangeType.sort(command.changes):
                handler = self._change_handlers.get(change['type'])
                if handler is None:
                    raise ValidationException("type", f"不支持的修改类型: {change['type']}")
                handler(order, change, command.user_id)

            self._recalculate_totals(order)

        log_business_event("order.batch_updated", {
            "order_number": command.order_number,
            "changes": [change['type'] for change in command.changes],
            "user_id": command.user_id,
        })
        return self.get_order(command.order_number)
