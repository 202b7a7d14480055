"""
下单服务。
把购物车转换为订单: 重新计价、冻结汇率、写入地址快照和配送信息、扣减库存、清空购物车。
"""
import uuid
from decimal import Decimal
from typing import Any, Dict, List, Optional

from django.utils import timezone
from loguru import logger

from core.domain.codes import ReadableCodeGenerator
from core.domain.events import DomainEvents
from core.domain.exceptions import BusinessRuleViolationException
from core.infrastructure.cache import CacheService
from core.infrastructure.transaction import TransactionManager

from catalog.application.pricing import ProductPriceService
from catalog.domain import PricingContext, ProductRepository
from orders.domain import (
    HistoryAction,
    OrderAddressType,
    OrderCreatedEvent,
    OrderRepository,
    OrderTotalsCalculator,
    PaymentCode,
)
from orders.application.commands import PlaceOrderCommand

IDEMPOTENCY_KEY_PREFIX = 'order_idempotency'


class OrderPlacementService:
    """
    由购物车创建订单。
    """

    def __init__(
        self,
        order_repository: OrderRepository,
        product_repository: ProductRepository,
        price_service: ProductPriceService,
        cache_service: CacheService,
        transaction_manager: TransactionManager,
        code_generator: ReadableCodeGenerator,
        idempotency_ttl: int = 300
    ):
        self.order_repository = order_repository
        self.product_repository = product_repository
        self.price_service = price_service
        self.cache_service = cache_service
        self.transaction_manager = transaction_manager
        self.code_generator = code_generator
        self.idempotency_ttl = idempotency_ttl

    # ==================== 幂等 ====================

    @staticmethod
    def _idempotency_cache_key(key: str) -> str:
        return f"{IDEMPOTENCY_KEY_PREFIX}:{key}"

    def find_idempotent_order(self, key: Optional[str]) -> Optional[Any]:
        """幂等键在有效期内对应的订单，没有则返回None"""
        if not key:
            return None
        order_id = self.cache_service.get(self._idempotency_cache_key(key))
        if order_id is None:
            return None
        return self.order_repository.get_by_id(order_id)

    # ==================== 地址 ====================

    @staticmethod
    def _address_data(address: Any) -> Optional[Dict[str, Any]]:
        if address is None:
            return None
        if isinstance(address, dict):
            return dict(address)
        return address.to_snapshot()

    @staticmethod
    def _courier_data(pickup_data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        return (pickup_data or {}).get('courier_data') or {}

    def _vat_country_id(
        self,
        shipping: Optional[Dict[str, Any]],
        pickup_data: Optional[Dict[str, Any]]
    ) -> Any:
        """
        计税国家: 收货地址国家 > 自提收件人地址国家 > 快递柜国家。

        Raises:
            BusinessRuleViolationException: 无法确定国家
        """
        if shipping and shipping.get('country_id'):
            return shipping['country_id']
        pickup_address = (pickup_data or {}).get('shipping_address') or {}
        if pickup_address.get('country_id'):
            return pickup_address['country_id']
        locker = self._courier_data(pickup_data).get('locker_details') or {}
        if locker.get('country_id'):
            return locker['country_id']
        raise BusinessRuleViolationException(
            "shipping_country_required", "Shipping country is required for VAT calculation"
        )

    def _pickup_address(self, command: PlaceOrderCommand, billing: Dict[str, Any]) -> Dict[str, Any]:
        """自提订单的收货地址快照: 收件人取自提交的自提地址、账单地址或客户资料，地址取快递柜"""
        courier = self._courier_data(command.pickup_data)
        locker = courier.get('locker_details') or {}
        recipient = (command.pickup_data or {}).get('shipping_address') or {}

        first_name = recipient.get('first_name') or billing.get('first_name')
        last_name = recipient.get('last_name') or billing.get('last_name')
        phone = recipient.get('phone') or billing.get('phone')
        if not first_name and command.user is not None:
            first_name = command.user.first_name
            last_name = command.user.last_name
        if not phone and command.customer is not None:
            phone = command.customer.phone

        point_name = courier.get('point_name') or ''
        locker_address = locker.get('address') or ''
        line = f"{point_name} - {locker_address}" if locker_address else point_name

        return {
            'first_name': first_name or '',
            'last_name': last_name or '',
            'phone': phone or '',
            'email': recipient.get('email') or billing.get('email') or '',
            'address_line_1': line,
            'city': locker.get('city') or '',
            'county_code': locker.get('county_code') or '',
            'zip_code': locker.get('zip_code') or '',
            'country_id': locker.get('country_id') or recipient.get('country_id') or self.price_service.default_country_id(),
        }

    # ==================== 下单 ====================

    def _price_lines(self, command: PlaceOrderCommand, context: PricingContext) -> List[Dict[str, Any]]:
        lines = []
        for _, cart_line in command.cart.items():
            product = self.product_repository.get_active(cart_line.product_id)
            if not product:
                logger.warning(f"下单时商品{cart_line.product_id}已下架，跳过")
                continue
            lines.append({
                'product': product,
                'quantity': cart_line.quantity,
                'price_info': self.price_service.get_price_info(product, context, cart_line.quantity),
            })
        return lines

    def create_order_from_cart(self, command: PlaceOrderCommand) -> Any:
        """
        由购物车创建订单。

        同一个幂等键在有效期内重复提交时直接返回已创建的订单。

        Args:
            command: 下单命令

        Returns:
            订单模型

        Raises:
            BusinessRuleViolationException: 无法确定计税国家、购物车为空或货币汇率无效
            VatRateNotFoundException: 计税国家没有配置税率
        """
        existing = self.find_idempotent_order(command.idempotency_key)
        if existing is not None:
            logger.info(f"幂等键{command.idempotency_key}重复提交，返回订单{existing.order_number}")
            return existing

        billing = self._address_data(command.billing_address) or {}
        shipping = self._address_data(command.shipping_address)
        if shipping is None and command.shipping_method.is_pickup:
            shipping = self._pickup_address(command, billing)
        vat_country_id = self._vat_country_id(shipping, command.pickup_data)

        currency = self.price_service.get_currency(command.currency_code)
        group_id = self.price_service.effective_group_id(command.customer_group_id)
        show_vat = self.price_service.should_show_vat(group_id)
        context = PricingContext(currency=currency, customer_group_id=group_id, country_id=vat_country_id,
                                 show_vat=show_vat)

        try:
            exchange_rate = OrderTotalsCalculator.exchange_rate_for(currency)
        except ValueError as e:
            raise BusinessRuleViolationException("invalid_exchange_rate", str(e))

        priced = self._price_lines(command, context)
        if not priced:
            raise BusinessRuleViolationException("cart_empty", "购物车为空")

        line_fields = []
        for item in priced:
            product = item['product']
            info = item['price_info']
            amounts = OrderTotalsCalculator.line_amounts(
                info['unit_price_ron_excl_vat'],
                info['unit_price_ron_incl_vat'],
                item['quantity'],
                currency.code,
                exchange_rate,
                product.purchase_price_ron,
            )
            line_fields.append({
                'product': product,
                'name': product.name,
                'sku': product.sku,
                'ean': product.ean or '',
                'quantity': item['quantity'],
                'vat_percent': info['vat_rate'],
                'exchange_rate': exchange_rate,
                **amounts,
            })
        totals = OrderTotalsCalculator.accumulate(line_fields)

        payment_code = command.payment_method.code
        is_paid = PaymentCode.is_prepaid(payment_code)
        shipping_vat_rate = self.price_service.get_vat_rate(vat_country_id, group_id) if show_vat else Decimal('0')

        with self.transaction_manager.start():
            order = self.order_repository.create(
                customer=command.customer,
                order_number=f"TMP-{uuid.uuid4().hex[:24]}",
                currency=currency.code,
                exchange_rate=exchange_rate,
                vat_rate_applied=totals['average_vat_rate'],
                is_vat_exempt=not show_vat,
                total_excl_vat=totals['total_excl_vat'],
                total_incl_vat=totals['total_incl_vat'],
                total_ron_excl_vat=totals['total_ron_excl_vat'],
                total_ron_incl_vat=totals['total_ron_incl_vat'],
                payment_method=command.payment_method,
                status=PaymentCode.initial_status(payment_code),
                is_paid=is_paid,
                paid_at=timezone.now() if is_paid else None,
            )
            order.order_number = self.code_generator.generate(order.id)
            self.order_repository.save(order)

            self.order_repository.add_history(
                order,
                HistoryAction.ORDER_CREATED,
                new_value={'status': order.status, 'total_ron_incl_vat': str(order.total_ron_incl_vat)},
                description="订单已创建",
                user_id=command.user_id,
            )

            if command.guest_email:
                for snapshot in (billing, shipping):
                    snapshot['email'] = snapshot.get('email') or command.guest_email
            self.order_repository.save_address(order, OrderAddressType.BILLING, billing)
            self.order_repository.save_address(order, OrderAddressType.SHIPPING, shipping)

            for fields in line_fields:
                self.order_repository.create_line(order, **fields)
                self.product_repository.adjust_stock(fields['product'].id, -fields['quantity'])

            method = command.shipping_method
            courier_data = self._courier_data(command.pickup_data) if method.is_pickup else None
            self.order_repository.create_shipping(
                order,
                shipping_method=method,
                title=method.name,
                pickup_point_id=(courier_data or {}).get('point_id') or '',
                courier_data=courier_data,
                **OrderTotalsCalculator.shipping_costs(method.cost, shipping_vat_rate, currency.code, exchange_rate),
            )

            command.cart_store.discard()

            event = OrderCreatedEvent(
                order_id=order.id,
                order_number=order.order_number,
                customer_id=command.customer.id if command.customer else None,
                total_ron_incl_vat=order.total_ron_incl_vat,
                is_guest=command.is_guest,
            )
            self.transaction_manager.on_commit(lambda: DomainEvents.publish(event))

        if command.idempotency_key:
            self.cache_service.set(self._idempotency_cache_key(command.idempotency_key), order.id,
                                   self.idempotency_ttl)

        return self.order_repository.get_by_id(order.id)
