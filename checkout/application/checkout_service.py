"""
结算应用服务。
结算页数据、收货/账单国家切换、访客信息、自提点和提交订单。
"""
from typing import Any, Dict, List, Optional

from loguru import logger

from core.domain.exceptions import ValidationException
from catalog.application.pricing import ProductPriceService
from cart.application import CartApplicationService
from cart.domain import CartStore
from customers.application import AddressDTO, ShopperContext
from customers.domain.repositories import AddressRepository, LocationRepository
from customers.domain.value_objects import AddressType
from orders.application import CustomerOrderService, OrderPlacementService, PlaceOrderCommand
from orders.application.dtos import payment_method_to_dict
from orders.domain import CheckoutMethodRepository
from checkout.domain import CartEmptyException, CheckoutInvalidException, validate_courier_data
from checkout.application.commands import SubmitOrderCommand
from checkout.infrastructure.session_store import CheckoutSession


class CheckoutApplicationService:
    """
    结算应用服务。
    """

    def __init__(
        self,
        cart_service: CartApplicationService,
        price_service: ProductPriceService,
        address_repository: AddressRepository,
        location_repository: LocationRepository,
        method_repository: CheckoutMethodRepository,
        placement_service: OrderPlacementService,
        order_service: CustomerOrderService
    ):
        self.cart_service = cart_service
        self.price_service = price_service
        self.address_repository = address_repository
        self.location_repository = location_repository
        self.method_repository = method_repository
        self.placement_service = placement_service
        self.order_service = order_service

    # ==================== 辅助 ====================

    def _country_exists(self, country_id: Any) -> bool:
        return self.location_repository.get_country(country_id) is not None

    def _ensure_country(self, country_id: Any, field_name: str = 'country_id') -> None:
        if not country_id or not self._country_exists(country_id):
            raise ValidationException(field_name, "所选国家不存在")

    def _vat_country_id(self, shopper: ShopperContext) -> Optional[int]:
        """结算页计价国家: 已选择的收货国家 > 客户首选收货地址或访客收货地址的国家"""
        if shopper.shipping_country_id:
            return shopper.shipping_country_id
        if shopper.is_customer:
            address = self.address_repository.get_preferred(shopper.customer_id, AddressType.SHIPPING)
            return address.country_id if address else None
        guest_shipping = CheckoutSession(shopper.session).shipping_address or {}
        return guest_shipping.get('country_id')

    def _cart(self, shopper: ShopperContext, store: CartStore) -> Dict[str, Any]:
        context = self.price_service.build_context(shopper, self._vat_country_id(shopper))
        return self.cart_service.get_cart(store, context)

    def _shipping_methods(self, currency: Any) -> List[Dict[str, Any]]:
        return [
            {
                'id': method.id,
                'name': method.name,
                'type': method.type,
                'cost': self.price_service.convert(method.cost, currency),
                'cost_ron': method.cost,
            }
            for method in self.method_repository.list_shipping_methods()
        ]

    def _customer_addresses(self, customer_id: Any) -> Dict[str, List[Dict[str, Any]]]:
        grouped = {AddressType.SHIPPING: [], AddressType.BILLING: [], AddressType.HEADQUARTERS: []}
        for address in self.address_repository.list_for_customer(customer_id):
            grouped.setdefault(address.address_type, []).append(AddressDTO.from_model(address).to_dict())
        return grouped

    # ==================== 结算页 ====================

    def order_details(self, shopper: ShopperContext, store: CartStore) -> Dict[str, Any]:
        """
        结算页所需的全部数据。

        Raises:
            VatRateNotFoundException: 计税国家没有配置税率
        """
        checkout = CheckoutSession(shopper.session)
        currency = self.price_service.get_currency(shopper.currency_code)

        data = {
            'cart': self._cart(shopper, store),
            'currency': {'code': currency.code, 'symbol': currency.symbol},
            'shipping_methods': self._shipping_methods(currency),
            'payment_methods': [payment_method_to_dict(m) for m in self.method_repository.list_payment_methods()],
            'countries': [
                {'id': c.id, 'name': c.name, 'iso_code_2': c.iso_code_2}
                for c in self.location_repository.list_countries()
            ],
            'shipping_country_id': self._vat_country_id(shopper),
            'billing_country_id': checkout.billing_country_id,
            'pickup_data': checkout.pickup_data,
            'is_guest': not shopper.is_customer,
            'is_company': bool(shopper.customer and shopper.customer.is_company),
        }
        if shopper.is_customer:
            data['addresses'] = self._customer_addresses(shopper.customer_id)
        else:
            data['guest'] = {
                'email': checkout.guest_email,
                'phone': checkout.guest_phone,
                'shipping_address': checkout.shipping_address,
                'billing_address': checkout.billing_address,
            }
        return data

    def update_shipping_country(self, shopper: ShopperContext, store: CartStore, country_id: Any) -> Dict[str, Any]:
        """
        切换收货国家并按该国家重新计价整个购物车。

        Raises:
            ValidationException: 国家不存在
        """
        self._ensure_country(country_id)
        shopper.set_shipping_country(int(country_id))
        return self._cart(shopper, store)

    def update_billing_country(self, shopper: ShopperContext, store: CartStore, country_id: Any) -> Dict[str, Any]:
        self._ensure_country(country_id)
        CheckoutSession(shopper.session).set_billing_country(int(country_id))
        return self._cart(shopper, store)

    def save_pickup_data(self, shopper: ShopperContext, pickup_data: Dict[str, Any]) -> Dict[str, Any]:
        """保存已经通过 CourierDataSerializer 校验的自提点数据"""
        data = {'courier_data': dict(pickup_data['courier_data'])}
        locker = data['courier_data'].get('locker_details')
        if locker is not None:
            data['courier_data']['locker_details'] = dict(locker)
        if pickup_data.get('shipping_address'):
            data['shipping_address'] = pickup_data['shipping_address']
        CheckoutSession(shopper.session).save_pickup_data(data)
        return data

    def save_guest_contact(self, shopper: ShopperContext, email: str, phone: Optional[str] = None) -> None:
        CheckoutSession(shopper.session).save_guest_contact(email, phone)

    def save_guest_address(
        self,
        shopper: ShopperContext,
        shipping_address: Dict[str, Any],
        billing_address: Optional[Dict[str, Any]] = None,
        use_shipping_as_billing: bool = False
    ) -> Dict[str, Any]:
        """
        保存访客地址。勾选使用收货地址作为账单地址时忽略账单表单。

        Raises:
            ValidationException: 缺少账单地址或国家不存在
        """
        checkout = CheckoutSession(shopper.session)
        shipping = dict(shipping_address)
        self._ensure_country(shipping.get('country_id'), 'shipping_address.country_id')

        if use_shipping_as_billing:
            billing = dict(shipping)
        else:
            if not billing_address:
                raise ValidationException("billing_address", "请填写账单地址")
            billing = dict(billing_address)
            self._ensure_country(billing.get('country_id'), 'billing_address.country_id')

        for address in (shipping, billing):
            if not address.get('email') and checkout.guest_email:
                address['email'] = checkout.guest_email

        checkout.save_addresses(shipping, billing)
        checkout.set_billing_country(billing['country_id'])
        shopper.set_shipping_country(shipping['country_id'])
        return {'shipping_address': shipping, 'billing_address': billing}

    # ==================== 提交订单 ====================

    def _resolve_billing(self, shopper: ShopperContext, command: SubmitOrderCommand) -> Any:
        if shopper.is_customer:
            if not command.billing_address_id:
                raise CheckoutInvalidException("Billing address is required.")
            address = self.address_repository.get_for_customer(shopper.customer_id, command.billing_address_id)
            if address is None or address.address_type not in AddressType.BILLABLE:
                raise CheckoutInvalidException("Billing address not found.")
            return address

        checkout = CheckoutSession(shopper.session)
        if command.use_shipping_as_billing:
            if not checkout.shipping_address:
                raise CheckoutInvalidException("Shipping address is required when using shipping address for billing.")
            return dict(checkout.shipping_address)
        if not checkout.billing_address:
            raise CheckoutInvalidException("Billing address is required.")
        return dict(checkout.billing_address)

    def _resolve_shipping(self, shopper: ShopperContext, command: SubmitOrderCommand) -> Any:
        if shopper.is_customer:
            if not command.shipping_address_id:
                raise CheckoutInvalidException("Shipping address is required for courier delivery.")
            address = self.address_repository.get_for_customer(shopper.customer_id, command.shipping_address_id)
            if address is None or address.address_type != AddressType.SHIPPING:
                raise CheckoutInvalidException("Shipping address not found.")
            return address

        shipping = CheckoutSession(shopper.session).shipping_address
        if not shipping:
            raise CheckoutInvalidException("Shipping address is required for courier delivery.")
        return dict(shipping)

    def _validate_pickup(self, shopper: ShopperContext) -> Dict[str, Any]:
        pickup_data = CheckoutSession(shopper.session).pickup_data
        if not pickup_data or not pickup_data.get('courier_data'):
            raise CheckoutInvalidException("Pickup point selection is required for pickup shipping method.")
        errors = validate_courier_data(pickup_data['courier_data'])
        if errors:
            messages = [f"{field}: {', '.join(items)}" for field, items in errors.items()]
            raise CheckoutInvalidException(f"Invalid pickup data structure: {'; '.join(messages)}")
        return pickup_data

    def submit_order(self, shopper: ShopperContext, store: CartStore, command: SubmitOrderCommand) -> Dict[str, Any]:
        """
        校验结算信息并下单，第一个未通过的检查作为错误返回。

        Returns:
            order: 订单摘要, stock_warnings: 库存不足提示

        Raises:
            CartEmptyException: 购物车为空
            CheckoutInvalidException: 结算信息不完整
            BusinessRuleViolationException: 无法确定计税国家
        """
        checkout = CheckoutSession(shopper.session)

        existing = self.placement_service.find_idempotent_order(command.idempotency_key)
        if existing is not None:
            checkout.set_last_order(existing.id)
            return {'order': self.order_service.get_placed_order(existing.id), 'stock_warnings': []}

        customer = shopper.customer
        if customer is not None:
            if customer.is_company and not self.address_repository.exists_of_type(
                    customer.id, AddressType.HEADQUARTERS):
                raise CheckoutInvalidException("Headquarters address is required for B2B customers.")
        elif not checkout.guest_email:
            raise CheckoutInvalidException("Email is required for guest checkout.")

        cart = store.load()
        if cart.is_empty:
            raise CartEmptyException()

        billing = self._resolve_billing(shopper, command)

        shipping_method = self.method_repository.get_shipping_method(command.shipping_method_id)
        if shipping_method is None:
            raise CheckoutInvalidException("Shipping method not found.")

        pickup_data = None
        shipping = None
        if shipping_method.is_pickup:
            pickup_data = self._validate_pickup(shopper)
        else:
            shipping = self._resolve_shipping(shopper, command)

        payment_method = self.method_repository.get_payment_method(command.payment_method_id)
        if payment_method is None or not payment_method.is_active:
            raise CheckoutInvalidException("Payment method not found or inactive.")

        stock_warnings = self.cart_service.stock_warnings(store)
        if stock_warnings:
            logger.warning(f"下单时库存不足: {stock_warnings}")

        order = self.placement_service.create_order_from_cart(PlaceOrderCommand(
            cart_store=store,
            cart=cart,
            shipping_method=shipping_method,
            payment_method=payment_method,
            billing_address=billing,
            shipping_address=shipping,
            pickup_data=pickup_data,
            customer=customer,
            user=shopper.user if customer is not None else None,
            currency_code=shopper.currency_code,
            guest_email=checkout.guest_email if customer is None else None,
            idempotency_key=command.idempotency_key,
        ))

        checkout.clear_pickup_data()
        checkout.set_last_order(order.id)
        return {'order': self.order_service.get_placed_order(order.id), 'stock_warnings': stock_warnings}

    def order_placed(self, shopper: ShopperContext) -> Optional[Dict[str, Any]]:
        """刚下的订单摘要，只能查看一次"""
        order_id = CheckoutSession(shopper.session).pop_last_order()
        if order_id is None:
            return None
        return self.order_service.get_placed_order(order_id)
