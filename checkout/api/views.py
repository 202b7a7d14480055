"""
结算API视图。
"""
import logging

from core.domain.exceptions import BusinessRuleViolationException, ValidationException
from core.infrastructure.api_view import ApiBaseView
from core.infrastructure.response import StatusCode
from catalog.domain import VatRateNotFoundException
from cart.api.dependencies import get_cart_store
from customers.application import ShopperContext
from checkout.api.dependencies import get_checkout_service
from checkout.api.serializers import (
    CountrySerializer,
    GuestContactSerializer,
    GuestAddressSerializer,
    PickupDataSerializer,
    SubmitOrderSerializer,
)
from checkout.application import SubmitOrderCommand
from checkout.domain import CartEmptyException

logger = logging.getLogger(__name__)


class CheckoutBaseView(ApiBaseView):
    """结算视图基类"""

    def prepare(self, request):
        shopper = ShopperContext.from_request(request)
        return get_checkout_service(), shopper, get_cart_store(shopper)

    def checkout_failed_response(self, exc: Exception):
        if isinstance(exc, VatRateNotFoundException):
            logger.error(f"结算计价失败: {exc}")
            return self.failed_response(exc.detail, StatusCode.VAT_RATE_NOT_FOUND)
        if isinstance(exc, CartEmptyException) or (
                isinstance(exc, BusinessRuleViolationException) and exc.rule_name == 'cart_empty'):
            return self.failed_response(exc.detail, StatusCode.CART_EMPTY)
        if isinstance(exc, BusinessRuleViolationException):
            return self.failed_response(exc.detail, StatusCode.CHECKOUT_INVALID)
        return self.domain_failed_response(exc, StatusCode.NOT_FOUND)


class OrderDetailsView(CheckoutBaseView):
    """结算页数据"""

    def get(self, request):
        service, shopper, store = self.prepare(request)
        try:
            data = service.order_details(shopper, store)
        except VatRateNotFoundException as e:
            return self.checkout_failed_response(e)
        return self.success_response(data=data)


class ShippingCountryView(CheckoutBaseView):
    """切换收货国家，返回按新国家计价的购物车"""

    def post(self, request):
        serializer = CountrySerializer(data=request.data)
        if not serializer.is_valid():
            return self.validation_failed_response(serializer.errors)

        service, shopper, store = self.prepare(request)
        try:
            cart = service.update_shipping_country(shopper, store, serializer.validated_data['country_id'])
        except (ValidationException, VatRateNotFoundException) as e:
            return self.checkout_failed_response(e)
        return self.success_response(data={'cart': cart})


class BillingCountryView(CheckoutBaseView):
    """切换账单国家"""

    def post(self, request):
        serializer = CountrySerializer(data=request.data)
        if not serializer.is_valid():
            return self.validation_failed_response(serializer.errors)

        service, shopper, store = self.prepare(request)
        try:
            cart = service.update_billing_country(shopper, store, serializer.validated_data['country_id'])
        except (ValidationException, VatRateNotFoundException) as e:
            return self.checkout_failed_response(e)
        return self.success_response(data={'cart': cart})


class PickupDataView(CheckoutBaseView):
    """保存自提点"""

    def post(self, request):
        serializer = PickupDataSerializer(data=request.data)
        if not serializer.is_valid():
            return self.validation_failed_response(serializer.errors)

        service, shopper, _ = self.prepare(request)
        data = service.save_pickup_data(shopper, serializer.validated_data)
        return self.success_response(data=data, message="自提点已保存")


class GuestContactView(CheckoutBaseView):
    """保存访客联系方式"""

    def post(self, request):
        serializer = GuestContactSerializer(data=request.data)
        if not serializer.is_valid():
            return self.validation_failed_response(serializer.errors)

        service, shopper, _ = self.prepare(request)
        data = serializer.validated_data
        service.save_guest_contact(shopper, data['email'], data.get('phone'))
        return self.success_response(data=data, message="联系方式已保存")


class GuestAddressView(CheckoutBaseView):
    """保存访客收货和账单地址"""

    def post(self, request):
        serializer = GuestAddressSerializer(data=request.data)
        if not serializer.is_valid():
            return self.validation_failed_response(serializer.errors)

        service, shopper, _ = self.prepare(request)
        data = serializer.validated_data
        try:
            result = service.save_guest_address(
                shopper,
                data['shipping_address'],
                data.get('billing_address'),
                data['use_shipping_as_billing']
            )
        except ValidationException as e:
            return self.checkout_failed_response(e)
        return self.success_response(data=result, message="地址已保存")


class SubmitOrderView(CheckoutBaseView):
    """提交订单"""

    def post(self, request):
        serializer = SubmitOrderSerializer(data=request.data)
        if not serializer.is_valid():
            return self.validation_failed_response(serializer.errors)

        data = serializer.validated_data
        idempotency_key = data.get('idempotency_key')
        command = SubmitOrderCommand(
            shipping_method_id=data['shipping_method_id'],
            payment_method_id=data['payment_method_id'],
            shipping_address_id=data.get('shipping_address_id'),
            billing_address_id=data.get('billing_address_id'),
            use_shipping_as_billing=data['use_shipping_as_billing'],
            idempotency_key=str(idempotency_key) if idempotency_key else None
        )

        service, shopper, store = self.prepare(request)
        try:
            result = service.submit_order(shopper, store, command)
        except (BusinessRuleViolationException, ValidationException) as e:
            logger.warning(f"提交订单被拒绝: {e}")
            return self.checkout_failed_response(e)
        return self.created_response(data=result, message="订单已提交")


class OrderPlacedView(CheckoutBaseView):
    """下单成功页，订单摘要只能读取一次"""

    def get(self, request):
        service, shopper, _ = self.prepare(request)
        order = service.order_placed(shopper)
        if order is None:
            return self.failed_response("没有刚提交的订单", StatusCode.NOT_FOUND, http_code=404)
        return self.success_response(data=order)
