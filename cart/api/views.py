"""
购物车API视图。
"""
import logging

from core.domain.exceptions import EntityNotFoundException
from core.infrastructure.api_view import ApiBaseView
from core.infrastructure.response import StatusCode
from catalog.api.dependencies import get_price_service, build_pricing_context
from catalog.domain import ProductNotPurchasableException, VatRateNotFoundException
from cart.api.serializers import AddToCartSerializer, UpdateCartItemSerializer, RemoveCartItemSerializer
from cart.api.dependencies import get_cart_service, get_cart_store
from customers.application import ShopperContext

logger = logging.getLogger(__name__)


class CartBaseView(ApiBaseView):
    """购物车视图基类，为每个请求准备购物车存储、服务和计价上下文"""

    def prepare(self, request):
        price_service = get_price_service()
        shopper = ShopperContext.from_request(request)
        store = get_cart_store(shopper)
        service = get_cart_service(price_service)
        context = build_pricing_context(request, price_service)
        return service, store, context

    def vat_failed_response(self, exc: VatRateNotFoundException):
        logger.error(f"购物车计价失败: {exc}")
        return self.failed_response(exc.detail, StatusCode.VAT_RATE_NOT_FOUND)


class CartView(CartBaseView):
    """购物车内容和清空购物车"""

    def get(self, request):
        try:
            service, store, context = self.prepare(request)
            data = service.get_cart(store, context)
        except VatRateNotFoundException as e:
            return self.vat_failed_response(e)
        return self.success_response(data=data)

    def delete(self, request):
        service, store, _ = self.prepare(request)
        service.clear(store)
        return self.success_response(message="购物车已清空")


class CartSummaryView(CartBaseView):
    """购物车合计，用于页头小购物车"""

    def get(self, request):
        try:
            service, store, context = self.prepare(request)
            data = service.summary(store, context)
        except VatRateNotFoundException as e:
            return self.vat_failed_response(e)
        return self.success_response(data=data)


class CartAddView(CartBaseView):
    """加入购物车"""

    def post(self, request):
        serializer = AddToCartSerializer(data=request.data)
        if not serializer.is_valid():
            return self.validation_failed_response(serializer.errors)

        data = serializer.validated_data
        try:
            service, store, context = self.prepare(request)
            cart = service.add(store, data['product_id'], data['quantity'], context)
        except EntityNotFoundException as e:
            return self.domain_failed_response(e, StatusCode.PRODUCT_NOT_FOUND)
        except ProductNotPurchasableException as e:
            return self.failed_response(e.detail, StatusCode.PRODUCT_NOT_PURCHASABLE)
        except VatRateNotFoundException as e:
            return self.vat_failed_response(e)
        return self.success_response(data=cart, message="已加入购物车")


class CartUpdateView(CartBaseView):
    """修改购物车数量"""

    def post(self, request):
        serializer = UpdateCartItemSerializer(data=request.data)
        if not serializer.is_valid():
            return self.validation_failed_response(serializer.errors)

        data = serializer.validated_data
        try:
            service, store, context = self.prepare(request)
            cart = service.update(store, data['cart_key'], data['quantity'], context)
        except EntityNotFoundException as e:
            return self.domain_failed_response(e, StatusCode.CART_ITEM_NOT_FOUND)
        except VatRateNotFoundException as e:
            return self.vat_failed_response(e)
        return self.success_response(data=cart, message="购物车已更新")


class CartRemoveView(CartBaseView):
    """移除购物车商品"""

    def post(self, request):
        serializer = RemoveCartItemSerializer(data=request.data)
        if not serializer.is_valid():
            return self.validation_failed_response(serializer.errors)

        try:
            service, store, context = self.prepare(request)
            cart = service.remove(store, serializer.validated_data['cart_key'], context)
        except VatRateNotFoundException as e:
            return self.vat_failed_response(e)
        return self.success_response(data=cart, message="已从购物车移除")
