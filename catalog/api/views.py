"""
商品目录API视图。
店铺前台的商品、分类、货币和收藏夹接口。
"""
import logging

from core.domain.exceptions import DomainException, EntityNotFoundException
from core.infrastructure.api_view import ApiBaseView
from core.infrastructure.permissions import IsCustomer
from core.infrastructure.response import StatusCode
from catalog.application import ListProductsQuery
from catalog.domain import VatRateNotFoundException, WishlistItemNotFoundException
from catalog.domain.config import PAGE_SIZE
from catalog.api.serializers import (
    ProductListQuerySerializer,
    ProductPriceQuerySerializer,
    SetCurrencySerializer,
    WishlistAddSerializer,
)
from catalog.api.dependencies import (
    get_price_service,
    get_catalog_service,
    get_wishlist_service,
    build_pricing_context,
)
from customers.application import ShopperContext

logger = logging.getLogger(__name__)


class CatalogBaseView(ApiBaseView):
    """商品目录视图基类，统一处理缺少增值税税率的情况"""

    def vat_failed_response(self, exc: VatRateNotFoundException):
        logger.error(f"计价失败: {exc}")
        return self.failed_response(exc.detail, StatusCode.VAT_RATE_NOT_FOUND)


class ProductListView(CatalogBaseView):
    """前台商品列表"""

    def get(self, request):
        serializer = ProductListQuerySerializer(data=request.query_params)
        if not serializer.is_valid():
            return self.validation_failed_response(serializer.errors)

        page, page_size = self.get_page_params(request, PAGE_SIZE)
        query = ListProductsQuery(page=page, page_size=page_size, **serializer.validated_data)

        price_service = get_price_service()
        try:
            context = build_pricing_context(request, price_service)
            items, total = get_catalog_service(price_service).list_products(query, context)
        except VatRateNotFoundException as e:
            return self.vat_failed_response(e)
        return self.paginated_response(
            items, total, page, page_size,
            message="获取商品列表成功",
            metadata={"currency": context.currency_code, "show_vat": context.show_vat}
        )


class ProductDetailView(CatalogBaseView):
    """前台商品详情"""

    def get(self, request, product_id):
        price_service = get_price_service()
        try:
            context = build_pricing_context(request, price_service)
            data = get_catalog_service(price_service).get_product(product_id, context)
        except VatRateNotFoundException as e:
            return self.vat_failed_response(e)
        except EntityNotFoundException as e:
            return self.domain_failed_response(e, StatusCode.PRODUCT_NOT_FOUND)
        return self.success_response(data=data, message="获取商品详情成功")


class ProductPriceView(CatalogBaseView):
    """按数量查询商品价格"""

    def get(self, request, product_id):
        serializer = ProductPriceQuerySerializer(data=request.query_params)
        if not serializer.is_valid():
            return self.validation_failed_response(serializer.errors)

        price_service = get_price_service()
        try:
            context = build_pricing_context(request, price_service)
            data = get_catalog_service(price_service).get_product_price(
                product_id, serializer.validated_data['quantity'], context
            )
        except VatRateNotFoundException as e:
            return self.vat_failed_response(e)
        except EntityNotFoundException as e:
            return self.domain_failed_response(e, StatusCode.PRODUCT_NOT_FOUND)
        return self.success_response(data=data)


class ProductAutocompleteView(ApiBaseView):
    """搜索联想"""

    def get(self, request):
        keyword = request.query_params.get('q', '')
        return self.success_response(data=get_catalog_service().autocomplete(keyword))


class CategoryTreeView(ApiBaseView):
    """启用的分类树"""

    def get(self, request):
        return self.success_response(data=get_catalog_service().list_categories())


class CategoryDetailView(CatalogBaseView):
    """分类及其商品"""

    def get(self, request, slug):
        page, page_size = self.get_page_params(request, PAGE_SIZE)
        price_service = get_price_service()
        try:
            context = build_pricing_context(request, price_service)
            category, items, total = get_catalog_service(price_service).get_category(
                slug, context, page, page_size, request.query_params.get('sort')
            )
        except VatRateNotFoundException as e:
            return self.vat_failed_response(e)
        except EntityNotFoundException as e:
            return self.domain_failed_response(e, StatusCode.NOT_FOUND)
        return self.paginated_response(items, total, page, page_size, metadata={"category": category})


class CurrencyView(ApiBaseView):
    """货币列表和切换货币"""

    def get(self, request):
        shopper = ShopperContext.from_request(request)
        return self.success_response(
            data=get_catalog_service().list_currencies(),
            metadata={"current": shopper.currency_code}
        )

    def post(self, request):
        serializer = SetCurrencySerializer(data=request.data)
        if not serializer.is_valid():
            return self.validation_failed_response(serializer.errors)

        shopper = ShopperContext.from_request(request)
        try:
            currency = get_catalog_service().set_currency(shopper, serializer.validated_data['code'])
        except DomainException as e:
            return self.domain_failed_response(e)
        return self.success_response(data=currency, message="货币已切换")


class WishlistView(CatalogBaseView):
    """收藏夹商品列表和收藏商品"""
    permission_classes = [IsCustomer]

    def get(self, request):
        price_service = get_price_service()
        try:
            context = build_pricing_context(request, price_service)
            items = get_wishlist_service(price_service).list_products(request.user.customer.id, context)
        except VatRateNotFoundException as e:
            return self.vat_failed_response(e)
        return self.success_response(
            data=items,
            metadata={"currency": context.currency_code, "show_vat": context.show_vat}
        )

    def post(self, request):
        serializer = WishlistAddSerializer(data=request.data)
        if not serializer.is_valid():
            return self.validation_failed_response(serializer.errors)

        try:
            result = get_wishlist_service().add(request.user.customer.id, serializer.validated_data['product_id'])
        except EntityNotFoundException as e:
            return self.domain_failed_response(e, StatusCode.PRODUCT_NOT_FOUND)
        message = "已加入收藏夹" if result['added'] else "商品已在收藏夹中"
        return self.success_response(data=result, message=message)


class WishlistItemView(ApiBaseView):
    """取消收藏"""
    permission_classes = [IsCustomer]

    def delete(self, request, product_id):
        try:
            get_wishlist_service().remove(request.user.customer.id, product_id)
        except WishlistItemNotFoundException as e:
            return self.domain_failed_response(e, StatusCode.WISHLIST_ITEM_NOT_FOUND)
        except EntityNotFoundException as e:
            return self.domain_failed_response(e, StatusCode.PRODUCT_NOT_FOUND)
        return self.success_response(message="已从收藏夹移除", code=StatusCode.DELETED)


class WishlistCheckView(ApiBaseView):
    """商品是否已收藏，访客总是未收藏"""

    def get(self, request, product_id):
        user = request.user
        customer = getattr(user, 'customer', None) if user.is_authenticated else None
        in_wishlist = get_wishlist_service().contains(customer.id if customer else None, product_id)
        return self.success_response(data={'in_wishlist': in_wishlist})
