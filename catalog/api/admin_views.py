"""
后台商品和分类管理API视图。
"""
import logging

from core.domain.exceptions import DomainException, EntityNotFoundException
from core.infrastructure.api_view import ApiBaseView, parse_bool
from core.infrastructure.permissions import IsAdminOrManager
from core.infrastructure.response import StatusCode
from catalog.application import UpdateProductCommand, SaveCategoryCommand
from catalog.domain.config import LOW_STOCK_THRESHOLD
from catalog.api.serializers import AdminProductListQuerySerializer, AdminProductUpdateSerializer, CategorySerializer
from catalog.api.dependencies import get_catalog_admin_service

logger = logging.getLogger(__name__)


class AdminProductListView(ApiBaseView):
    """后台商品列表"""
    permission_classes = [IsAdminOrManager]

    def get(self, request):
        serializer = AdminProductListQuerySerializer(data=request.query_params)
        if not serializer.is_valid():
            return self.validation_failed_response(serializer.errors)

        filters = dict(serializer.validated_data)
        filters['status'] = parse_bool(request.query_params.get('status'))
        if parse_bool(request.query_params.get('low_stock')):
            filters['low_stock'] = LOW_STOCK_THRESHOLD

        page, page_size = self.get_page_params(request)
        items, total = get_catalog_admin_service().list_products(filters, page, page_size)
        return self.paginated_response(items, total, page, page_size)


class AdminProductDetailView(ApiBaseView):
    """后台商品详情和修改"""
    permission_classes = [IsAdminOrManager]

    def get(self, request, product_id):
        try:
            data = get_catalog_admin_service().get_product(product_id)
        except EntityNotFoundException as e:
            return self.domain_failed_response(e, StatusCode.PRODUCT_NOT_FOUND)
        return self.success_response(data=data)

    def put(self, request, product_id):
        serializer = AdminProductUpdateSerializer(data=request.data)
        if not serializer.is_valid():
            return self.validation_failed_response(serializer.errors)

        data = dict(serializer.validated_data)
        command = UpdateProductCommand(
            product_id=product_id,
            category_ids=data.pop('category_ids', None),
            version=data.pop('version', None),
            fields=data
        )
        try:
            product = get_catalog_admin_service().update_product(command)
        except DomainException as e:
            return self.domain_failed_response(e, StatusCode.PRODUCT_NOT_FOUND)
        return self.success_response(data=product, message="商品已更新", code=StatusCode.UPDATED)

    patch = put


class AdminBrandListView(ApiBaseView):
    """品牌列表，供商品编辑表单使用"""
    permission_classes = [IsAdminOrManager]

    def get(self, request):
        return self.success_response(data=get_catalog_admin_service().list_brands())


def build_category_command(data, category_id=None) -> SaveCategoryCommand:
    return SaveCategoryCommand(
        name=data['name'],
        slug=data['slug'],
        description=data['description'],
        parent_id=data['parent_id'],
        status=data['status'],
        sort_order=data['sort_order'],
        category_id=category_id
    )


class AdminCategoryListCreateView(ApiBaseView):
    """后台分类树和新建分类"""
    permission_classes = [IsAdminOrManager]

    def get(self, request):
        return self.success_response(data=get_catalog_admin_service().list_categories())

    def post(self, request):
        serializer = CategorySerializer(data=request.data)
        if not serializer.is_valid():
            return self.validation_failed_response(serializer.errors)
        try:
            category = get_catalog_admin_service().create_category(build_category_command(serializer.validated_data))
        except DomainException as e:
            return self.domain_failed_response(e)
        return self.created_response(data=category, message="分类已创建")


class AdminCategoryDetailView(ApiBaseView):
    """后台分类详情、修改和删除"""
    permission_classes = [IsAdminOrManager]

    def get(self, request, category_id):
        try:
            data = get_catalog_admin_service().get_category(category_id)
        except EntityNotFoundException as e:
            return self.domain_failed_response(e, StatusCode.NOT_FOUND)
        return self.success_response(data=data)

    def put(self, request, category_id):
        serializer = CategorySerializer(data=request.data)
        if not serializer.is_valid():
            return self.validation_failed_response(serializer.errors)
        try:
            category = get_catalog_admin_service().update_category(
                build_category_command(serializer.validated_data, category_id)
            )
        except DomainException as e:
            return self.domain_failed_response(e, StatusCode.NOT_FOUND)
        return self.success_response(data=category, message="分类已更新", code=StatusCode.UPDATED)

    def delete(self, request, category_id):
        try:
            get_catalog_admin_service().delete_category(category_id)
        except DomainException as e:
            return self.domain_failed_response(e, StatusCode.NOT_FOUND)
        return self.success_response(message="分类已删除", code=StatusCode.DELETED)
