"""
基于Django ORM的订单仓储实现。
"""
from typing import Any, Dict, List, Optional, Tuple

from django.db.models import Q
from loguru import logger

from orders.domain import OrderRepository, OrderStatus, HistoryAction
from orders.infrastructure.models.order_models import (
    Order,
    OrderProduct,
    OrderAddress,
    OrderShipping,
    OrderHistory,
)

# 地址快照可写入的字段
ADDRESS_FIELDS = (
    'company_name', 'fiscal_code', 'reg_number', 'first_name', 'last_name', 'phone', 'email',
    'address_line_1', 'address_line_2', 'city', 'county_name', 'county_code', 'country_id', 'zip_code',
)


class DjangoOrderRepository(OrderRepository):
    """
    基于Django ORM的订单仓储实现。
    """

    def _base_queryset(self):
        return (
            Order.objects.select_related('customer__user', 'payment_method', 'shipping__shipping_method')
            .prefetch_related('addresses__country', 'products')
        )

    @staticmethod
    def _paginate(queryset, page: int, page_size: int) -> Tuple[List[Order], int]:
        total = queryset.count()
        offset = (page - 1) * page_size
        return list(queryset[offset:offset + page_size]), total

    def get_by_id(self, id: Any) -> Optional[Order]:
        try:
            return self._base_queryset().get(id=id)
        except (Order.DoesNotExist, ValueError, TypeError):
            return None

    def get_by_number(self, order_number: str, for_update: bool = False) -> Optional[Order]:
        if for_update:
            # 行锁查询不能和外连接一起使用
            return Order.objects.select_for_update().filter(order_number=order_number).first()
        return self._base_queryset().filter(order_number=order_number).first()

    def create(self, **fields) -> Order:
        return Order.objects.create(**fields)

    def save(self, entity: Order) -> Order:
        entity.save()
        return entity

    def delete(self, entity: Order) -> None:
        entity.delete()

    def search(
        self,
        filters: Optional[Dict[str, Any]] = None,
        page: int = 1,
        page_size: int = 50
    ) -> Tuple[List[Order], int]:
        """
        后台订单列表。

        支持的过滤条件: filter, search, customer_id, payment_status, order_status,
        payment_method_id, shipping_method_id, date_from, date_to, amount_min, amount_max,
        city, has_invoice
        """
        filters = filters or {}
        queryset = self._base_queryset()

        if filters.get('customer_id'):
            queryset = queryset.filter(customer_id=filters['customer_id'])
        if filters.get('payment_status') is not None:
            queryset = queryset.filter(is_paid=filters['payment_status'])
        if filters.get('order_status'):
            queryset = queryset.filter(status=filters['order_status'])
        if filters.get('payment_method_id'):
            queryset = queryset.filter(payment_method_id=filters['payment_method_id'])
        if filters.get('shipping_method_id'):
            queryset = queryset.filter(shipping__shipping_method_id=filters['shipping_method_id'])
        if filters.get('date_from'):
            queryset = queryset.filter(created_at__date__gte=filters['date_from'])
        if filters.get('date_to'):
            queryset = queryset.filter(created_at__date__lte=filters['date_to'])
        if filters.get('amount_min') is not None:
            queryset = queryset.filter(total_ron_incl_vat__gte=filters['amount_min'])
        if filters.get('amount_max') is not None:
            queryset = queryset.filter(total_ron_incl_vat__lte=filters['amount_max'])
        if filters.get('city'):
            queryset = queryset.filter(addresses__type='shipping', addresses__city__icontains=filters['city'])
        if filters.get('has_invoice') is True:
            queryset = queryset.exclude(invoice_number='')
        elif filters.get('has_invoice') is False:
            queryset = queryset.filter(invoice_number='')

        statuses = OrderStatus.FILTER_GROUPS.get(filters.get('filter') or 'all')
        if statuses:
            queryset = queryset.filter(status__in=statuses)

        if filters.get('search'):
            keyword = filters['search']
            queryset = queryset.filter(
                Q(order_number__icontains=keyword)
                | Q(addresses__type='shipping', addresses__first_name__icontains=keyword)
                | Q(addresses__type='shipping', addresses__last_name__icontains=keyword)
                | Q(addresses__type='shipping', addresses__city__icontains=keyword)
            )

        return self._paginate(queryset.distinct().order_by('-created_at', '-id'), page, page_size)

    def list_for_customer(
        self,
        customer_id: Any,
        filters: Optional[Dict[str, Any]] = None,
        page: int = 1,
        page_size: int = 20
    ) -> Tuple[List[Order], int]:
        filters = filters or {}
        queryset = self._base_queryset().filter(customer_id=customer_id)

        status = filters.get('status') or 'all'
        if status == 'active':
            queryset = queryset.exclude(status=OrderStatus.CANCELLED)
        elif status == 'cancelled':
            queryset = queryset.filter(status=OrderStatus.CANCELLED)

        if filters.get('search'):
            keyword = filters['search']
            queryset = queryset.filter(Q(order_number__icontains=keyword) | Q(products__name__icontains=keyword))

        return self._paginate(queryset.distinct().order_by('-created_at', '-id'), page, page_size)

    # ==================== 订单行 ====================

    def list_lines(self, order: Order) -> List[OrderProduct]:
        return list(OrderProduct.objects.filter(order=order).order_by('id'))

    def get_line(self, order: Order, order_product_id: Any) -> Optional[OrderProduct]:
        try:
            return OrderProduct.objects.filter(order=order, id=order_product_id).first()
        except (ValueError, TypeError):
            return None

    def create_line(self, order: Order, **fields) -> OrderProduct:
        return OrderProduct.objects.create(order=order, **fields)

    def save_line(self, line: OrderProduct) -> OrderProduct:
        line.save()
        return line

    def delete_line(self, line: OrderProduct) -> None:
        line.delete()

    # ==================== 地址和配送 ====================

    def get_address(self, order: Order, address_type: str) -> Optional[OrderAddress]:
        return OrderAddress.objects.filter(order=order, type=address_type).first()

    def save_address(self, order: Order, address_type: str, data: Dict[str, Any]) -> OrderAddress:
        values = {name: data[name] if data[name] is not None else '' for name in ADDRESS_FIELDS if name in data}
        if 'country_id' in values and values['country_id'] == '':
            values['country_id'] = None
        address, _ = OrderAddress.objects.update_or_create(order=order, type=address_type, defaults=values)
        return address

    def create_shipping(self, order: Order, **fields) -> OrderShipping:
        return OrderShipping.objects.create(order=order, **fields)

    # ==================== 历史 ====================

    def add_history(
        self,
        order: Order,
        action: str,
        old_value: Any = None,
        new_value: Any = None,
        description: str = '',
        user_id: Any = None
    ) -> OrderHistory:
        entry = OrderHistory.objects.create(
            order=order,
            user_id=user_id,
            action=action,
            old_value=old_value,
            new_value=new_value,
            description=description or ''
        )
        if action != HistoryAction.ORDER_CREATED:
            logger.debug(f"订单{order.order_number}记录历史: {action}")
        return entry

    def list_shipping_cities(self) -> List[str]:
        return list(
            OrderAddress.objects.filter(type='shipping')
            .exclude(city='')
            .order_by('city')
            .values_list('city', flat=True)
            .distinct()
        )
