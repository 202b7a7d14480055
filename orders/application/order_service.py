"""
客户订单服务。
"""
from typing import Any, Dict, List, Optional, Tuple

from core.domain.exceptions import EntityNotFoundException

from orders.domain import OrderRepository
from orders.application.dtos import (
    get_shipping,
    order_address_to_dict,
    order_shipping_to_dict,
    order_to_detail,
    order_totals_to_dict,
)


class CustomerOrderService:
    """
    客户查看自己的订单。
    """

    def __init__(self, order_repository: OrderRepository):
        self.order_repository = order_repository

    def list_my_orders(
        self,
        customer_id: Any,
        filters: Optional[Dict[str, Any]] = None,
        page: int = 1,
        page_size: int = 20
    ) -> Tuple[List[Dict[str, Any]], int]:
        orders, total = self.order_repository.list_for_customer(customer_id, filters, page, page_size)
        return [order_to_detail(order) for order in orders], total

    def get_my_order(self, customer_id: Any, order_number: str) -> Dict[str, Any]:
        """
        客户的订单详情，其他客户的订单视为不存在。

        Raises:
            EntityNotFoundException: 订单不存在或不属于该客户
        """
        order = self.order_repository.get_by_number(order_number)
        if order is None or order.customer_id is None or str(order.customer_id) != str(customer_id):
            raise EntityNotFoundException("订单", order_number)
        return order_to_detail(order)

    def get_placed_order(self, order_id: Any) -> Optional[Dict[str, Any]]:
        """下单完成页展示的订单摘要"""
        order = self.order_repository.get_by_id(order_id)
        if order is None:
            return None
        return {
            'id': order.id,
            'order_number': order.order_number,
            'created_at': order.created_at.isoformat(),
            'status': order.status,
            'is_paid': order.is_paid,
            'payment_method': order.payment_method.name if order.payment_method else None,
            'products': [
                {'name': line.name, 'sku': line.sku, 'quantity': line.quantity,
                 'total_currency_incl_vat': line.total_currency_incl_vat}
                for line in order.products.all()
            ],
            'shipping_address': order_address_to_dict(order.shipping_address),
            'billing_address': order_address_to_dict(order.billing_address),
            'shipping': order_shipping_to_dict(get_shipping(order)),
            'totals': order_totals_to_dict(order),
        }
