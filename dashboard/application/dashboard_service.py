"""
后台仪表盘应用服务。
"""
from datetime import timedelta
from decimal import Decimal
from typing import Any, Dict, List

from django.utils import timezone

from catalog.domain import ProductRepository
from orders.application.dtos import get_shipping
from orders.domain import OrderStatus
from dashboard.domain import DashboardRepository, comparison_kpi

# 新订单: 今天下单且待处理或处理中
NEW_ORDER_STATUSES = (OrderStatus.PENDING, OrderStatus.PROCESSING)


def _previous_month_range(today):
    first_this_month = today.replace(day=1)
    last_previous_month = first_this_month - timedelta(days=1)
    return last_previous_month.replace(day=1), last_previous_month


class DashboardService:
    """
    汇总仪表盘数据: KPI、销售趋势、订单状态分布、最新订单和库存预警。
    """

    def __init__(
        self,
        dashboard_repository: DashboardRepository,
        product_repository: ProductRepository,
        low_stock_threshold: int = 5,
        chart_days: int = 30,
        latest_orders_limit: int = 10,
        stock_alerts_limit: int = 6
    ):
        self.dashboard_repository = dashboard_repository
        self.product_repository = product_repository
        self.low_stock_threshold = low_stock_threshold
        self.chart_days = chart_days
        self.latest_orders_limit = latest_orders_limit
        self.stock_alerts_limit = stock_alerts_limit

    def get_dashboard(self) -> Dict[str, Any]:
        today = timezone.localdate()
        return {
            'kpis': self.get_kpis(today),
            'sales_chart': self.get_sales_chart(today),
            'status_distribution': self.get_status_distribution(),
            'latest_orders': self.get_latest_orders(),
            'stock_alerts': self.get_stock_alerts(),
        }

    def get_kpis(self, today) -> Dict[str, Any]:
        repository = self.dashboard_repository
        yesterday = today - timedelta(days=1)
        previous_start, previous_end = _previous_month_range(today)

        sales_today = repository.sales_between(today, today)
        sales_yesterday = repository.sales_between(yesterday, yesterday)
        orders_today = repository.count_orders_on(today, NEW_ORDER_STATUSES)
        orders_yesterday = repository.count_orders_on(yesterday, NEW_ORDER_STATUSES)
        month_revenue = repository.sales_between(today.replace(day=1), today)
        previous_month_revenue = repository.sales_between(previous_start, previous_end)

        return {
            'sales_today': comparison_kpi(sales_today, sales_yesterday),
            'new_orders': comparison_kpi(orders_today, orders_yesterday),
            'month_revenue': comparison_kpi(month_revenue, previous_month_revenue),
            'new_customers': {
                'value': repository.count_new_customers(timezone.now() - timedelta(days=30)),
            },
            'stock_alerts': {
                'value': self.product_repository.count_low_stock(self.low_stock_threshold),
            },
        }

    def get_sales_chart(self, today) -> List[Dict[str, Any]]:
        """最近 chart_days 天(含今天)的每日销售额，没有订单的日期为0"""
        start = today - timedelta(days=self.chart_days - 1)
        daily = self.dashboard_repository.daily_sales(start, today)
        chart = []
        for offset in range(self.chart_days):
            day = start + timedelta(days=offset)
            chart.append({
                'date': day.isoformat(),
                'day': day.strftime('%d %b'),
                'total': daily.get(day, Decimal('0')),
            })
        return chart

    def get_status_distribution(self) -> List[Dict[str, Any]]:
        counts = self.dashboard_repository.status_counts()
        return [
            {'name': label, 'value': counts[value], 'color': OrderStatus.color(value)}
            for value, label in OrderStatus.LABELS.items()
            if counts.get(value)
        ]

    @staticmethod
    def _customer_name(order: Any) -> str:
        if order.customer is not None:
            return order.customer.display_name
        address = order.shipping_address
        if address is not None:
            name = f"{address.first_name} {address.last_name}".strip()
            if name:
                return name
        return 'N/A'

    def get_latest_orders(self) -> List[Dict[str, Any]]:
        orders = []
        for order in self.dashboard_repository.latest_orders(self.latest_orders_limit):
            shipping = get_shipping(order)
            total = order.total_ron_incl_vat
            if shipping is not None:
                total += shipping.shipping_cost_ron_incl_vat
            orders.append({
                'id': order.id,
                'order_number': order.order_number,
                'customer_name': self._customer_name(order),
                'created_at': order.created_at.isoformat(),
                'total_value': total,
                'status': OrderStatus.to_dict(order.status),
            })
        return orders

    def get_stock_alerts(self) -> List[Dict[str, Any]]:
        alerts = []
        for product in self.product_repository.list_low_stock(self.low_stock_threshold, self.stock_alerts_limit):
            image_url = product.main_image_url
            if not image_url and product.parent is not None:
                image_url = product.parent.main_image_url
            alerts.append({
                'id': str(product.id),
                'name': product.name,
                'sku': product.sku,
                'stock_quantity': product.stock_quantity,
                'image_url': image_url or None,
            })
        return alerts
