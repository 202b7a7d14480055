"""
基于Django ORM的仪表盘统计查询。
"""
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Sequence

from django.db.models import Count, DecimalField, ExpressionWrapper, F, Sum, Value
from django.db.models.functions import Coalesce, TruncDate

from dashboard.domain import DashboardRepository
from customers.infrastructure.models.customer_models import Customer
from orders.infrastructure.models.order_models import Order

MONEY = DecimalField(max_digits=14, decimal_places=2)

# 订单含税合计加含税运费
GROSS_TOTAL = ExpressionWrapper(
    F('total_ron_incl_vat') + Coalesce(F('shipping__shipping_cost_ron_incl_vat'), Value(Decimal('0')),
                                       output_field=MONEY),
    output_field=MONEY
)


class DjangoDashboardRepository(DashboardRepository):

    @staticmethod
    def _between(start: date, end: date):
        return Order.objects.filter(created_at__date__gte=start, created_at__date__lte=end)

    def sales_between(self, start: date, end: date) -> Decimal:
        result = self._between(start, end).aggregate(total=Sum(GROSS_TOTAL))
        return result['total'] or Decimal('0')

    def daily_sales(self, start: date, end: date) -> Dict[date, Decimal]:
        rows = (
            self._between(start, end)
            .annotate(day=TruncDate('created_at'))
            .values('day')
            .annotate(total=Sum(GROSS_TOTAL))
            .order_by('day')
        )
        return {row['day']: row['total'] or Decimal('0') for row in rows}

    def count_orders_on(self, day: date, statuses: Sequence[str]) -> int:
        return Order.objects.filter(created_at__date=day, status__in=statuses).count()

    def status_counts(self) -> Dict[str, int]:
        rows = Order.objects.order_by().values('status').annotate(count=Count('id'))
        return {row['status']: row['count'] for row in rows}

    def latest_orders(self, limit: int) -> List[Order]:
        return list(
            Order.objects.select_related('customer__user', 'shipping')
            .prefetch_related('addresses')
            .order_by('-created_at', '-id')[:limit]
        )

    def count_new_customers(self, since: Any) -> int:
        return Customer.objects.filter(created_at__gte=since).count()
