"""
订单事件处理器测试。
"""
from decimal import Decimal
from unittest import mock

from django.test import SimpleTestCase

from core.domain.events import DomainEvents
from orders.domain import OrderCreatedEvent, OrderStatusChangedEvent, OrderStatus


class OrderEventHandlerTests(SimpleTestCase):

    @mock.patch('orders.application.event_handlers.log_business_event')
    def test_created_event_is_logged(self, log_event):
        DomainEvents.publish(OrderCreatedEvent(
            order_id=7, order_number='ABC-DEF-GHJ', customer_id=None,
            total_ron_incl_vat=Decimal('119.00'), is_guest=True,
        ))
        log_event.assert_called_once()
        name, payload = log_event.call_args[0]
        self.assertEqual(name, 'order.created')
        self.assertEqual(payload['total_ron_incl_vat'], '119.00')
        self.assertTrue(payload['is_guest'])

    @mock.patch('orders.application.event_handlers.log_business_event')
    def test_status_change_is_logged(self, log_event):
        DomainEvents.publish(OrderStatusChangedEvent(
            order_id=7, order_number='ABC-DEF-GHJ',
            old_status=OrderStatus.PENDING, new_status=OrderStatus.SHIPPED, user_id=1,
        ))
        name, payload = log_event.call_args[0]
        self.assertEqual(name, 'order.status.updated')
        self.assertEqual(payload['new_status'], OrderStatus.SHIPPED)
