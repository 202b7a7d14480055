from django.apps import AppConfig


class OrdersConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'orders'
    verbose_name = '订单'

    def ready(self):
        # 订单事件写入业务日志
        from orders.application.event_handlers import register_handlers
        register_handlers()
