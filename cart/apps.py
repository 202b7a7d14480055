from django.apps import AppConfig


class CartConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'cart'
    verbose_name = '购物车'

    def ready(self):
        # 注册登录时合并购物车的信号处理器
        from cart import signals  # noqa: F401
