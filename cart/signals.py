"""
购物车信号处理。
客户登录时把访客期间的会话购物车合并到数据库购物车。
"""
from django.contrib.auth.signals import user_logged_in
from django.dispatch import receiver
from loguru import logger


@receiver(user_logged_in, dispatch_uid='cart_merge_on_login')
def merge_cart_on_login(sender, request, user, **kwargs):
    customer = getattr(user, 'customer', None)
    if request is None or customer is None or not customer.is_active:
        return

    from cart.api.dependencies import get_cart_factory, get_cart_service

    factory = get_cart_factory()
    merged = get_cart_service().merge(
        source=factory.create_session_store(request.session),
        target=factory.create_customer_store(customer, request.session.session_key or ''),
        customer_group_id=customer.customer_group_id
    )
    if merged:
        logger.info(f"用户{user.pk}登录，合并购物车 {merged} 行")
