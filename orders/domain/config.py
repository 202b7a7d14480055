"""
订单模块配置文件。
从Django设置中获取订单模块的配置。
"""
from django.conf import settings

ORDER_SETTINGS = getattr(settings, 'ORDER_SETTINGS', {})
CHECKOUT_SETTINGS = getattr(settings, 'CHECKOUT_SETTINGS', {})

# 后台订单列表每页数量
ADMIN_PAGE_SIZE = ORDER_SETTINGS.get('ADMIN_PAGE_SIZE', 50)

# 客户订单历史每页数量
CUSTOMER_PAGE_SIZE = ORDER_SETTINGS.get('CUSTOMER_PAGE_SIZE', 20)

# 订单号字符数(不含分隔符)
ORDER_CODE_LENGTH = ORDER_SETTINGS.get('ORDER_CODE_LENGTH', 9)

# 订单号生成盐，默认使用SECRET_KEY
ORDER_CODE_SALT = ORDER_SETTINGS.get('ORDER_CODE_SALT') or settings.SECRET_KEY

# 下单幂等键的有效时间（秒）
IDEMPOTENCY_TTL = CHECKOUT_SETTINGS.get('IDEMPOTENCY_TTL', 300)
