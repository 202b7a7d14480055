"""
退货模块配置文件。
从Django设置中获取退货模块的配置。
"""
from decimal import Decimal

from django.conf import settings

RETURN_SETTINGS = getattr(settings, 'RETURN_SETTINGS', {})

# 后台退货列表每页数量
ADMIN_PAGE_SIZE = RETURN_SETTINGS.get('ADMIN_PAGE_SIZE', 50)

# 客户退货历史每页数量
CUSTOMER_PAGE_SIZE = RETURN_SETTINGS.get('CUSTOMER_PAGE_SIZE', 10)

# 退货单号字符数(不含前缀和分隔符)
RETURN_CODE_LENGTH = RETURN_SETTINGS.get('RETURN_CODE_LENGTH', 6)

RETURN_CODE_PREFIX = 'RET'

# 退货单号生成盐，与订单号区分
RETURN_CODE_SALT = RETURN_SETTINGS.get('RETURN_CODE_SALT') or f"{settings.SECRET_KEY}-returns"

# 后台可填写的最大退款金额
REFUND_AMOUNT_MAX = Decimal(str(RETURN_SETTINGS.get('REFUND_AMOUNT_MAX', '999999999.99')))
