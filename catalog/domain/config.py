"""
商品目录模块配置文件。
从Django设置中获取商品目录模块的配置。
"""
from django.conf import settings

# 获取商品目录模块配置，如果不存在则使用默认值
CATALOG_SETTINGS = getattr(settings, 'CATALOG_SETTINGS', {})

# 店铺前台商品列表每页数量
PAGE_SIZE = CATALOG_SETTINGS.get('PAGE_SIZE', 20)

# 库存预警阈值，低于该数量的商品出现在后台库存预警中
LOW_STOCK_THRESHOLD = CATALOG_SETTINGS.get('LOW_STOCK_THRESHOLD', 5)

# 搜索联想返回的最大条数
AUTOCOMPLETE_LIMIT = CATALOG_SETTINGS.get('AUTOCOMPLETE_LIMIT', 10)

# 分类树缓存时间（秒）
CATEGORY_TREE_CACHE_TIMEOUT = CATALOG_SETTINGS.get('CATEGORY_TREE_CACHE_TIMEOUT', 600)

# 基准货币，所有价格以它存储
BASE_CURRENCY = 'RON'

# 汇率来源和请求超时(秒)
EXCHANGE_RATE_URL = CATALOG_SETTINGS.get('EXCHANGE_RATE_URL', 'https://www.bnr.ro/nbrfxrates.xml')
EXCHANGE_RATE_TIMEOUT = CATALOG_SETTINGS.get('EXCHANGE_RATE_TIMEOUT', 10)
