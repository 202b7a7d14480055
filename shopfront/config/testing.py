"""
测试环境配置文件。
包含测试环境特定的Django配置。
"""
from .base import *
from .env import *

# 测试环境禁用调试模式
DEBUG = False

# 使用内存数据库加速测试
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

# 禁用缓存加速测试
CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.dummy.DummyCache',
    }
}

# 应用缓存使用进程内缓存，幂等键等逻辑仍然生效
CACHE_SERVICE_BACKEND = 'memory'

# 禁用密码哈希加速测试
PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.MD5PasswordHasher',
]

# 测试中只输出错误
LOGGING = logging_config(
    {'console': {'level': 'ERROR', 'class': 'logging.StreamHandler', 'formatter': 'verbose'}},
    app_level='CRITICAL',
    django_level='ERROR',
)

# 测试环境特定的DRF配置
REST_FRAMEWORK['TEST_REQUEST_DEFAULT_FORMAT'] = 'json'

# 测试环境使用固定的默认国家与货币
CHECKOUT_SETTINGS = {
    'IDEMPOTENCY_TTL': 300,
    'DEFAULT_CURRENCY': 'RON',
    'DEFAULT_COUNTRY_CODE': 'RO',
}
