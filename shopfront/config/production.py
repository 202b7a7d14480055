"""
生产环境配置。
"""
import os

from .base import *
from .env import *

DEBUG = False

DATABASES = mysql_database(DB_NAME, DB_USER, DB_PASSWORD, DB_HOST, DB_PORT, ENGINE=DB_ENGINE, CONN_MAX_AGE=60)
CACHES = redis_cache(
    REDIS_URL, REDIS_PASSWORD, REDIS_MAX_CONNECTIONS, REDIS_KEY_PREFIX,
    SOCKET_TIMEOUT=5,
    SOCKET_CONNECT_TIMEOUT=5,
    COMPRESSOR='django_redis.compressors.zlib.ZlibCompressor',
)

# 会话同时写入缓存和数据库，购物车和结算数据在缓存失效后仍然保留
SESSION_ENGINE = 'django.contrib.sessions.backends.cached_db'

LOG_DIR = os.path.join(BASE_DIR, 'logs')
os.makedirs(LOG_DIR, exist_ok=True)


def rotating_file(filename, level):
    return {
        'level': level,
        'class': 'logging.handlers.RotatingFileHandler',
        'filename': os.path.join(LOG_DIR, filename),
        'maxBytes': 10 * 1024 * 1024,
        'backupCount': 10,
        'formatter': 'verbose',
    }


LOGGING = logging_config({
    'console': {'level': 'WARNING', 'class': 'logging.StreamHandler', 'formatter': 'verbose'},
    'file': rotating_file('django.log', 'INFO'),
    'error_file': rotating_file('error.log', 'ERROR'),
})

SECURE_CONTENT_TYPE_NOSNIFF = True
SECURE_HSTS_SECONDS = 31536000
SECURE_HSTS_INCLUDE_SUBDOMAINS = True
SECURE_SSL_REDIRECT = True
SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True

REST_FRAMEWORK['DEFAULT_THROTTLE_CLASSES'] = [
    'rest_framework.throttling.AnonRateThrottle',
    'rest_framework.throttling.UserRateThrottle',
]
REST_FRAMEWORK['DEFAULT_THROTTLE_RATES'] = {
    'anon': '1000/day',
    'user': '10000/day',
}
