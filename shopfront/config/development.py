"""
开发环境配置。
"""
import os

from .base import *
from .env import *

DEBUG = True

# 本地没有HTTPS
SECURE_SSL_REDIRECT = False
SESSION_COOKIE_SECURE = False
CSRF_COOKIE_SECURE = False

DATABASES = mysql_database(DB_NAME, DB_USER, DB_PASSWORD, DB_HOST, DB_PORT, ENGINE=DB_ENGINE)
CACHES = redis_cache(REDIS_URL, REDIS_PASSWORD, REDIS_MAX_CONNECTIONS, REDIS_KEY_PREFIX)

LOG_DIR = os.path.join(BASE_DIR, 'logs')
os.makedirs(LOG_DIR, exist_ok=True)

LOGGING = logging_config(
    {
        'console': {'level': 'DEBUG', 'class': 'logging.StreamHandler', 'formatter': 'verbose'},
        'file': {
            'level': 'INFO',
            'class': 'logging.FileHandler',
            'filename': os.path.join(LOG_DIR, 'django.log'),
            'formatter': 'verbose',
        },
    },
    app_level='DEBUG',
)

REST_FRAMEWORK['DEFAULT_RENDERER_CLASSES'] = [
    'rest_framework.renderers.JSONRenderer',
    'rest_framework.renderers.BrowsableAPIRenderer',
]
