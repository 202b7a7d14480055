"""
基础配置文件。
包含所有环境共享的Django配置，环境相关的值由env模块提供。
"""
import os
from pathlib import Path

from .env import (
    BASE_DIR,
    SECRET_KEY,
    ALLOWED_HOSTS,
    LANGUAGE_CODE,
    TIME_ZONE,
    CACHE_SERVICE_BACKEND,
    CHECKOUT_IDEMPOTENCY_TTL,
    DEFAULT_CURRENCY,
    DEFAULT_COUNTRY_CODE,
    CATALOG_PAGE_SIZE,
    LOW_STOCK_THRESHOLD,
    EXCHANGE_RATE_URL,
    EXCHANGE_RATE_TIMEOUT,
    CART_RETENTION_DAYS,
)

# 应用定义
INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    'rest_framework',
    # 业务模块
    'customers',
    'catalog',
    'cart.apps.CartConfig',
    'checkout',
    'orders.apps.OrdersConfig',
    'returns',
    'reviews',
    'dashboard',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'shopfront.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'shopfront.wsgi.application'

# 密码验证
AUTH_PASSWORD_VALIDATORS = [
    {'NAME': 'django.contrib.auth.password_validation.UserAttributeSimilarityValidator'},
    {'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator'},
    {'NAME': 'django.contrib.auth.password_validation.CommonPasswordValidator'},
    {'NAME': 'django.contrib.auth.password_validation.NumericPasswordValidator'},
]

# 国际化
USE_I18N = True
USE_TZ = True

# 静态文件
STATIC_URL = 'static/'
STATIC_ROOT = os.path.join(BASE_DIR, 'staticfiles')

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

# 会话：购物车与结算数据保存在会话中
SESSION_ENGINE = 'django.contrib.sessions.backends.db'
SESSION_COOKIE_AGE = 60 * 60 * 24 * 14
SESSION_SAVE_EVERY_REQUEST = False

# DRF配置
REST_FRAMEWORK = {
    'DEFAULT_AUTHENTICATION_CLASSES': [
        'rest_framework.authentication.SessionAuthentication',
    ],
    'DEFAULT_PERMISSION_CLASSES': [
        'rest_framework.permissions.AllowAny',
    ],
    'DEFAULT_RENDERER_CLASSES': [
        'rest_framework.renderers.JSONRenderer',
    ],
    'DEFAULT_PARSER_CLASSES': [
        'rest_framework.parsers.JSONParser',
        'rest_framework.parsers.FormParser',
    ],
    'EXCEPTION_HANDLER': 'core.infrastructure.exception_handler.unified_exception_handler',
    'COERCE_DECIMAL_TO_STRING': False,
}

# 结算模块配置
CHECKOUT_SETTINGS = {
    'IDEMPOTENCY_TTL': CHECKOUT_IDEMPOTENCY_TTL,
    'DEFAULT_CURRENCY': DEFAULT_CURRENCY,
    'DEFAULT_COUNTRY_CODE': DEFAULT_COUNTRY_CODE,
}

# 商品目录模块配置
CATALOG_SETTINGS = {
    'PAGE_SIZE': CATALOG_PAGE_SIZE,
    'LOW_STOCK_THRESHOLD': LOW_STOCK_THRESHOLD,
    'AUTOCOMPLETE_LIMIT': 10,
    'EXCHANGE_RATE_URL': EXCHANGE_RATE_URL,
    'EXCHANGE_RATE_TIMEOUT': EXCHANGE_RATE_TIMEOUT,
}

# 购物车模块配置
CART_SETTINGS = {
    'RETENTION_DAYS': CART_RETENTION_DAYS,
}

# 订单模块配置
ORDER_SETTINGS = {
    'ADMIN_PAGE_SIZE': 50,
    'CUSTOMER_PAGE_SIZE': 20,
    'ORDER_CODE_LENGTH': 9,
}

# 退货模块配置
RETURN_SETTINGS = {
    'ADMIN_PAGE_SIZE': 50,
    'RETURN_CODE_LENGTH': 6,
    'REFUND_AMOUNT_MAX': '999999999.99',
}

# 业务模块的标准库日志记录器名称
APP_LOGGERS = ('core', 'customers', 'catalog', 'cart', 'checkout', 'orders', 'returns', 'reviews', 'dashboard')

LOG_FORMATTERS = {
    'verbose': {
        'format': '{levelname} {asctime} {module} {process:d} {thread:d} {message}',
        'style': '{',
    },
}


def mysql_database(name, user, password, host, port, **extra):
    """MySQL连接配置，统一使用utf8mb4"""
    config = {
        'ENGINE': 'django.db.backends.mysql',
        'NAME': name,
        'USER': user,
        'PASSWORD': password,
        'HOST': host,
        'PORT': port,
        'OPTIONS': {'charset': 'utf8mb4', 'use_unicode': True},
    }
    config.update(extra)
    return {'default': config}


def redis_cache(location, password, max_connections, key_prefix, **options):
    """django-redis缓存配置，options 合并进 OPTIONS"""
    cache_options = {
        'CLIENT_CLASS': 'django_redis.client.DefaultClient',
        'CONNECTION_POOL_KWARGS': {'max_connections': max_connections},
        'PASSWORD': password,
    }
    cache_options.update(options)
    return {
        'default': {
            'BACKEND': 'django_redis.cache.RedisCache',
            'LOCATION': location,
            'OPTIONS': cache_options,
            'KEY_PREFIX': key_prefix,
        }
    }


def logging_config(handlers, app_level='INFO', django_level='INFO'):
    """
    生成 LOGGING 配置，所有业务模块的记录器共用同一组处理器。

    Args:
        handlers: 处理器名称 -> 处理器配置
        app_level: 业务模块记录器的级别
        django_level: django 记录器的级别
    """
    names = list(handlers)
    loggers = {
        app: {'handlers': names, 'level': app_level, 'propagate': False}
        for app in APP_LOGGERS
    }
    loggers['django'] = {'handlers': names, 'level': django_level, 'propagate': True}
    return {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': LOG_FORMATTERS,
        'handlers': handlers,
        'loggers': loggers,
    }
