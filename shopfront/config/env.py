"""
环境变量。
启动时加载 shopfront/config/.env，各环境的配置文件从这里读取可变的值。
"""
import os
import warnings
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from loguru import logger

# 项目根目录
BASE_DIR = Path(__file__).resolve().parent.parent.parent

ENV_FILE = Path(__file__).resolve().parent / '.env'

if ENV_FILE.exists():
    load_dotenv(dotenv_path=ENV_FILE, encoding='utf-8')
    logger.debug(f"已加载环境变量文件: {ENV_FILE}")

TRUE_VALUES = ('true', 'yes', '1', 'y', 'on')


def _cast(value: str, cast_type: type) -> Any:
    if cast_type is bool:
        return value.strip().lower() in TRUE_VALUES
    if cast_type is list:
        return [item.strip() for item in value.split(',') if item.strip()]
    return cast_type(value)


def get_env(name: str, default: Any = None, cast_type: Optional[type] = None) -> Any:
    """
    读取环境变量。

    Args:
        name: 环境变量名称
        default: 未设置或转换失败时使用的值，不做类型转换
        cast_type: bool, int, list 等，list 按逗号拆分
    """
    value = os.environ.get(name)
    if value is None:
        return default
    if cast_type is None:
        return value
    try:
        return _cast(value, cast_type)
    except (TypeError, ValueError):
        warnings.warn(f"环境变量{name}的值'{value}'不能转换为{cast_type.__name__}，使用默认值")
        return default


DEBUG = get_env('DEBUG', default=True, cast_type=bool)
SECRET_KEY = get_env('SECRET_KEY', default='django-insecure-3r#k8w!m2q6v^p0z$shopfront-dev-key-t9x@c7n4b1')
ALLOWED_HOSTS = get_env('ALLOWED_HOSTS', default=['localhost', '127.0.0.1'], cast_type=list)

# 数据库配置
DB_ENGINE = get_env('DB_ENGINE', default='django.db.backends.mysql')
DB_NAME = get_env('DB_NAME', default='shopfront')
DB_USER = get_env('DB_USER', default='root')
DB_PASSWORD = get_env('DB_PASSWORD', default='123456')
DB_HOST = get_env('DB_HOST', default='127.0.0.1')
DB_PORT = get_env('DB_PORT', default='3306')

# Redis配置
REDIS_URL = get_env('REDIS_URL', default='redis://localhost:6379/1')
REDIS_PASSWORD = get_env('REDIS_PASSWORD', default='')
REDIS_MAX_CONNECTIONS = get_env('REDIS_MAX_CONNECTIONS', default=100, cast_type=int)
REDIS_KEY_PREFIX = get_env('REDIS_KEY_PREFIX', default='shopfront')

# 国际化配置
LANGUAGE_CODE = get_env('LANGUAGE_CODE', default='zh-hans')
TIME_ZONE = get_env('TIME_ZONE', default='Europe/Bucharest')

# 应用缓存后端: redis / memory / none
CACHE_SERVICE_BACKEND = get_env('CACHE_SERVICE_BACKEND', default='redis')

# 结算模块配置
CHECKOUT_IDEMPOTENCY_TTL = get_env('CHECKOUT_IDEMPOTENCY_TTL', default=300, cast_type=int)
DEFAULT_CURRENCY = get_env('DEFAULT_CURRENCY', default='RON')
DEFAULT_COUNTRY_CODE = get_env('DEFAULT_COUNTRY_CODE', default='RO')

# 商品目录配置
CATALOG_PAGE_SIZE = get_env('CATALOG_PAGE_SIZE', default=20, cast_type=int)
LOW_STOCK_THRESHOLD = get_env('LOW_STOCK_THRESHOLD', default=5, cast_type=int)

# 汇率来源(罗马尼亚国家银行每日汇率XML)
EXCHANGE_RATE_URL = get_env('EXCHANGE_RATE_URL', default='https://www.bnr.ro/nbrfxrates.xml')
EXCHANGE_RATE_TIMEOUT = get_env('EXCHANGE_RATE_TIMEOUT', default=10, cast_type=int)

# 已下单购物车保留天数
CART_RETENTION_DAYS = get_env('CART_RETENTION_DAYS', default=30, cast_type=int)
