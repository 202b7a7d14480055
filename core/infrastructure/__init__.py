"""
基础设施层包。
提供事务管理、缓存服务、统一响应和权限等基础设施组件。
"""

# 事务管理
from core.infrastructure.transaction import (
    TransactionManager,
    DjangoTransactionManager,
)

# 缓存服务
from core.infrastructure.cache import (
    CacheService,
    RedisCacheService,
    MemoryCacheService,
    NoCacheService,
    get_cache_service,
)

__all__ = [
    # 事务管理
    'TransactionManager',
    'DjangoTransactionManager',

    # 缓存服务
    'CacheService',
    'RedisCacheService',
    'MemoryCacheService',
    'NoCacheService',
    'get_cache_service',
]
