"""
应用缓存服务。

保存分类树和下单幂等键。生产环境使用Redis，开发和测试环境可以使用进程内缓存。
键支持 "模块:名称" 形式的命名空间，按通配符批量失效。
"""
from abc import ABC, abstractmethod
import fnmatch
import pickle
import threading
from typing import Any, Optional

from cachetools import TLRUCache
from django.conf import settings
from loguru import logger
import redis

DEFAULT_TTL = 300


class CacheService(ABC):
    """缓存服务接口"""

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """不存在或已过期时返回None"""
        pass

    @abstractmethod
    def set(self, key: str, value: Any, ttl: int = DEFAULT_TTL) -> bool:
        pass

    @abstractmethod
    def delete_pattern(self, pattern: str) -> int:
        """
        删除匹配通配符模式(例如 catalog:*)的所有键。

        Returns:
            删除的键数量
        """
        pass

    @abstractmethod
    def clear(self) -> None:
        pass


class RedisCacheService(CacheService):
    """
    Redis缓存。值用pickle序列化，Redis不可用时读取视为未命中，写入返回False。
    """

    def __init__(self, redis_client: redis.Redis, key_prefix: str = "shopfront:app:"):
        self.redis_client = redis_client
        self.key_prefix = key_prefix

    def _key(self, key: str) -> str:
        return f"{self.key_prefix}{key}"

    def get(self, key: str) -> Optional[Any]:
        try:
            raw = self.redis_client.get(self._key(key))
        except redis.RedisError as e:
            logger.error(f"读取缓存{key}失败: {e}")
            return None
        if raw is None:
            return None
        try:
            return pickle.loads(raw)
        except pickle.UnpicklingError as e:
            logger.error(f"缓存{key}的值无法反序列化: {e}")
            return None

    def set(self, key: str, value: Any, ttl: int = DEFAULT_TTL) -> bool:
        try:
            return bool(self.redis_client.setex(self._key(key), ttl, pickle.dumps(value)))
        except redis.RedisError as e:
            logger.error(f"写入缓存{key}失败: {e}")
            return False

    def delete_pattern(self, pattern: str) -> int:
        try:
            keys = list(self.redis_client.scan_iter(match=self._key(pattern)))
            deleted = self.redis_client.delete(*keys) if keys else 0
        except redis.RedisError as e:
            logger.error(f"按模式{pattern}删除缓存失败: {e}")
            return 0
        logger.debug(f"缓存失效 {pattern}: {deleted} 个键")
        return deleted

    def clear(self) -> None:
        self.delete_pattern("*")


class MemoryCacheService(CacheService):
    """
    进程内缓存，每个键按自己的TTL过期。
    """

    def __init__(self, maxsize: int = 1000):
        # 值保存为 (value, ttl)
        self._cache = TLRUCache(maxsize=maxsize, ttu=lambda _key, item, now: now + item[1])
        self._lock = threading.RLock()

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            item = self._cache.get(key)
        return None if item is None else item[0]

    def set(self, key: str, value: Any, ttl: int = DEFAULT_TTL) -> bool:
        with self._lock:
            self._cache[key] = (value, ttl)
        return True

    def delete_pattern(self, pattern: str) -> int:
        with self._lock:
            matched = [k for k in list(self._cache.keys()) if fnmatch.fnmatchcase(k, pattern)]
            for key in matched:
                del self._cache[key]
        return len(matched)

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()


class NoCacheService(CacheService):
    """禁用缓存"""

    def get(self, key: str) -> Optional[Any]:
        return None

    def set(self, key: str, value: Any, ttl: int = DEFAULT_TTL) -> bool:
        return False

    def delete_pattern(self, pattern: str) -> int:
        return 0

    def clear(self) -> None:
        return None


_memory_cache: Optional[MemoryCacheService] = None


def get_cache_service() -> CacheService:
    """
    按 CACHE_SERVICE_BACKEND 选择缓存实现: redis, memory 或 none。

    redis 复用django-redis的默认连接，memory 在进程内共享同一个实例。
    """
    global _memory_cache

    backend = getattr(settings, 'CACHE_SERVICE_BACKEND', 'redis')
    if backend == 'redis':
        from django_redis import get_redis_connection

        prefix = f"{getattr(settings, 'REDIS_KEY_PREFIX', 'shopfront')}:app:"
        return RedisCacheService(get_redis_connection("default"), key_prefix=prefix)
    if backend == 'memory':
        if _memory_cache is None:
            _memory_cache = MemoryCacheService()
        return _memory_cache
    return NoCacheService()
