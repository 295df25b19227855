"""Cache adapters.

``build_cache()`` picks the adapter named by ``Settings.cache_adapter``:
- MemoryCache for development and testing
- RedisCache for production
"""

from storefront.cache.memory_adapter import MemoryCache
from storefront.cache.port import Cache, CacheError
from storefront.config import Settings


def build_cache(settings: Settings) -> Cache:
    if settings.cache_adapter == "memory":
        return MemoryCache()
    if settings.cache_adapter == "redis":
        from storefront.cache.redis_adapter import RedisCache

        return RedisCache(settings.redis_url)
    raise ValueError(f"Unknown cache adapter: {settings.cache_adapter}")


__all__ = ["Cache", "CacheError", "MemoryCache", "build_cache"]
