"""Tests for the cache adapters."""

import pytest
import redis
from storefront.cache import CacheError, MemoryCache, build_cache
from storefront.cache.redis_adapter import RedisCache
from storefront.config import Settings


class TestMemoryCache:
    def test_get_missing(self):
        assert MemoryCache().get("missing") is None

    def test_set_get_delete(self):
        cache = MemoryCache()
        cache.set("k", "v")
        assert cache.get("k") == "v"
        cache.delete("k")
        assert cache.get("k") is None

    def test_delete_missing_is_noop(self):
        MemoryCache().delete("missing")

    def test_ttl(self):
        now = [100.0]
        cache = MemoryCache(clock=lambda: now[0])
        cache.set("k", "v", ttl=10)
        now[0] = 109.0
        assert cache.get("k") == "v"
        now[0] = 110.0
        assert cache.get("k") is None

    def test_clear(self):
        cache = MemoryCache()
        cache.set("a", "1")
        cache.clear()
        assert cache.get("a") is None


class UnreachableRedis:
    def get(self, key):
        raise redis.ConnectionError("connection refused")

    def set(self, key, value, ex=None):
        raise redis.ConnectionError("connection refused")

    def delete(self, key):
        raise redis.TimeoutError("timed out")


class RecordingRedis:
    def __init__(self):
        self.calls = []

    def set(self, key, value, ex=None):
        self.calls.append((key, value, ex))


class TestRedisCache:
    def test_errors_become_cache_errors(self):
        cache = RedisCache("redis://localhost:6379/0")
        cache.client = UnreachableRedis()

        with pytest.raises(CacheError):
            cache.get("k")
        with pytest.raises(CacheError):
            cache.set("k", "v")
        with pytest.raises(CacheError):
            cache.delete("k")

    def test_ttl_passed_as_expiry(self):
        cache = RedisCache("redis://localhost:6379/0")
        cache.client = RecordingRedis()
        cache.set("refresh_token:u1", "token", ttl=60)
        assert cache.client.calls == [("refresh_token:u1", "token", 60)]


class TestBuildCache:
    def test_memory(self):
        assert isinstance(build_cache(Settings(cache_adapter="memory")), MemoryCache)

    def test_redis(self):
        assert isinstance(build_cache(Settings(cache_adapter="redis")), RedisCache)

    def test_unknown(self):
        with pytest.raises(ValueError):
            build_cache(Settings(cache_adapter="memcached"))
