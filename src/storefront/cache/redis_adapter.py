"""Redis cache adapter."""

import redis

from storefront.cache.port import Cache, CacheError


class RedisCache(Cache):
    def __init__(self, url: str, socket_timeout: float = 5.0) -> None:
        self.client = redis.Redis.from_url(
            url,
            decode_responses=True,
            socket_timeout=socket_timeout,
            socket_connect_timeout=socket_timeout,
        )

    def get(self, key: str) -> str | None:
        try:
            return self.client.get(key)
        except redis.RedisError as exc:
            raise CacheError(f"Redis GET {key} failed: {exc}") from exc

    def set(self, key: str, value: str, ttl: int | None = None) -> None:
        try:
            self.client.set(key, value, ex=ttl)
        except redis.RedisError as exc:
            raise CacheError(f"Redis SET {key} failed: {exc}") from exc

    def delete(self, key: str) -> None:
        try:
            self.client.delete(key)
        except redis.RedisError as exc:
            raise CacheError(f"Redis DEL {key} failed: {exc}") from exc
