"""Refresh-token session store.

Exactly one refresh token is trusted per user. Storing a new one replaces
the previous value, which is how a fresh login or a refresh rotation cuts
off every earlier refresh token for that user.
"""

from storefront.cache import Cache
from storefront.identity.tokens import REFRESH_TOKEN_TTL

SESSION_TTL_SECONDS = int(REFRESH_TOKEN_TTL.total_seconds())


class SessionStore:
    def __init__(self, cache: Cache) -> None:
        self.cache = cache

    @staticmethod
    def key(user_id: str) -> str:
        return f"refresh_token:{user_id}"

    def put(self, user_id: str, refresh_token: str, ttl: int = SESSION_TTL_SECONDS) -> None:
        self.cache.set(self.key(user_id), refresh_token, ttl=ttl)

    def get(self, user_id: str) -> str | None:
        return self.cache.get(self.key(user_id))

    def delete(self, user_id: str) -> None:
        self.cache.delete(self.key(user_id))

    def matches(self, user_id: str, refresh_token: str) -> bool:
        stored = self.get(user_id)
        return stored is not None and stored == refresh_token
