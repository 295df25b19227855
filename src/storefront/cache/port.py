"""Cache port (abstract interface).

Key/value store with optional per-key expiry. Backs the refresh-token
session store and the featured-products memo.
"""

from abc import ABC, abstractmethod


class CacheError(Exception):
    """The cache backend could not be reached or rejected the operation."""


class Cache(ABC):
    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored value, or None when absent or expired."""
        ...

    @abstractmethod
    def set(self, key: str, value: str, ttl: int | None = None) -> None:
        """Store ``value`` under ``key``, expiring after ``ttl`` seconds if given."""
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        ...
