"""
Abstract cache interface.

Services receive a cache instead of keeping module-level dictionaries, so
tests can swap in a no-op or deterministic implementation.

Example:
    from common.cache import TTLCache, NullCache

    catalog = SkillCatalogService(db, cache=TTLCache(ttl_seconds=300))
    uncached = SkillCatalogService(db, cache=NullCache())
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class Cache(ABC):
    """
    Minimal key/value cache contract.

    Implementations decide expiry; callers only get, set and bust keys.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """
        Return the cached value for key, or None if absent or expired.

        Args:
            key: Cache key
        """
        pass

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """
        Store value under key.

        Args:
            key: Cache key
            value: Value to store
        """
        pass

    @abstractmethod
    def invalidate(self, key: Optional[str] = None) -> None:
        """
        Drop one key, or every key when key is None.

        Args:
            key: Cache key to drop (None clears the cache)
        """
        pass


class NullCache(Cache):
    """Cache that never stores anything."""

    def get(self, key: str) -> Optional[Any]:
        return None

    def set(self, key: str, value: Any) -> None:
        return None

    def invalidate(self, key: Optional[str] = None) -> None:
        return None
