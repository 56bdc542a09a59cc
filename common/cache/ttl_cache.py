"""
In-memory cache with a fixed time-to-live.

Entries expire a fixed number of seconds after they were written. There is
no invalidation on write beyond explicit invalidate() calls.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from common.cache.base import Cache

logger = logging.getLogger(__name__)


@dataclass
class CachedEntry:
    """Cached value with the time it was stored."""
    value: Any
    cached_at: float


class TTLCache(Cache):
    """
    Read-through friendly TTL cache.

    Not shared across processes; each worker holds its own copy.
    """

    def __init__(
        self,
        ttl_seconds: int = 300,
        clock: Callable[[], float] = time.time
    ):
        """
        Initialize TTLCache.

        Args:
            ttl_seconds: Cache time-to-live in seconds (default 5 minutes)
            clock: Time source, injectable for tests
        """
        self._entries: Dict[str, CachedEntry] = {}
        self._ttl = ttl_seconds
        self._clock = clock

    def _is_valid(self, entry: CachedEntry) -> bool:
        """Check if a cached entry is still fresh."""
        return (self._clock() - entry.cached_at) < self._ttl

    def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None

        if not self._is_valid(entry):
            self._entries.pop(key, None)
            logger.debug(f"Cache entry expired: {key}")
            return None

        return entry.value

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = CachedEntry(value=value, cached_at=self._clock())

    def invalidate(self, key: Optional[str] = None) -> None:
        if key is None:
            self._entries.clear()
            logger.debug("Cache cleared")
            return
        self._entries.pop(key, None)
        logger.debug(f"Cache entry invalidated: {key}")

    def __len__(self) -> int:
        return len(self._entries)
