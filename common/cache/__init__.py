"""
Cache module - Injectable cache collaborators.
"""

from common.cache.base import Cache, NullCache
from common.cache.ttl_cache import TTLCache, CachedEntry

__all__ = ["Cache", "NullCache", "TTLCache", "CachedEntry"]
