"""
Common library for reusable infrastructure components.

This package provides generic modules that can be used across projects:

- database: Async MongoDB connection (Motor) and identifier helpers
- cache: Injectable cache interface with TTL and no-op implementations
- utils: HTTP exceptions with error codes
- config: Base settings class
"""

from common.database import MongoDB
from common.cache import Cache, NullCache, TTLCache
from common.utils import (
    APIException,
    ForbiddenException,
    NotFoundException,
    ConflictException,
    ValidationException,
)
from common.config import BaseAppSettings

__all__ = [
    # Database
    "MongoDB",
    # Cache
    "Cache",
    "NullCache",
    "TTLCache",
    # Utils
    "APIException",
    "ForbiddenException",
    "NotFoundException",
    "ConflictException",
    "ValidationException",
    # Config
    "BaseAppSettings",
]
