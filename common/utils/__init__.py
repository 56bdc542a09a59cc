"""
Utilities module - Common helpers for API exceptions.
"""

from common.utils.exceptions import (
    APIException,
    ForbiddenException,
    NotFoundException,
    ConflictException,
    ValidationException,
)

__all__ = [
    "APIException",
    "ForbiddenException",
    "NotFoundException",
    "ConflictException",
    "ValidationException",
]
