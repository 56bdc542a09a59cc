"""
Document identifier helpers.

Callers treat identifiers as opaque strings. Values that look like a
MongoDB ObjectId are stored as ObjectId so they index and compare the same
way as generated `_id` values; anything else is stored verbatim.
"""

from typing import Union

from bson import ObjectId

DocumentId = Union[ObjectId, str]


def to_document_id(value: DocumentId) -> DocumentId:
    """Convert an opaque identifier string to its stored form."""
    if isinstance(value, ObjectId):
        return value
    if ObjectId.is_valid(value):
        return ObjectId(value)
    return value


def to_public_id(value: DocumentId) -> str:
    """Convert a stored identifier back to the opaque string callers see."""
    return str(value)
