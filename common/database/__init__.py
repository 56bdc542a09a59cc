"""
Database module - Generic async MongoDB connection using Motor.

Provides reusable MongoDB connectivity for any project.

Usage:
    from common.database import MongoDB, to_document_id

    mongo = MongoDB()
    await mongo.connect(uri, database_name)
    skill = await mongo.db["aiSkills"].find_one({"_id": to_document_id(skill_id)})
"""

from common.database.mongodb import MongoDB
from common.database.ids import DocumentId, to_document_id, to_public_id

__all__ = [
    "MongoDB",
    # Identifiers
    "DocumentId",
    "to_document_id",
    "to_public_id",
]
