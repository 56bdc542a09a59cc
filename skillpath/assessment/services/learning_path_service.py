"""
Learning path service.

Reads active learning paths and tracks module completion within them.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from common.database import to_document_id, to_public_id
from common.utils.exceptions import ForbiddenException, NotFoundException
from skillpath.assessment.constants import (
    ASSESSMENTS_COLLECTION,
    LEARNING_PATHS_COLLECTION,
    PATH_STATUS_ACTIVE,
    PATH_STATUS_ARCHIVED,
    PATH_STATUS_COMPLETED,
)
from skillpath.assessment.exceptions import (
    InvalidProgressException,
    LearningPathNotFoundException,
)

logger = logging.getLogger(__name__)


def validate_learning_path_progress(
    modules: Sequence[Dict[str, Any]],
    completed_module_ids: Sequence[str]
) -> None:
    """
    Check that completed ids are unique, non-blank and belong to the path.

    Raises:
        InvalidProgressException: On the first inconsistency
    """
    if not isinstance(completed_module_ids, (list, tuple)):
        raise InvalidProgressException("completedModuleIds must be a list")

    module_ids = {module["id"] for module in modules}
    seen = set()
    for module_id in completed_module_ids:
        if not isinstance(module_id, str) or not module_id.strip():
            raise InvalidProgressException("completedModuleIds entries must be non-empty strings")
        if module_id in seen:
            raise InvalidProgressException(f"duplicate completed module id: {module_id}")
        if module_id not in module_ids:
            raise InvalidProgressException(f"module {module_id} is not part of this path")
        seen.add(module_id)


class LearningPathService:
    """
    Tracks user progress through assessment-generated learning paths.
    """

    def __init__(self, db: AsyncIOMotorDatabase):
        """
        Initialize LearningPathService.

        Args:
            db: MongoDB database connection
        """
        self._db = db
        self._paths_collection = db[LEARNING_PATHS_COLLECTION]
        self._assessments_collection = db[ASSESSMENTS_COLLECTION]

    async def get_active_learning_path(
        self,
        user_id: str,
        skill_id: str
    ) -> Optional[Dict[str, Any]]:
        """
        Get the user's current learning path for a skill.

        If concurrent writes ever left more than one path active, the most
        recently created one wins.

        Args:
            user_id: User ID
            skill_id: Skill ID

        Returns:
            Formatted learning path, or None if there is no active path
        """
        return await self._find_latest_active({
            "userId": to_document_id(user_id),
            "aiSkillId": to_document_id(skill_id),
            "status": PATH_STATUS_ACTIVE,
        })

    async def get_my_active_learning_path(self, user_id: str) -> Optional[Dict[str, Any]]:
        """
        Get the user's most recent active learning path across all skills.

        Args:
            user_id: User ID

        Returns:
            Formatted learning path, or None if there is no active path
        """
        return await self._find_latest_active({
            "userId": to_document_id(user_id),
            "status": PATH_STATUS_ACTIVE,
        })

    async def mark_module_completed(
        self,
        user_id: str,
        learning_path_id: str,
        module_id: str
    ) -> Dict[str, Any]:
        """
        Mark a module as completed (idempotent).

        Completing the last open module completes the whole path. Paths
        that are not active are returned unchanged.

        Args:
            user_id: User ID (must own the path)
            learning_path_id: Learning path ID
            module_id: Module ID within the path

        Returns:
            dict with status and completedModuleIds
        """
        path = await self._get_owned_path(user_id, learning_path_id)

        if path["status"] != PATH_STATUS_ACTIVE:
            return self._progress(path)

        self._require_module(path, module_id)

        updated = await self._paths_collection.find_one_and_update(
            {"_id": path["_id"], "status": PATH_STATUS_ACTIVE},
            {
                "$addToSet": {"completedModuleIds": module_id},
                "$set": {"updatedAt": datetime.now(timezone.utc)},
            },
            return_document=ReturnDocument.AFTER,
        )
        if updated is None:
            return await self._current_progress(path["_id"])

        completed = updated["completedModuleIds"]
        validate_learning_path_progress(updated["modules"], completed)

        module_ids = [module["id"] for module in updated["modules"]]
        status = PATH_STATUS_ACTIVE
        if all(done in completed for done in module_ids):
            result = await self._paths_collection.update_one(
                {
                    "_id": path["_id"],
                    "status": PATH_STATUS_ACTIVE,
                    "completedModuleIds": {"$all": module_ids},
                },
                {"$set": {"status": PATH_STATUS_COMPLETED, "updatedAt": datetime.now(timezone.utc)}}
            )
            if not result.modified_count:
                return await self._current_progress(path["_id"])
            status = PATH_STATUS_COMPLETED

        logger.info(f"Module {module_id} completed on path {learning_path_id} ({status})")
        return {"status": status, "completedModuleIds": completed}

    async def mark_module_incomplete(
        self,
        user_id: str,
        learning_path_id: str,
        module_id: str
    ) -> Dict[str, Any]:
        """
        Mark a module as not completed (idempotent).

        A completed path re-opens as active unless a newer path for the
        same skill is already active. Archived paths stay archived.

        Args:
            user_id: User ID (must own the path)
            learning_path_id: Learning path ID
            module_id: Module ID within the path

        Returns:
            dict with status and completedModuleIds
        """
        path = await self._get_owned_path(user_id, learning_path_id)

        if path["status"] == PATH_STATUS_ARCHIVED:
            return self._progress(path)

        if path["status"] == PATH_STATUS_COMPLETED and await self._has_other_active(path):
            return self._progress(path)

        self._require_module(path, module_id)

        try:
            updated = await self._paths_collection.find_one_and_update(
                {"_id": path["_id"], "status": {"$in": [PATH_STATUS_ACTIVE, PATH_STATUS_COMPLETED]}},
                {
                    "$pull": {"completedModuleIds": module_id},
                    "$set": {"status": PATH_STATUS_ACTIVE, "updatedAt": datetime.now(timezone.utc)},
                },
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError:
            # A newer assessment activated another path for this skill first
            logger.info(f"Path {learning_path_id} not reopened; another path is active")
            return await self._current_progress(path["_id"])

        if updated is None:
            return await self._current_progress(path["_id"])

        validate_learning_path_progress(updated["modules"], updated["completedModuleIds"])

        logger.info(f"Module {module_id} reopened on path {learning_path_id}")
        return self._progress(updated)

    async def unenroll(self, user_id: str, learning_path_id: str) -> Dict[str, Any]:
        """
        Archive a learning path on the user's request.

        Args:
            user_id: User ID (must own the path)
            learning_path_id: Learning path ID

        Returns:
            dict with the new status
        """
        path = await self._get_owned_path(user_id, learning_path_id)

        await self._paths_collection.update_one(
            {"_id": path["_id"]},
            {"$set": {"status": PATH_STATUS_ARCHIVED, "updatedAt": datetime.now(timezone.utc)}}
        )

        logger.info(f"User {user_id} unenrolled from learning path {learning_path_id}")
        return {"status": PATH_STATUS_ARCHIVED}

    async def _find_latest_active(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        cursor = self._paths_collection.find(query)
        cursor = cursor.sort("createdAt", -1)
        cursor = cursor.limit(1)

        paths = await cursor.to_list(length=1)
        if not paths:
            return None

        path = paths[0]
        assessment = None
        if path.get("assessmentId") is not None:
            assessment = await self._assessments_collection.find_one({"_id": path["assessmentId"]})

        return self._format_path(path, assessment)

    async def _get_owned_path(self, user_id: str, learning_path_id: str) -> Dict[str, Any]:
        """Load a path and check the user owns it."""
        path = await self._paths_collection.find_one({"_id": to_document_id(learning_path_id)})
        if not path:
            raise LearningPathNotFoundException(learning_path_id)

        if path["userId"] != to_document_id(user_id):
            raise ForbiddenException("Learning path belongs to another user", code="PATH_FORBIDDEN")

        return path

    async def _has_other_active(self, path: Dict[str, Any]) -> bool:
        """Check for another active path on the same user and skill."""
        other = await self._paths_collection.find_one({
            "_id": {"$ne": path["_id"]},
            "userId": path["userId"],
            "aiSkillId": path["aiSkillId"],
            "status": PATH_STATUS_ACTIVE,
        })
        return other is not None

    async def _current_progress(self, path_id: Any) -> Dict[str, Any]:
        """Re-read a path whose status changed under a concurrent write."""
        path = await self._paths_collection.find_one({"_id": path_id})
        return self._progress(path)

    def _progress(self, path: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "status": path["status"],
            "completedModuleIds": list(path.get("completedModuleIds") or []),
        }

    def _require_module(self, path: Dict[str, Any], module_id: str) -> None:
        if not any(module["id"] == module_id for module in path["modules"]):
            raise NotFoundException("Module not found in path", code="MODULE_NOT_FOUND")

    def _format_path(
        self,
        path: Dict[str, Any],
        assessment: Optional[Dict[str, Any]]
    ) -> Dict[str, Any]:
        """Format learning path record for response."""
        modules: List[Dict[str, Any]] = path.get("modules", [])
        return {
            "id": to_public_id(path["_id"]),
            "userId": to_public_id(path["userId"]),
            "skillId": to_public_id(path["aiSkillId"]),
            "assessmentId": to_public_id(path["assessmentId"]) if path.get("assessmentId") else None,
            "assessmentLevel": assessment.get("level") if assessment else None,
            "modules": modules,
            "status": path["status"],
            "completedModuleIds": path.get("completedModuleIds") or [],
            "createdAt": path.get("createdAt"),
            "updatedAt": path.get("updatedAt"),
        }
