"""
Assessment lifecycle service.

Persists validated assessments and moves the learner's learning path for
the skill from the old assessment to the new one: every active path for
the (user, skill) pair is archived, then exactly one new active path is
created.
"""

import asyncio
import json
import logging
import weakref
from datetime import datetime, timezone
from typing import Any, Container, Dict, Optional, Tuple, Union

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import DuplicateKeyError

from common.database import to_document_id, to_public_id
from common.utils.exceptions import ConflictException
from skillpath.assessment.constants import (
    ASSESSMENTS_COLLECTION,
    LEARNING_PATHS_COLLECTION,
    MAX_MODULES,
    MAX_REASONING_LENGTH,
    MIN_MODULES,
    PATH_STATUS_ACTIVE,
    PATH_STATUS_ARCHIVED,
)
from skillpath.assessment.models import AssessmentResult
from skillpath.assessment.services.assessment_validator import validate_assessment
from skillpath.assessment.services.skill_catalog import SkillCatalogService

logger = logging.getLogger(__name__)


class AssessmentService:
    """
    Stores assessments and keeps at most one active learning path per
    user and skill.

    Calls for the same (user, skill) pair are serialized within this
    process. Across processes the partial unique index created by
    ensure_indexes() is the authoritative guarantee.
    """

    ACTIVE_PATH_INDEX = "one_active_path_per_user_skill"

    def __init__(
        self,
        db: AsyncIOMotorDatabase,
        skill_catalog: SkillCatalogService,
        min_modules: int = MIN_MODULES,
        max_modules: int = MAX_MODULES,
        max_reasoning_length: int = MAX_REASONING_LENGTH,
    ):
        """
        Initialize AssessmentService.

        Args:
            db: MongoDB database connection
            skill_catalog: For skill existence and level lookups
            min_modules: Minimum number of learning modules
            max_modules: Maximum number of learning modules
            max_reasoning_length: Maximum reasoning length in characters
        """
        self._db = db
        self._assessments_collection = db[ASSESSMENTS_COLLECTION]
        self._paths_collection = db[LEARNING_PATHS_COLLECTION]
        self._skill_catalog = skill_catalog
        self._min_modules = min_modules
        self._max_modules = max_modules
        self._max_reasoning_length = max_reasoning_length
        # Entries vanish once no caller holds the lock
        self._locks: "weakref.WeakValueDictionary[Tuple[str, str], asyncio.Lock]" = (
            weakref.WeakValueDictionary()
        )

    async def ensure_indexes(self) -> None:
        """Create lookup indexes and the single-active-path constraint."""
        await self._paths_collection.create_index(
            [("userId", ASCENDING), ("aiSkillId", ASCENDING)],
            name=self.ACTIVE_PATH_INDEX,
            unique=True,
            partialFilterExpression={"status": PATH_STATUS_ACTIVE},
        )
        await self._paths_collection.create_index(
            [("userId", ASCENDING), ("status", ASCENDING), ("createdAt", DESCENDING)]
        )
        await self._assessments_collection.create_index(
            [("userId", ASCENDING), ("aiSkillId", ASCENDING), ("createdAt", DESCENDING)]
        )
        logger.info("Assessment indexes ensured")

    async def store_assessment(
        self,
        user_id: str,
        skill_id: str,
        result: Union[AssessmentResult, Dict[str, Any]],
        allowed_levels: Optional[Container[int]] = None,
    ) -> Dict[str, str]:
        """
        Validate and persist an assessment, then replace the active path.

        Args:
            user_id: Verified user ID
            skill_id: Assessed skill ID
            result: Assessment from the extractor (model or plain dict)
            allowed_levels: Levels permitted for the skill; looked up from
                the catalog when omitted

        Returns:
            dict with assessmentId and learningPathId

        Raises:
            SkillNotFoundException: If the skill does not exist
            InvalidAssessmentException: If the result fails skill-specific validation
            ConflictException: If another writer created an active path concurrently
        """
        if allowed_levels is None:
            allowed_levels = await self._skill_catalog.get_allowed_levels(skill_id)
        else:
            await self._skill_catalog.require_skill(skill_id)

        payload = result.to_document() if isinstance(result, AssessmentResult) else result

        # Extraction only checked shape; the level set is known now.
        validate_assessment(
            payload,
            allowed_levels,
            min_modules=self._min_modules,
            max_modules=self._max_modules,
            max_reasoning_length=self._max_reasoning_length,
        )

        async with self._lock_for(str(user_id), str(skill_id)):
            return await self._commit(user_id, skill_id, payload)

    def _lock_for(self, user_id: str, skill_id: str) -> asyncio.Lock:
        """Per-(user, skill) lock shared by all callers currently holding it."""
        key = (user_id, skill_id)
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    async def _commit(
        self,
        user_id: str,
        skill_id: str,
        payload: Dict[str, Any]
    ) -> Dict[str, str]:
        """Insert the assessment, archive active paths, create the new path."""
        now = datetime.now(timezone.utc)
        user_key = to_document_id(user_id)
        skill_key = to_document_id(skill_id)

        assessment_doc = {
            "userId": user_key,
            "aiSkillId": skill_key,
            "level": int(payload["level"]),
            "confidence": float(payload["confidence"]),
            "reasoning": payload.get("reasoning"),
            "rawJson": json.dumps(payload, ensure_ascii=False),
            "createdAt": now,
        }
        assessment_insert = await self._assessments_collection.insert_one(assessment_doc)
        assessment_id = assessment_insert.inserted_id

        archived = await self._paths_collection.update_many(
            {"userId": user_key, "aiSkillId": skill_key, "status": PATH_STATUS_ACTIVE},
            {"$set": {"status": PATH_STATUS_ARCHIVED, "updatedAt": now}}
        )
        if archived.modified_count:
            logger.info(
                f"Archived {archived.modified_count} learning path(s) for user {user_id}, "
                f"skill {skill_id}"
            )

        path_doc = {
            "userId": user_key,
            "aiSkillId": skill_key,
            "assessmentId": assessment_id,
            "modules": [dict(module) for module in payload["learningModules"]],
            "status": PATH_STATUS_ACTIVE,
            "completedModuleIds": [],
            "createdAt": now,
            "updatedAt": now,
        }

        try:
            path_insert = await self._paths_collection.insert_one(path_doc)
        except DuplicateKeyError as e:
            logger.warning(
                f"Concurrent active learning path for user {user_id}, skill {skill_id}"
            )
            # No path references this assessment
            await self._assessments_collection.delete_one({"_id": assessment_id})
            raise ConflictException(
                "Another assessment for this skill was stored at the same time",
                code="ACTIVE_PATH_CONFLICT",
            ) from e

        logger.info(
            f"Stored assessment {assessment_id} (level {assessment_doc['level']}) "
            f"for user {user_id}, skill {skill_id}"
        )

        return {
            "assessmentId": to_public_id(assessment_id),
            "learningPathId": to_public_id(path_insert.inserted_id),
        }
