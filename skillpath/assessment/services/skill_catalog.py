"""
Skill catalog service.

Read-through access to the aiSkills collection. Lookups go through an
injected cache; writes bust the cached entry explicitly.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence, Set

from motor.motor_asyncio import AsyncIOMotorDatabase

from common.cache import Cache, NullCache
from common.database import to_document_id
from skillpath.assessment.constants import SKILLS_COLLECTION
from skillpath.assessment.exceptions import SkillNotFoundException
from skillpath.assessment.services.level_validator import validate_skill_levels

logger = logging.getLogger(__name__)


class SkillCatalogService:
    """
    Looks up skills and their level ladders.
    """

    def __init__(self, db: AsyncIOMotorDatabase, cache: Optional[Cache] = None):
        """
        Initialize SkillCatalogService.

        Args:
            db: MongoDB database connection
            cache: Cache for skill documents (no caching when omitted)
        """
        self._db = db
        self._skills_collection = db[SKILLS_COLLECTION]
        self._cache = cache if cache is not None else NullCache()

    def _cache_key(self, skill_id: str) -> str:
        return f"skill:{skill_id}"

    async def get_skill(self, skill_id: str) -> Optional[Dict[str, Any]]:
        """
        Get a skill document.

        Args:
            skill_id: Skill ID

        Returns:
            Skill document, or None if it does not exist
        """
        cache_key = self._cache_key(skill_id)
        cached = self._cache.get(cache_key)
        if cached is not None:
            return cached

        skill = await self._skills_collection.find_one({"_id": to_document_id(skill_id)})
        if skill is None:
            logger.warning(f"Skill not found: {skill_id}")
            return None

        self._cache.set(cache_key, skill)
        return skill

    async def require_skill(self, skill_id: str) -> Dict[str, Any]:
        """
        Get a skill document, raising if it does not exist.

        Raises:
            SkillNotFoundException: If the skill is missing
        """
        skill = await self.get_skill(skill_id)
        if skill is None:
            raise SkillNotFoundException(skill_id)
        return skill

    async def get_allowed_levels(self, skill_id: str) -> Set[int]:
        """
        Get the level numbers a skill declares.

        Args:
            skill_id: Skill ID

        Returns:
            Set of permitted levels

        Raises:
            SkillNotFoundException: If the skill is missing
        """
        skill = await self.require_skill(skill_id)
        return {entry["level"] for entry in skill.get("levels", [])}

    async def get_allowed_urls(
        self,
        skill_id: str,
        level: Optional[int] = None
    ) -> List[str]:
        """
        Get known-good resource links catalogued for a skill.

        Args:
            skill_id: Skill ID
            level: Restrict to one level (all levels when None)

        Returns:
            Resource URLs in catalog order, without duplicates

        Raises:
            SkillNotFoundException: If the skill is missing
        """
        skill = await self.require_skill(skill_id)

        urls: List[str] = []
        for entry in skill.get("levels", []):
            if level is not None and entry.get("level") != level:
                continue
            for resource in entry.get("resources") or []:
                url = resource.get("url") if isinstance(resource, dict) else None
                if url and url not in urls:
                    urls.append(url)

        return urls

    async def save_skill_levels(
        self,
        skill_id: str,
        levels: Sequence[Dict[str, Any]]
    ) -> List[Dict[str, Any]]:
        """
        Validate and store a skill's level ladder.

        Args:
            skill_id: Skill ID
            levels: Authored level list

        Returns:
            Stored level list

        Raises:
            InvalidLevelsException: If the level list is malformed
            SkillNotFoundException: If the skill is missing
        """
        parsed = validate_skill_levels(levels)
        stored = [level.model_dump() for level in parsed]

        result = await self._skills_collection.update_one(
            {"_id": to_document_id(skill_id)},
            {"$set": {"levels": stored, "updatedAt": datetime.now(timezone.utc)}}
        )

        self._cache.invalidate(self._cache_key(skill_id))

        if result.matched_count == 0:
            raise SkillNotFoundException(skill_id)

        logger.info(f"Saved {len(stored)} levels for skill {skill_id}")
        return stored

    def invalidate(self, skill_id: Optional[str] = None) -> None:
        """
        Bust the cached skill (or all skills when skill_id is None).
        """
        self._cache.invalidate(self._cache_key(skill_id) if skill_id else None)
