"""
FastAPI dependencies for the assessment system.

Provides dependency injection for assessment-related services.
"""

from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from common.cache import Cache, TTLCache
from skillpath.config import Settings, settings as default_settings
from skillpath.assessment.services.assessment_extractor import AssessmentExtractor
from skillpath.assessment.services.assessment_service import AssessmentService
from skillpath.assessment.services.learning_path_service import LearningPathService
from skillpath.assessment.services.skill_catalog import SkillCatalogService


_assessment_extractor: Optional[AssessmentExtractor] = None
_skill_catalog: Optional[SkillCatalogService] = None
_assessment_service: Optional[AssessmentService] = None
_learning_path_service: Optional[LearningPathService] = None


def init_assessment_services(
    db: AsyncIOMotorDatabase,
    cache: Optional[Cache] = None,
    app_settings: Optional[Settings] = None
) -> None:
    """
    Initialize assessment services with database connection.

    Called once at application startup.

    Args:
        db: MongoDB database connection
        cache: Skill catalog cache (TTL cache from settings when omitted)
        app_settings: Settings to use (module settings when omitted)
    """
    global _assessment_extractor, _skill_catalog, _assessment_service, _learning_path_service

    settings = app_settings or default_settings
    settings.validate_required()

    if cache is None:
        cache = TTLCache(ttl_seconds=settings.SKILL_CACHE_TTL_SECONDS)

    _assessment_extractor = AssessmentExtractor(
        min_modules=settings.ASSESSMENT_MIN_MODULES,
        max_modules=settings.ASSESSMENT_MAX_MODULES,
        max_reasoning_length=settings.ASSESSMENT_MAX_REASONING_LENGTH,
    )
    _skill_catalog = SkillCatalogService(db=db, cache=cache)
    _assessment_service = AssessmentService(
        db=db,
        skill_catalog=_skill_catalog,
        min_modules=settings.ASSESSMENT_MIN_MODULES,
        max_modules=settings.ASSESSMENT_MAX_MODULES,
        max_reasoning_length=settings.ASSESSMENT_MAX_REASONING_LENGTH,
    )
    _learning_path_service = LearningPathService(db=db)


def get_assessment_extractor() -> AssessmentExtractor:
    """Get assessment extractor instance."""
    if _assessment_extractor is None:
        raise RuntimeError("Assessment services not initialized.")
    return _assessment_extractor


def get_skill_catalog() -> SkillCatalogService:
    """Get skill catalog instance."""
    if _skill_catalog is None:
        raise RuntimeError("Assessment services not initialized.")
    return _skill_catalog


def get_assessment_service() -> AssessmentService:
    """Get assessment service instance."""
    if _assessment_service is None:
        raise RuntimeError("Assessment services not initialized.")
    return _assessment_service


def get_learning_path_service() -> LearningPathService:
    """Get learning path service instance."""
    if _learning_path_service is None:
        raise RuntimeError("Assessment services not initialized.")
    return _learning_path_service
