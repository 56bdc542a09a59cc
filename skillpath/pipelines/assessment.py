"""
Assessment pipeline functions.

Stateless orchestration logic for turning a model reply into a stored
assessment and learning path.
"""

import logging
from typing import Any, Dict, Optional

from skillpath.config import settings
from skillpath.assessment.services.assessment_extractor import AssessmentExtractor
from skillpath.assessment.services.assessment_service import AssessmentService
from skillpath.assessment.services.assessment_validator import AssessmentValidator
from skillpath.assessment.services.resource_sanitizer import sanitize_modules
from skillpath.assessment.services.skill_catalog import SkillCatalogService

logger = logging.getLogger(__name__)


async def process_model_turn_pipeline(
    extractor: AssessmentExtractor,
    skill_catalog: SkillCatalogService,
    assessment_service: AssessmentService,
    user_id: str,
    skill_id: str,
    model_text: str,
    low_confidence_threshold: Optional[float] = None,
) -> Dict[str, Any]:
    """
    Handle one model turn of an assessment conversation.

    Handles:
    - Leaving the conversation open when the reply has no final assessment
    - Stripping untrusted resource links before anything is stored
    - Committing the assessment and replacing the active learning path

    Args:
        extractor: For finding the assessment in the reply
        skill_catalog: For the skill's levels and catalogued resources
        assessment_service: For persistence
        user_id: Verified user ID
        skill_id: Skill being assessed
        model_text: The model's latest reply
        low_confidence_threshold: Confidence below this is logged as a warning
            (LOW_CONFIDENCE_THRESHOLD setting when omitted)

    Returns:
        {"found": False} while the conversation should continue, otherwise
        found, level, assessmentId and learningPathId

    Raises:
        SkillNotFoundException: If the skill does not exist
        InvalidAssessmentException: If the level is not one the skill declares
    """
    # 1. Look for a final assessment in the reply
    result = extractor.extract(model_text)
    if result is None:
        return {"found": False}

    if low_confidence_threshold is None:
        low_confidence_threshold = settings.LOW_CONFIDENCE_THRESHOLD

    for warning in AssessmentValidator.collect_warnings(result, low_confidence_threshold):
        logger.warning(f"{warning} for user {user_id}, skill {skill_id}: {result.confidence}")

    # 2. Skill context
    allowed_levels = await skill_catalog.get_allowed_levels(skill_id)
    allowed_urls = await skill_catalog.get_allowed_urls(skill_id, level=result.level)

    # 3. Drop fabricated links before the modules are persisted
    sanitized = result.model_copy(update={
        "learningModules": sanitize_modules(result.learningModules, allowed_urls),
    })

    # 4. Commit
    stored = await assessment_service.store_assessment(
        user_id=user_id,
        skill_id=skill_id,
        result=sanitized,
        allowed_levels=allowed_levels,
    )

    return {
        "found": True,
        "level": sanitized.level,
        "assessmentId": stored["assessmentId"],
        "learningPathId": stored["learningPathId"],
    }
