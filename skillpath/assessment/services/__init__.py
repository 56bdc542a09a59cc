"""
Assessment services.
"""

from skillpath.assessment.services.module_validator import (
    ModuleValidator,
    validate_module,
    is_valid_duration,
)
from skillpath.assessment.services.assessment_validator import (
    ANY_POSITIVE_LEVEL,
    AssessmentValidator,
    validate_assessment,
)
from skillpath.assessment.services.level_validator import validate_skill_levels
from skillpath.assessment.services.assessment_extractor import AssessmentExtractor
from skillpath.assessment.services.resource_sanitizer import (
    sanitize_module,
    sanitize_modules,
    is_likely_public_http_url,
)
from skillpath.assessment.services.skill_catalog import SkillCatalogService
from skillpath.assessment.services.assessment_service import AssessmentService
from skillpath.assessment.services.learning_path_service import (
    LearningPathService,
    validate_learning_path_progress,
)

__all__ = [
    "ModuleValidator",
    "validate_module",
    "is_valid_duration",
    "ANY_POSITIVE_LEVEL",
    "AssessmentValidator",
    "validate_assessment",
    "validate_skill_levels",
    "AssessmentExtractor",
    "sanitize_module",
    "sanitize_modules",
    "is_likely_public_http_url",
    "SkillCatalogService",
    "AssessmentService",
    "LearningPathService",
    "validate_learning_path_progress",
]
