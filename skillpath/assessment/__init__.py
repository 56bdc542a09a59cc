"""
Assessment module - AI skill assessments and the learning paths they produce.

Provides:
- Extraction of assessment JSON from free-form model replies
- Module, assessment and skill level validation
- Resource link sanitization
- Assessment persistence and learning path lifecycle
"""

from skillpath.assessment.models import AssessmentResult, ModuleItem, SkillLevelDefinition
from skillpath.assessment.exceptions import (
    InvalidModuleException,
    InvalidAssessmentException,
    InvalidLevelsException,
    InvalidProgressException,
    SkillNotFoundException,
    LearningPathNotFoundException,
)

__all__ = [
    "AssessmentResult",
    "ModuleItem",
    "SkillLevelDefinition",
    "InvalidModuleException",
    "InvalidAssessmentException",
    "InvalidLevelsException",
    "InvalidProgressException",
    "SkillNotFoundException",
    "LearningPathNotFoundException",
]
