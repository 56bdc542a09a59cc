"""
SkillPath application settings.

Extends the base settings with assessment-specific configuration.
"""

from common.config import BaseAppSettings
from skillpath.assessment import constants


class Settings(BaseAppSettings):
    """SkillPath-specific settings."""

    # ==========================================================================
    # Assessment Validation
    # ==========================================================================
    ASSESSMENT_MIN_MODULES: int = constants.MIN_MODULES
    ASSESSMENT_MAX_MODULES: int = constants.MAX_MODULES
    ASSESSMENT_MAX_REASONING_LENGTH: int = constants.MAX_REASONING_LENGTH

    # Assessments below this confidence are flagged in the logs
    LOW_CONFIDENCE_THRESHOLD: float = constants.LOW_CONFIDENCE_THRESHOLD

    # ==========================================================================
    # Skill Catalog
    # ==========================================================================
    # Read-through cache lifetime for aiSkills lookups
    SKILL_CACHE_TTL_SECONDS: int = 300

    def validate_required(self) -> None:
        """
        Validate base settings plus assessment bounds.

        Raises:
            ValueError: If any setting is missing or inconsistent
        """
        super().validate_required()

        errors = []

        if self.ASSESSMENT_MIN_MODULES < 1:
            errors.append("ASSESSMENT_MIN_MODULES must be at least 1")

        if self.ASSESSMENT_MIN_MODULES > self.ASSESSMENT_MAX_MODULES:
            errors.append("ASSESSMENT_MIN_MODULES cannot exceed ASSESSMENT_MAX_MODULES")

        if not 0 <= self.LOW_CONFIDENCE_THRESHOLD <= 1:
            errors.append("LOW_CONFIDENCE_THRESHOLD must be between 0 and 1")

        if errors:
            raise ValueError("Configuration errors:\n- " + "\n- ".join(errors))


settings = Settings()
