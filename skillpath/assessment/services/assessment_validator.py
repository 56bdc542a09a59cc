"""
Assessment result validation.

Validates a whole assessment payload: level, confidence, reasoning and the
learning module list. The same validator serves two purposes:

- shape validation during extraction, with ANY_POSITIVE_LEVEL standing in
  for the unknown skill
- skill-specific validation at persistence time, with the skill's
  declared level set

Passing the first does not imply passing the second.
"""

import math
from typing import Any, Container, List, Optional, Tuple

from skillpath.assessment.constants import (
    LOW_CONFIDENCE_THRESHOLD,
    MAX_MODULES,
    MAX_REASONING_LENGTH,
    MIN_MODULES,
)
from skillpath.assessment.exceptions import InvalidAssessmentException
from skillpath.assessment.models import AssessmentResult
from skillpath.assessment.services.module_validator import ModuleValidator


class _AnyPositiveLevel:
    """Level container that admits every integer >= 1."""

    def __contains__(self, level: object) -> bool:
        return isinstance(level, int) and not isinstance(level, bool) and level >= 1

    def __repr__(self) -> str:
        return "ANY_POSITIVE_LEVEL"


ANY_POSITIVE_LEVEL = _AnyPositiveLevel()


def _as_level(value: Any) -> Optional[int]:
    """Return value as an int level, or None if it is not integral."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


class AssessmentValidator:
    """
    Validates assessment results against count, uniqueness, level and
    confidence rules.
    """

    @classmethod
    def validate(
        cls,
        candidate: Any,
        allowed_levels: Container[int],
        min_modules: int = MIN_MODULES,
        max_modules: int = MAX_MODULES,
        max_reasoning_length: int = MAX_REASONING_LENGTH,
    ) -> Tuple[bool, Optional[str]]:
        """
        Validate an assessment payload.

        Args:
            candidate: Parsed assessment object (normally a dict)
            allowed_levels: Levels permitted for the target skill
            min_modules: Minimum number of learning modules
            max_modules: Maximum number of learning modules
            max_reasoning_length: Maximum reasoning length in characters

        Returns:
            tuple of (is_valid, error_message)
        """
        if not isinstance(candidate, dict):
            return False, "assessment must be an object"

        level = _as_level(candidate.get("level"))
        if level is None:
            return False, "level must be an integer"
        if level not in allowed_levels:
            return False, f"level {level} is not allowed for this skill"

        confidence = candidate.get("confidence")
        if isinstance(confidence, bool) or not isinstance(confidence, (int, float)):
            return False, "confidence must be a number"
        if isinstance(confidence, float) and not math.isfinite(confidence):
            return False, "confidence must be between 0 and 1"
        if not 0 <= confidence <= 1:
            return False, "confidence must be between 0 and 1"

        reasoning = candidate.get("reasoning")
        if reasoning is not None:
            if not isinstance(reasoning, str):
                return False, "reasoning must be a string"
            if len(reasoning) > max_reasoning_length:
                return False, f"reasoning cannot exceed {max_reasoning_length} characters"

        modules = candidate.get("learningModules")
        if not isinstance(modules, list):
            return False, "learningModules must be a list"
        if not min_modules <= len(modules) <= max_modules:
            return False, f"learningModules must contain {min_modules}-{max_modules} items"

        seen_ids = set()
        for index, module in enumerate(modules):
            is_valid, error = ModuleValidator.validate(module)
            if not is_valid:
                return False, f"learningModules[{index}]: {error}"

            module_id = module["id"]
            if module_id in seen_ids:
                return False, f"duplicate module id: {module_id}"
            seen_ids.add(module_id)

        return True, None

    @classmethod
    def collect_warnings(
        cls,
        result: AssessmentResult,
        low_confidence_threshold: float = LOW_CONFIDENCE_THRESHOLD,
    ) -> List[str]:
        """
        Non-fatal quality notes about an already valid result.

        Args:
            result: Validated assessment
            low_confidence_threshold: Confidence below this is flagged

        Returns:
            List of warning strings (empty when nothing to flag)
        """
        warnings = []

        if result.confidence < low_confidence_threshold:
            warnings.append("Low confidence assessment")

        return warnings


def validate_assessment(
    candidate: Any,
    allowed_levels: Container[int],
    min_modules: int = MIN_MODULES,
    max_modules: int = MAX_MODULES,
    max_reasoning_length: int = MAX_REASONING_LENGTH,
) -> None:
    """
    Validate an assessment payload, raising on failure.

    Raises:
        InvalidAssessmentException: With the failing field and rule
    """
    is_valid, error = AssessmentValidator.validate(
        candidate,
        allowed_levels,
        min_modules=min_modules,
        max_modules=max_modules,
        max_reasoning_length=max_reasoning_length,
    )
    if not is_valid:
        raise InvalidAssessmentException(error)
