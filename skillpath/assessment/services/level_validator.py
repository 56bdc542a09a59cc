"""
Skill level list validation.

Checks a skill's authored difficulty ladder when a skill is created or
updated. Never runs at assessment time.
"""

from typing import Any, List, Sequence

from pydantic import ValidationError

from skillpath.assessment.exceptions import InvalidLevelsException
from skillpath.assessment.models import SkillLevelDefinition

LOCALIZED_FIELDS = ("nameEn", "nameAr", "descriptionEn", "descriptionAr")


def validate_skill_levels(levels: Sequence[Any]) -> List[SkillLevelDefinition]:
    """
    Validate an authored level list.

    Levels supplied out of order are rejected, not re-sorted, so authoring
    mistakes surface instead of being silently fixed.

    Args:
        levels: Level dicts as authored

    Returns:
        Parsed level definitions in declaration order

    Raises:
        InvalidLevelsException: On the first rule violation
    """
    if not isinstance(levels, (list, tuple)) or not levels:
        raise InvalidLevelsException("levels must be a non-empty list")

    seen = set()
    previous = 0
    for entry in levels:
        if not isinstance(entry, dict):
            raise InvalidLevelsException("each level must be an object")

        level = entry.get("level")
        if isinstance(level, bool) or not isinstance(level, int) or level < 1:
            raise InvalidLevelsException("level numbers must be integers >= 1")
        if level in seen:
            raise InvalidLevelsException(f"duplicate level value: {level}")
        if level <= previous:
            raise InvalidLevelsException("levels must be strictly increasing")

        for field in LOCALIZED_FIELDS:
            value = entry.get(field)
            if not isinstance(value, str) or not value.strip():
                raise InvalidLevelsException(f"level {level}: {field} must be non-empty")

        seen.add(level)
        previous = level

    try:
        return [SkillLevelDefinition.model_validate(entry) for entry in levels]
    except ValidationError as e:
        raise InvalidLevelsException(str(e)) from e
