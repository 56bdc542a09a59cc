"""
Learning module validation.

Validates a single module record produced by the model against the
module shape rules.
"""

from typing import Any, Optional, Tuple

from skillpath.assessment.constants import (
    ALLOWED_DIFFICULTIES,
    ALLOWED_MODULE_TYPES,
    DURATION_PATTERN,
    MAX_DESCRIPTION_LENGTH,
    MAX_DURATION_LABEL_LENGTH,
    MAX_RESOURCE_URL_LENGTH,
    MAX_SEARCH_KEYWORDS,
)
from skillpath.assessment.exceptions import InvalidModuleException


def _is_non_blank(value: Any) -> bool:
    return isinstance(value, str) and len(value.strip()) > 0


def _is_integer(value: Any) -> bool:
    """True for ints and integral floats, never for bools."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and value.is_integer()


def is_valid_duration(label: Any) -> bool:
    """
    Check a human-readable duration label.

    Labels matching the canonical "<count> <unit>" pattern are accepted
    outright. Anything else is accepted only if it contains a digit and
    is at most 32 characters once trimmed.
    """
    if not isinstance(label, str):
        return False

    value = label.strip()
    if not value:
        return False

    if DURATION_PATTERN.fullmatch(value):
        return True

    has_digit = any(char in "0123456789" for char in value)
    return has_digit and len(value) <= MAX_DURATION_LABEL_LENGTH


class ModuleValidator:
    """
    Validates learning module records.
    """

    @classmethod
    def validate(cls, candidate: Any) -> Tuple[bool, Optional[str]]:
        """
        Validate one module record.

        Args:
            candidate: Parsed module object (normally a dict)

        Returns:
            tuple of (is_valid, error_message)

        Rules, checked in order:
            - id is a non-empty trimmed string
            - title is a non-empty trimmed string
            - type is one of article, video, quiz, project
            - duration passes is_valid_duration
            - optional rich fields are well-formed when present
        """
        if not isinstance(candidate, dict):
            return False, "module must be an object"

        if not _is_non_blank(candidate.get("id")):
            return False, "id must be a non-empty string"

        if not _is_non_blank(candidate.get("title")):
            return False, "title must be a non-empty string"

        if candidate.get("type") not in ALLOWED_MODULE_TYPES:
            return False, f"type must be one of: {', '.join(ALLOWED_MODULE_TYPES)}"

        if not is_valid_duration(candidate.get("duration")):
            return False, "duration must be a label containing a number"

        return cls._validate_optional_fields(candidate)

    @classmethod
    def _validate_optional_fields(cls, candidate: dict) -> Tuple[bool, Optional[str]]:
        """Validate rich fields that are only checked when present."""
        description = candidate.get("description")
        if description is not None:
            if not _is_non_blank(description):
                return False, "description must be a non-empty string"
            if len(description) > MAX_DESCRIPTION_LENGTH:
                return False, f"description cannot exceed {MAX_DESCRIPTION_LENGTH} characters"

        for field in ("objectives", "outline"):
            entries = candidate.get(field)
            if entries is None:
                continue
            if not isinstance(entries, list) or not entries:
                return False, f"{field} must be a non-empty list when provided"
            if not all(_is_non_blank(entry) for entry in entries):
                return False, f"{field} entries must be non-empty strings"

        keywords = candidate.get("searchKeywords")
        if keywords is not None:
            if not isinstance(keywords, list) or not keywords:
                return False, "searchKeywords must be a non-empty list when provided"
            if len(keywords) > MAX_SEARCH_KEYWORDS:
                return False, f"searchKeywords cannot exceed {MAX_SEARCH_KEYWORDS} entries"
            if not all(_is_non_blank(keyword) for keyword in keywords):
                return False, "searchKeywords entries must be non-empty strings"

        url = candidate.get("resourceUrl")
        if url is not None:
            if not _is_non_blank(url):
                return False, "resourceUrl must be a non-empty string"
            if not url.strip().lower().startswith(("http://", "https://")):
                return False, "resourceUrl must be http(s)"
            if len(url) > MAX_RESOURCE_URL_LENGTH:
                return False, f"resourceUrl cannot exceed {MAX_RESOURCE_URL_LENGTH} characters"

        resource_title = candidate.get("resourceTitle")
        if resource_title is not None and not _is_non_blank(resource_title):
            return False, "resourceTitle must be a non-empty string"

        level_ref = candidate.get("levelRef")
        if level_ref is not None and not _is_integer(level_ref):
            return False, "levelRef must be an integer"

        difficulty = candidate.get("difficulty")
        if difficulty is not None and difficulty not in ALLOWED_DIFFICULTIES:
            return False, f"difficulty must be one of: {', '.join(ALLOWED_DIFFICULTIES)}"

        return True, None


def validate_module(candidate: Any) -> None:
    """
    Validate one module record, raising on failure.

    Raises:
        InvalidModuleException: With the failing field and rule
    """
    is_valid, error = ModuleValidator.validate(candidate)
    if not is_valid:
        raise InvalidModuleException(error)
