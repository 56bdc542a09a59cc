"""
Assessment extractor service.

Finds the final assessment JSON embedded in a model's free-form reply.
"""

import json
import logging
import re
from typing import Any, List, Optional

from pydantic import ValidationError

from skillpath.assessment.constants import MAX_MODULES, MAX_REASONING_LENGTH, MIN_MODULES
from skillpath.assessment.models import AssessmentResult
from skillpath.assessment.services.assessment_validator import (
    ANY_POSITIVE_LEVEL,
    AssessmentValidator,
)

logger = logging.getLogger(__name__)

FENCED_BLOCK_PATTERN = re.compile(r"```(?:json)?\s*(.*?)\s*```", re.IGNORECASE | re.DOTALL)


def find_candidates(text: str) -> List[str]:
    """
    Collect JSON-shaped substrings in the order they should be tried.

    Every fenced block comes first, in document order. The span from the
    first "{" to the last "}" follows as a fallback for unfenced replies.
    """
    candidates: List[str] = []

    for match in FENCED_BLOCK_PATTERN.finditer(text):
        body = match.group(1)
        if body and body not in candidates:
            candidates.append(body)

    first_brace = text.find("{")
    last_brace = text.rfind("}")
    if first_brace != -1 and last_brace > first_brace:
        span = text[first_brace:last_brace + 1]
        if span not in candidates:
            candidates.append(span)

    return candidates


def _strip_comments(text: str) -> str:
    """Remove // line comments and /* */ block comments outside strings."""
    out = []
    i = 0
    length = len(text)
    in_string = False

    while i < length:
        char = text[i]

        if in_string:
            out.append(char)
            if char == "\\" and i + 1 < length:
                out.append(text[i + 1])
                i += 2
                continue
            if char == '"':
                in_string = False
            i += 1
            continue

        if char == '"':
            in_string = True
            out.append(char)
            i += 1
            continue

        if text.startswith("//", i):
            end = text.find("\n", i)
            i = length if end == -1 else end
            continue

        if text.startswith("/*", i):
            end = text.find("*/", i + 2)
            i = length if end == -1 else end + 2
            continue

        out.append(char)
        i += 1

    return "".join(out)


def _strip_trailing_commas(text: str) -> str:
    """Remove commas that directly precede a closing ] or } outside strings."""
    out = []
    i = 0
    length = len(text)
    in_string = False

    while i < length:
        char = text[i]

        if in_string:
            out.append(char)
            if char == "\\" and i + 1 < length:
                out.append(text[i + 1])
                i += 2
                continue
            if char == '"':
                in_string = False
            i += 1
            continue

        if char == '"':
            in_string = True
        elif char == ",":
            j = i + 1
            while j < length and text[j].isspace():
                j += 1
            if j < length and text[j] in "]}":
                i += 1
                continue

        out.append(char)
        i += 1

    return "".join(out)


def repair_json(text: str) -> str:
    """
    Fix the near-miss JSON syntax models commonly produce.

    Strips comments, then trailing commas. String contents (URLs with
    "//" in particular) are left untouched.
    """
    return _strip_trailing_commas(_strip_comments(text))


def parse_candidate(candidate: str) -> Optional[Any]:
    """
    Parse a candidate, retrying once after repair.

    Returns:
        Parsed JSON value, or None if the candidate is unparseable
    """
    # ValueError covers JSONDecodeError and oversized integer literals
    try:
        return json.loads(candidate)
    except (ValueError, RecursionError):
        pass

    try:
        return json.loads(repair_json(candidate))
    except (ValueError, RecursionError):
        return None


def normalize_assessment(parsed: Any) -> Any:
    """
    Map known field-name variants onto the current shape.

    Older prompts asked for "modules"; it becomes "learningModules" when
    no "learningModules" list is present.
    """
    if not isinstance(parsed, dict):
        return parsed

    has_learning_modules = isinstance(parsed.get("learningModules"), list)
    has_modules = isinstance(parsed.get("modules"), list)

    if has_modules and not has_learning_modules:
        normalized = {k: v for k, v in parsed.items() if k != "modules"}
        normalized["learningModules"] = parsed["modules"]
        return normalized

    return parsed


class AssessmentExtractor:
    """
    Extracts a shape-valid AssessmentResult from raw model text.

    Skill-specific level rules are not applied here; the level only has
    to be a positive integer.
    """

    def __init__(
        self,
        min_modules: int = MIN_MODULES,
        max_modules: int = MAX_MODULES,
        max_reasoning_length: int = MAX_REASONING_LENGTH,
    ):
        """
        Initialize AssessmentExtractor.

        Args:
            min_modules: Minimum number of learning modules
            max_modules: Maximum number of learning modules
            max_reasoning_length: Maximum reasoning length in characters
        """
        self._min_modules = min_modules
        self._max_modules = max_modules
        self._max_reasoning_length = max_reasoning_length

    def extract(self, raw_text: str) -> Optional[AssessmentResult]:
        """
        Extract the first valid assessment from a model reply.

        Args:
            raw_text: The model's reply

        Returns:
            AssessmentResult if found, None otherwise. None is the normal
            outcome while the model is still asking questions.
        """
        if not raw_text or not isinstance(raw_text, str):
            return None

        for index, candidate in enumerate(find_candidates(raw_text)):
            parsed = parse_candidate(candidate)
            if parsed is None:
                logger.debug(f"Candidate {index} is not parseable JSON")
                continue

            normalized = normalize_assessment(parsed)

            is_valid, error = AssessmentValidator.validate(
                normalized,
                ANY_POSITIVE_LEVEL,
                min_modules=self._min_modules,
                max_modules=self._max_modules,
                max_reasoning_length=self._max_reasoning_length,
            )
            if not is_valid:
                logger.debug(f"Candidate {index} rejected: {error}")
                continue

            try:
                result = AssessmentResult.model_validate(normalized)
            except ValidationError as e:
                logger.debug(f"Candidate {index} failed model construction: {e}")
                continue

            logger.info(
                f"Extracted assessment: level={result.level}, "
                f"modules={len(result.learningModules)}"
            )
            return result

        return None
