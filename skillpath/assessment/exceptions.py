"""
Assessment domain errors.

Every error carries a ``reason`` naming the offending field or rule, so a
caller can tell an expected, recoverable condition (extraction keeps
waiting for a better model turn) from a fatal one (persistence fails).
"""

from common.utils.exceptions import NotFoundException, ValidationException


class InvalidModuleException(ValidationException):
    """A single learning module failed its shape rules."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(
            message=f"Invalid module: {reason}",
            code="INVALID_MODULE",
            details={"reason": reason},
        )


class InvalidAssessmentException(ValidationException):
    """An assessment failed count, uniqueness, level, confidence or reasoning rules."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(
            message=f"Invalid assessment: {reason}",
            code="INVALID_ASSESSMENT",
            details={"reason": reason},
        )


class InvalidLevelsException(ValidationException):
    """A skill's authored level list is malformed."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(
            message=f"Invalid skill levels: {reason}",
            code="INVALID_LEVELS",
            details={"reason": reason},
        )


class InvalidProgressException(ValidationException):
    """A learning path's completed-module set is inconsistent with its modules."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(
            message=f"Invalid learning path progress: {reason}",
            code="INVALID_PROGRESS",
            details={"reason": reason},
        )


class SkillNotFoundException(NotFoundException):
    """Referenced skill does not exist in the catalog."""

    def __init__(self, skill_id: str):
        self.reason = f"skill {skill_id} not found"
        super().__init__(
            message="Skill not found",
            code="SKILL_NOT_FOUND",
            details={"skillId": skill_id},
        )


class LearningPathNotFoundException(NotFoundException):
    """Referenced learning path does not exist."""

    def __init__(self, learning_path_id: str):
        self.reason = f"learning path {learning_path_id} not found"
        super().__init__(
            message="Learning path not found",
            code="LEARNING_PATH_NOT_FOUND",
            details={"learningPathId": learning_path_id},
        )
