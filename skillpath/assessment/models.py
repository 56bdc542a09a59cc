"""
Pydantic models for assessment results and skill definitions.

Models are built only after the explicit validators in
skillpath.assessment.services have accepted the raw payload, so a
parsing failure and a schema failure stay distinguishable.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


ModuleType = Literal["article", "video", "quiz", "project"]
Difficulty = Literal["beginner", "intermediate", "advanced"]


class ModuleItem(BaseModel):
    """One unit of learning content proposed by the model."""
    model_config = ConfigDict(extra="allow", frozen=True)

    id: str
    title: str
    type: ModuleType
    duration: str  # Human-readable label, e.g. "15 min"
    description: Optional[str] = None
    objectives: Optional[List[str]] = None
    outline: Optional[List[str]] = None
    resourceUrl: Optional[str] = None
    resourceTitle: Optional[str] = None
    searchKeywords: Optional[List[str]] = None
    levelRef: Optional[int] = None
    difficulty: Optional[Difficulty] = None

    def to_document(self) -> Dict[str, Any]:
        """Snapshot for storage, omitting unset optional fields."""
        return self.model_dump(exclude_none=True)


class AssessmentResult(BaseModel):
    """Validated output of one assessment session."""
    model_config = ConfigDict(extra="allow", frozen=True)

    level: int
    confidence: float = Field(..., ge=0.0, le=1.0)
    reasoning: Optional[str] = None
    learningModules: List[ModuleItem]

    def to_document(self) -> Dict[str, Any]:
        """Plain dict form, as it would appear in model output."""
        return self.model_dump(exclude_none=True)


class LevelResource(BaseModel):
    """Known-good learning resource catalogued for a skill level."""
    url: str
    title: Optional[str] = None


class SkillLevelDefinition(BaseModel):
    """One rung of a skill's difficulty ladder."""
    level: int = Field(..., ge=1)
    nameEn: str
    nameAr: str
    descriptionEn: str
    descriptionAr: str
    resources: List[LevelResource] = Field(default_factory=list)
