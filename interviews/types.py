"""Value objects shared by the interview session, scorer and selector."""
from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import InterviewValidationError

InterviewType = Literal["behavioral", "technical", "mixed"]
SessionStatus = Literal["in_progress", "completed"]

DIMENSIONS: Tuple[str, ...] = ("clarity", "completeness", "relevance", "confidence")
DIMENSION_WEIGHTS = {
    "clarity": 0.30,
    "completeness": 0.30,
    "relevance": 0.25,
    "confidence": 0.15,
}


class Question(BaseModel):  # Pool question; ``type`` is the pool's question type when known
    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    category: str
    difficulty: int = Field(ge=1, le=10)
    type: Optional[str] = None


class Answer(BaseModel):  # Candidate answer, immutable once appended
    model_config = ConfigDict(frozen=True)

    question_id: str
    text: str
    duration_seconds: int = Field(ge=0)
    submitted_at: datetime


class AnswerScores(BaseModel):
    """Four bounded rubric dimensions with a weighted overall score."""

    model_config = ConfigDict(frozen=True)

    clarity: float = Field(ge=0.0, le=10.0, allow_inf_nan=False)
    completeness: float = Field(ge=0.0, le=10.0, allow_inf_nan=False)
    relevance: float = Field(ge=0.0, le=10.0, allow_inf_nan=False)
    confidence: float = Field(ge=0.0, le=10.0, allow_inf_nan=False)

    @classmethod
    def create(
        cls, clarity: float, completeness: float, relevance: float, confidence: float
    ) -> "AnswerScores":
        """Build scores, raising ``InterviewValidationError`` when out of range."""

        try:
            return cls(
                clarity=clarity,
                completeness=completeness,
                relevance=relevance,
                confidence=confidence,
            )
        except ValidationError as exc:
            raise InterviewValidationError(f"Invalid answer scores: {exc}") from exc

    @property
    def overall(self) -> float:
        weighted = sum(getattr(self, name) * weight for name, weight in DIMENSION_WEIGHTS.items())
        return weighted / 10 * 100

    def dimensions(self) -> List[Tuple[str, float]]:
        """Dimension values in fixed evaluation order."""

        return [(name, getattr(self, name)) for name in DIMENSIONS]


class JobCompetency(BaseModel):  # Job profile competency, read-only to the core
    name: str
    weight: float = Field(ge=0.0, le=1.0)
    depth: int = Field(ge=1, le=10)


class JobProfile(BaseModel):  # Job profile context consumed by start/submit flows
    id: str
    user_id: str
    job_title: str = ""
    competencies: List[JobCompetency] = Field(default_factory=list)
    interview_difficulty_level: Optional[float] = Field(default=None, ge=1.0, le=10.0)

    def competency_names(self) -> List[str]:
        return [item.name for item in self.competencies]


class AnsweredTurn(BaseModel):  # One answered question with its scores
    question: Question
    answer: Answer
    scores: AnswerScores
    overall: float


__all__ = [
    "InterviewType",
    "SessionStatus",
    "DIMENSIONS",
    "DIMENSION_WEIGHTS",
    "Question",
    "Answer",
    "AnswerScores",
    "JobCompetency",
    "JobProfile",
    "AnsweredTurn",
]
