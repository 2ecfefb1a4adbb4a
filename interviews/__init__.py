"""Interview session domain: value objects, state machine and failures."""
from .errors import (
    ForbiddenError,
    InterviewError,
    InterviewValidationError,
    InvalidStateError,
    NotFoundError,
)
from .session import InterviewSession
from .types import (
    Answer,
    AnsweredTurn,
    AnswerScores,
    InterviewType,
    JobCompetency,
    JobProfile,
    Question,
)

__all__ = [
    "Answer",
    "AnsweredTurn",
    "AnswerScores",
    "ForbiddenError",
    "InterviewError",
    "InterviewSession",
    "InterviewType",
    "InterviewValidationError",
    "InvalidStateError",
    "JobCompetency",
    "JobProfile",
    "NotFoundError",
    "Question",
]
