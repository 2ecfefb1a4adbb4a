"""Interview session aggregate and its state machine.

A session starts ``in_progress`` with one seeded question. Each submitted answer
closes the current question and records its scores as an ``AnsweredTurn``; the next
question is then added explicitly. Completion is one-way and terminal.
"""
from __future__ import annotations

import uuid
from collections import OrderedDict
from datetime import datetime, timezone
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from .errors import InterviewValidationError, InvalidStateError
from .types import (
    DIMENSIONS,
    Answer,
    AnsweredTurn,
    AnswerScores,
    InterviewType,
    Question,
    SessionStatus,
)

DEFAULT_MAX_QUESTIONS = 10
DEFAULT_TIME_LIMIT_SECONDS = 1800


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InterviewSession(BaseModel):
    """Serializable session state persisted between requests."""

    session_id: str
    user_id: str
    job_profile_id: str
    interview_type: InterviewType = "mixed"
    created_at: datetime

    status: SessionStatus = "in_progress"
    turns: List[AnsweredTurn] = Field(default_factory=list)
    current_question: Optional[Question] = None

    completed_at: Optional[datetime] = None
    final_score: Optional[float] = None
    ended_early: bool = False
    pool_exhausted: bool = False

    max_questions: int = Field(default=DEFAULT_MAX_QUESTIONS, ge=1)
    time_limit_seconds: int = Field(default=DEFAULT_TIME_LIMIT_SECONDS, ge=0)

    @classmethod
    def create(
        cls,
        user_id: str,
        job_profile_id: str,
        interview_type: Optional[InterviewType],
        first_question: Question,
        *,
        now: Optional[datetime] = None,
        session_id: Optional[str] = None,
        max_questions: int = DEFAULT_MAX_QUESTIONS,
        time_limit_seconds: int = DEFAULT_TIME_LIMIT_SECONDS,
    ) -> "InterviewSession":
        return cls(
            session_id=session_id or str(uuid.uuid4()),
            user_id=user_id,
            job_profile_id=job_profile_id,
            interview_type=interview_type or "mixed",
            created_at=now or _utcnow(),
            current_question=first_question,
            max_questions=max_questions,
            time_limit_seconds=time_limit_seconds,
        )

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def _require_in_progress(self, operation: str) -> None:
        if self.status != "in_progress":
            raise InvalidStateError(f"Cannot {operation} session with status: {self.status}")

    def ensure_answerable(self, question_id: str) -> Question:
        """Return the current question if ``question_id`` may be answered now."""

        self._require_in_progress("submit an answer to")
        current = self.current_question
        if current is None or current.id != question_id:
            expected = current.id if current else None
            raise InvalidStateError(
                f"Question '{question_id}' is not the current question (expected {expected!r})"
            )
        return current

    def submit_answer(
        self,
        question_id: str,
        text: str,
        duration_seconds: int,
        scores: AnswerScores,
        *,
        now: Optional[datetime] = None,
    ) -> AnsweredTurn:
        """Record an answer against the current question."""

        current = self.ensure_answerable(question_id)
        if duration_seconds < 0:
            raise InterviewValidationError("duration_seconds must be >= 0")

        answer = Answer(
            question_id=question_id,
            text=text,
            duration_seconds=int(duration_seconds),
            submitted_at=now or _utcnow(),
        )
        turn = AnsweredTurn(question=current, answer=answer, scores=scores, overall=scores.overall)
        self.turns.append(turn)
        self.current_question = None
        return turn

    def add_question(self, question: Question) -> None:
        """Make ``question`` the new current question."""

        self._require_in_progress("add a question to")
        if self.current_question is not None:
            raise InvalidStateError(
                f"Question '{self.current_question.id}' has not been answered yet"
            )
        self.current_question = question

    def mark_pool_exhausted(self) -> None:
        """Record that no further question is available for this session."""

        self._require_in_progress("end")
        if self.current_question is not None:
            raise InvalidStateError(
                f"Question '{self.current_question.id}' has not been answered yet"
            )
        self.pool_exhausted = True

    def complete(
        self,
        final_score: float,
        ended_early: bool = False,
        *,
        now: Optional[datetime] = None,
    ) -> None:
        self._require_in_progress("complete")
        if not 0.0 <= final_score <= 100.0:
            raise InterviewValidationError(f"final_score must be within [0, 100], got {final_score}")
        self.status = "completed"
        self.final_score = final_score
        self.ended_early = ended_early
        self.completed_at = now or _utcnow()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def questions_asked(self) -> List[Question]:
        asked = [turn.question for turn in self.turns]
        if self.current_question is not None:
            asked.append(self.current_question)
        return asked

    @property
    def answers(self) -> List[Answer]:
        return [turn.answer for turn in self.turns]

    @property
    def overall_scores(self) -> List[float]:
        return [turn.overall for turn in self.turns]

    @property
    def answered_count(self) -> int:
        return len(self.turns)

    def belongs_to(self, user_id: str) -> bool:
        return self.user_id == user_id

    def progress(self) -> str:
        return f"{self.answered_count}/{self.max_questions}"

    def time_remaining(self) -> int:
        used = sum(turn.answer.duration_seconds for turn in self.turns)
        return max(0, self.time_limit_seconds - used)

    def should_end(self) -> bool:
        return (
            self.pool_exhausted
            or self.answered_count >= self.max_questions
            or self.time_remaining() <= 0
        )

    def last_score(self) -> Optional[float]:
        if not self.turns:
            return None
        return self.turns[-1].overall

    def dimension_averages(self) -> Dict[str, float]:
        """Mean of each rubric dimension across answered turns (0 when none)."""

        if not self.turns:
            return {name: 0.0 for name in DIMENSIONS}
        count = len(self.turns)
        return {
            name: sum(getattr(turn.scores, name) for turn in self.turns) / count
            for name in DIMENSIONS
        }

    def category_averages(self) -> "OrderedDict[str, float]":
        """Mean overall score per question category, in first-answered order."""

        totals: "OrderedDict[str, List[float]]" = OrderedDict()
        for turn in self.turns:
            totals.setdefault(turn.question.category, []).append(turn.overall)
        return OrderedDict((name, sum(values) / len(values)) for name, values in totals.items())


__all__ = ["InterviewSession", "DEFAULT_MAX_QUESTIONS", "DEFAULT_TIME_LIMIT_SECONDS"]
