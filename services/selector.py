"""Adaptive next-question selection.

The selector targets the candidate's weakest competency so far, nudges the
difficulty up or down based on the last overall score, and falls back to any
unasked question when nothing matches.
"""
from __future__ import annotations

import math
import random
from typing import List, Optional, Protocol, Sequence, Tuple

from config.settings import settings
from interviews.session import InterviewSession
from interviews.types import InterviewType, JobCompetency, Question
from observability import log_event

from .clock import pick

MIN_DIFFICULTY = 1
MAX_DIFFICULTY = 10
LOW_SCORE = 50.0
HIGH_SCORE = 75.0


class QuestionPool(Protocol):
    """Question pool collaborator; implementations return every matching row."""

    def find_candidates(
        self,
        *,
        competency: str,
        difficulty_range: Tuple[int, int],
        question_type: Optional[str],
        exclude_ids: Sequence[str],
    ) -> List[Question]:
        ...

    def find_any(self, *, exclude_ids: Sequence[str]) -> List[Question]:
        ...


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def clamp_difficulty(value: int) -> int:
    return max(MIN_DIFFICULTY, min(MAX_DIFFICULTY, value))


def difficulty_window(target: int) -> Tuple[int, int]:
    return clamp_difficulty(target - 1), clamp_difficulty(target + 1)


def top_competency(competencies: Sequence[JobCompetency]) -> Optional[str]:
    """Highest-weight competency name; ties go to the first listed."""

    best: Optional[JobCompetency] = None
    for item in competencies:
        if best is None or item.weight > best.weight:
            best = item
    return best.name if best else None


def weakest_competency(session: InterviewSession, competencies: Sequence[JobCompetency]) -> str:
    """Category with the lowest mean overall score, or a job-profile fallback."""

    averages = session.category_averages()
    weakest: Optional[str] = None
    lowest = math.inf
    for category, average in averages.items():
        if average < lowest:
            weakest, lowest = category, average
    if weakest is not None:
        return weakest
    return top_competency(competencies) or settings.DEFAULT_COMPETENCY


def target_difficulty(last_score: Optional[float], base_difficulty: float) -> int:
    target = round_half_up(base_difficulty)
    if last_score is not None:
        if last_score < LOW_SCORE:
            target -= 1
        elif last_score > HIGH_SCORE:
            target += 1
    return clamp_difficulty(target)


def _type_filter(interview_type: Optional[InterviewType]) -> Optional[str]:
    if interview_type is None or interview_type == "mixed":
        return None
    return interview_type


class AdaptiveQuestionSelector:
    """Choose the next question for a session from a ``QuestionPool``."""

    def __init__(self, pool: QuestionPool, rng: Optional[random.Random] = None) -> None:
        self._pool = pool
        self._rng = rng or random.Random()

    def _lookup(
        self,
        *,
        session_id: str,
        competency: str,
        difficulty: int,
        interview_type: Optional[InterviewType],
        exclude_ids: Sequence[str],
    ) -> Optional[Question]:
        candidates = self._pool.find_candidates(
            competency=competency,
            difficulty_range=difficulty_window(difficulty),
            question_type=_type_filter(interview_type),
            exclude_ids=exclude_ids,
        )
        chosen = pick(self._rng, candidates)
        source = "targeted"
        if chosen is None:
            chosen = pick(self._rng, self._pool.find_any(exclude_ids=exclude_ids))
            source = "fallback"
        if chosen is None:
            log_event(
                "question_pool_exhausted",
                session_id,
                competency=competency,
                difficulty=difficulty,
            )
            return None
        log_event(
            "question_selected",
            session_id,
            question_id=chosen.id,
            competency=chosen.category,
            difficulty=chosen.difficulty,
            source=source,
        )
        return chosen

    def select_first(
        self,
        competencies: Sequence[JobCompetency],
        base_difficulty: Optional[float],
        interview_type: Optional[InterviewType],
        *,
        session_id: str = "-",
    ) -> Optional[Question]:
        """Seed question: top-weighted competency at the profile's base difficulty."""

        base = settings.DEFAULT_DIFFICULTY if base_difficulty is None else base_difficulty
        return self._lookup(
            session_id=session_id,
            competency=top_competency(competencies) or settings.DEFAULT_COMPETENCY,
            difficulty=clamp_difficulty(round_half_up(base)),
            interview_type=interview_type,
            exclude_ids=[],
        )

    def select_next(
        self,
        session: InterviewSession,
        competencies: Sequence[JobCompetency],
        base_difficulty: Optional[float],
        interview_type: Optional[InterviewType],
    ) -> Optional[Question]:
        """Next question, or ``None`` when the session should end."""

        if session.should_end():
            return None
        base = settings.DEFAULT_DIFFICULTY if base_difficulty is None else base_difficulty
        return self._lookup(
            session_id=session.session_id,
            competency=weakest_competency(session, competencies),
            difficulty=target_difficulty(session.last_score(), base),
            interview_type=interview_type,
            exclude_ids=[question.id for question in session.questions_asked],
        )


__all__ = [
    "QuestionPool",
    "AdaptiveQuestionSelector",
    "round_half_up",
    "clamp_difficulty",
    "difficulty_window",
    "top_competency",
    "weakest_competency",
    "target_difficulty",
]
