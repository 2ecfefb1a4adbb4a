"""Interview orchestration: start, submit-answer and complete flows.

``InterviewService`` wires the pure pieces (scoring, feedback, selection,
completion) to the collaborators that perform I/O. Every operation checks that
the caller owns the session before touching it.
"""
from __future__ import annotations

import random
import uuid
from typing import Callable, List, Optional, Protocol

from pydantic import BaseModel

from config.scoring_tables import ScoringTables
from config.settings import settings
from interviews.errors import ForbiddenError, NotFoundError
from interviews.session import InterviewSession
from interviews.types import AnswerScores, InterviewType, JobCompetency, JobProfile, Question
from observability import log_event

from .clock import Clock, utc_now
from .completion import CompletionReport, complete_session
from .feedback import generate_feedback
from .scoring import score_answer
from .selector import AdaptiveQuestionSelector, QuestionPool


class JobProfileLookup(Protocol):
    def get_job_profile(self, job_profile_id: str) -> Optional[JobProfile]:
        ...


class SessionStore(Protocol):
    def load(self, session_id: str) -> Optional[InterviewSession]:
        ...

    def save(self, session: InterviewSession) -> None:
        ...


class StartResult(BaseModel):
    session_id: str
    first_question: Question


class SubmitResult(BaseModel):
    scores: AnswerScores
    overall_score: float
    next_question: Optional[Question] = None
    feedback: Optional[str] = None
    progress: str
    time_remaining: int
    should_end: bool


class InterviewService:
    """Application service exposing the three interview operations."""

    def __init__(
        self,
        *,
        sessions: SessionStore,
        job_profiles: JobProfileLookup,
        question_pool: QuestionPool,
        report_sink: Optional[Callable[[CompletionReport], object]] = None,
        clock: Clock = utc_now,
        rng: Optional[random.Random] = None,
        tables: Optional[ScoringTables] = None,
    ) -> None:
        self._sessions = sessions
        self._job_profiles = job_profiles
        self._selector = AdaptiveQuestionSelector(question_pool, rng=rng)
        self._report_sink = report_sink
        self._clock = clock
        self._tables = tables

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------
    def _job_profile(self, job_profile_id: str) -> JobProfile:
        profile = self._job_profiles.get_job_profile(job_profile_id)
        if profile is None:
            raise NotFoundError(f"Job profile with ID {job_profile_id} not found")
        return profile

    def get_session(self, session_id: str, user_id: str) -> InterviewSession:
        """Load a session owned by ``user_id``."""

        session = self._sessions.load(session_id)
        if session is None:
            raise NotFoundError(f"Interview session with ID {session_id} not found")
        if not session.belongs_to(user_id):
            raise ForbiddenError("You do not have permission to access this interview session")
        return session

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def start_session(
        self,
        user_id: str,
        job_profile_id: str,
        interview_type: Optional[InterviewType] = None,
    ) -> StartResult:
        profile = self._job_profile(job_profile_id)
        if profile.user_id != user_id:
            raise ForbiddenError("You do not have access to this job profile")

        kind: InterviewType = interview_type or "mixed"
        session_id = str(uuid.uuid4())
        first = self._selector.select_first(
            profile.competencies,
            profile.interview_difficulty_level,
            kind,
            session_id=session_id,
        )
        if first is None:
            raise NotFoundError("No questions available in question pool")

        session = InterviewSession.create(
            user_id,
            job_profile_id,
            kind,
            first,
            now=self._clock(),
            session_id=session_id,
            max_questions=settings.MAX_QUESTIONS,
            time_limit_seconds=settings.TIME_LIMIT_SECONDS,
        )
        self._sessions.save(session)
        log_event(
            "session_started",
            session.session_id,
            user_id=user_id,
            question_id=first.id,
            competency=first.category,
            difficulty=first.difficulty,
        )
        return StartResult(session_id=session.session_id, first_question=first)

    def submit_answer(
        self,
        session_id: str,
        question_id: str,
        answer_text: str,
        duration_seconds: int,
        user_id: str,
    ) -> SubmitResult:
        session = self.get_session(session_id, user_id)
        question = session.ensure_answerable(question_id)
        profile = self._job_profile(session.job_profile_id)

        question_type = question.type or session.interview_type
        scores = score_answer(
            answer_text,
            question.category,
            question_type,
            profile.competency_names(),
            tables=self._tables,
        )
        session.submit_answer(question_id, answer_text, duration_seconds, scores, now=self._clock())

        next_question = self._selector.select_next(
            session,
            profile.competencies,
            profile.interview_difficulty_level,
            session.interview_type,
        )
        if next_question is not None:
            session.add_question(next_question)
        elif not session.should_end():
            session.mark_pool_exhausted()

        feedback = generate_feedback(scores, question_type)
        self._sessions.save(session)

        log_event(
            "answer_scored",
            session.session_id,
            question_id=question_id,
            competency=question.category,
            overall=round(scores.overall, 1),
            progress=session.progress(),
        )
        return SubmitResult(
            scores=scores,
            overall_score=scores.overall,
            next_question=next_question,
            feedback=feedback,
            progress=session.progress(),
            time_remaining=session.time_remaining(),
            should_end=session.should_end(),
        )

    def complete_session(
        self,
        session_id: str,
        user_id: str,
        ended_early: bool = False,
    ) -> CompletionReport:
        session = self.get_session(session_id, user_id)
        profile = self._job_profiles.get_job_profile(session.job_profile_id)
        competencies: List[JobCompetency] = profile.competencies if profile else []

        report = complete_session(session, competencies, ended_early=ended_early, now=self._clock())

        # report first: a failed sink leaves the stored session in progress
        if self._report_sink is not None:
            self._report_sink(report)
            log_event("report_saved", session.session_id, report_id=report.report_id)

        self._sessions.save(session)
        log_event(
            "session_completed",
            session.session_id,
            final_score=round(report.final_score, 1),
            success_probability=report.success_probability,
            ended_early=ended_early,
        )
        return report


__all__ = [
    "JobProfileLookup",
    "SessionStore",
    "StartResult",
    "SubmitResult",
    "InterviewService",
]
