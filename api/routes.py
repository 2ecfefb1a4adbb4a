"""FastAPI routes for interview session control."""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException

from api.schemas import (
    AnswerReq,
    AnswerResp,
    CompleteReq,
    CompleteResp,
    QuestionPayload,
    ScoringPayload,
    SessionView,
    StartReq,
    StartResp,
    TurnView,
)
from interviews.errors import (
    ForbiddenError,
    InterviewError,
    InterviewValidationError,
    InvalidStateError,
    NotFoundError,
)
from interviews.session import InterviewSession
from interviews.types import AnswerScores, Question
from services.interviews import InterviewService
from storage.job_profiles import SqliteJobProfiles
from storage.questions import SqliteQuestionPool
from storage.reports import insert_report, load_report
from storage.sessions import SqliteSessionRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/interviews")

_STATUS_BY_ERROR = (
    (NotFoundError, 404),
    (ForbiddenError, 403),
    (InvalidStateError, 409),
    (InterviewValidationError, 422),
)


def get_service() -> InterviewService:
    return InterviewService(
        sessions=SqliteSessionRepository(),
        job_profiles=SqliteJobProfiles(),
        question_pool=SqliteQuestionPool(),
        report_sink=insert_report,
    )


def _http_error(exc: InterviewError) -> HTTPException:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail=str(exc))
    logger.warning("Unmapped interview error: %s", exc)
    return HTTPException(status_code=400, detail=str(exc))


def _question(question: Optional[Question]) -> Optional[QuestionPayload]:
    if question is None:
        return None
    return QuestionPayload(
        id=question.id,
        text=question.text,
        category=question.category,
        difficulty=question.difficulty,
    )


def _scoring(scores: AnswerScores) -> ScoringPayload:
    return ScoringPayload(**scores.model_dump())


def _session_view(session: InterviewSession) -> SessionView:
    return SessionView(
        session_id=session.session_id,
        job_profile_id=session.job_profile_id,
        interview_type=session.interview_type,
        status=session.status,
        session_progress=session.progress(),
        time_remaining=session.time_remaining(),
        should_end=session.should_end(),
        current_question=_question(session.current_question),
        turns=[
            TurnView(
                question=_question(turn.question),
                answer_text=turn.answer.text,
                duration_seconds=turn.answer.duration_seconds,
                scoring=_scoring(turn.scores),
                overall_score=turn.overall,
            )
            for turn in session.turns
        ],
        final_score=session.final_score,
        ended_early=session.ended_early,
        created_at=session.created_at,
        completed_at=session.completed_at,
    )


@router.post("/start", response_model=StartResp)
def start(
    req: StartReq,
    user_id: str = Header(..., alias="X-User-Id"),
    service: InterviewService = Depends(get_service),
) -> StartResp:
    try:
        result = service.start_session(user_id, req.job_profile_id, req.interview_type)
    except InterviewError as exc:
        raise _http_error(exc) from exc
    return StartResp(session_id=result.session_id, first_question=_question(result.first_question))


@router.post("/{session_id}/answer", response_model=AnswerResp)
def answer(
    session_id: str,
    req: AnswerReq,
    user_id: str = Header(..., alias="X-User-Id"),
    service: InterviewService = Depends(get_service),
) -> AnswerResp:
    try:
        result = service.submit_answer(
            session_id,
            req.question_id,
            req.answer_text,
            req.duration_seconds,
            user_id,
        )
    except InterviewError as exc:
        raise _http_error(exc) from exc
    return AnswerResp(
        scoring=_scoring(result.scores),
        overall_score=result.overall_score,
        question=_question(result.next_question),
        feedback=result.feedback,
        session_progress=result.progress,
        time_remaining=result.time_remaining,
        should_end=result.should_end,
    )


@router.post("/{session_id}/complete", response_model=CompleteResp)
def complete(
    session_id: str,
    req: Optional[CompleteReq] = None,
    user_id: str = Header(..., alias="X-User-Id"),
    service: InterviewService = Depends(get_service),
) -> CompleteResp:
    ended_early = req.ended_early if req else False
    try:
        report = service.complete_session(session_id, user_id, ended_early=ended_early)
    except InterviewError as exc:
        raise _http_error(exc) from exc
    return CompleteResp.from_report(report)


@router.get("/{session_id}", response_model=SessionView)
def get_session(
    session_id: str,
    user_id: str = Header(..., alias="X-User-Id"),
    service: InterviewService = Depends(get_service),
) -> SessionView:
    try:
        session = service.get_session(session_id, user_id)
    except InterviewError as exc:
        raise _http_error(exc) from exc
    return _session_view(session)


@router.get("/{session_id}/report", response_model=CompleteResp)
def get_report(
    session_id: str,
    user_id: str = Header(..., alias="X-User-Id"),
    service: InterviewService = Depends(get_service),
) -> CompleteResp:
    try:
        service.get_session(session_id, user_id)
    except InterviewError as exc:
        raise _http_error(exc) from exc
    report = load_report(session_id)
    if report is None:
        raise HTTPException(status_code=404, detail="Interview report not found")
    return CompleteResp.from_report(report)
