"""Pydantic schemas for the interview session API."""
from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from interviews.types import InterviewType, SessionStatus
from services.completion import CompetencyBreakdownItem, CompletionReport, TopGap


class StartReq(BaseModel):
    job_profile_id: str = Field(min_length=1)
    interview_type: Optional[InterviewType] = None


class AnswerReq(BaseModel):
    question_id: str = Field(min_length=1)
    answer_text: str = ""
    duration_seconds: int = Field(default=0, ge=0)


class CompleteReq(BaseModel):
    ended_early: bool = False


class QuestionPayload(BaseModel):
    id: str
    text: str
    category: str
    difficulty: int


class ScoringPayload(BaseModel):
    clarity: float
    completeness: float
    relevance: float
    confidence: float


class StartResp(BaseModel):
    session_id: str
    first_question: QuestionPayload


class AnswerResp(BaseModel):
    scoring: ScoringPayload
    overall_score: float
    question: Optional[QuestionPayload] = None
    feedback: Optional[str] = None
    session_progress: str
    time_remaining: int
    should_end: bool


class ReportRef(BaseModel):
    id: str
    created_at: datetime


class CompleteResp(BaseModel):
    session_id: str
    final_score: float
    success_probability: float
    competency_breakdown: Dict[str, CompetencyBreakdownItem] = Field(default_factory=dict)
    top_gaps: List[TopGap] = Field(default_factory=list)
    strengths: List[str] = Field(default_factory=list)
    feedback_summary: str = ""
    ended_early: bool = False
    report: ReportRef

    @classmethod
    def from_report(cls, report: CompletionReport) -> "CompleteResp":
        return cls(
            session_id=report.session_id,
            final_score=report.final_score,
            success_probability=report.success_probability,
            competency_breakdown=report.competency_breakdown,
            top_gaps=report.top_gaps,
            strengths=report.strengths,
            feedback_summary=report.feedback_summary,
            ended_early=report.ended_early,
            report=ReportRef(id=report.report_id, created_at=report.created_at),
        )


class TurnView(BaseModel):
    question: QuestionPayload
    answer_text: str
    duration_seconds: int
    scoring: ScoringPayload
    overall_score: float


class SessionView(BaseModel):
    session_id: str
    job_profile_id: str
    interview_type: InterviewType
    status: SessionStatus
    session_progress: str
    time_remaining: int
    should_end: bool
    current_question: Optional[QuestionPayload] = None
    turns: List[TurnView] = Field(default_factory=list)
    final_score: Optional[float] = None
    ended_early: bool = False
    created_at: datetime
    completed_at: Optional[datetime] = None
