"""Session completion: final score, success bucket and the closing report."""
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Dict, List, Literal, Optional, Sequence, Tuple

from pydantic import BaseModel, Field

from config.settings import settings
from interviews.errors import InvalidStateError
from interviews.session import InterviewSession
from interviews.types import DIMENSIONS, JobCompetency

Priority = Literal["HIGH", "MEDIUM", "LOW"]

# (minimum final score, probability), checked top-down
SUCCESS_BUCKETS: Tuple[Tuple[float, float], ...] = (
    (80.0, 0.85),
    (70.0, 0.72),
    (60.0, 0.55),
    (50.0, 0.40),
)
SUCCESS_FLOOR = 0.25

COMMENT_BANDS: Tuple[Tuple[float, str], ...] = (
    (80.0, "Excellent performance demonstrated"),
    (70.0, "Strong performance with minor areas for improvement"),
    (60.0, "Satisfactory performance with room for growth"),
    (50.0, "Adequate performance but needs improvement"),
)
COMMENT_FLOOR = "Significant improvement needed"

GAP_COPY: Dict[str, Tuple[str, str]] = {
    "clarity": ("Answer clarity and structure", "Practice STAR method and structured responses"),
    "completeness": ("Completeness of answers", "Ensure all parts of the question are addressed"),
    "relevance": (
        "Answer relevance to role requirements",
        "Study job description and align examples with requirements",
    ),
    "confidence": ("Communication confidence", "Practice speaking aloud and reduce filler words"),
}

STRENGTH_COPY: Dict[str, str] = {
    "clarity": "Excellent clarity and structure in answers",
    "completeness": "Comprehensive and thorough responses",
    "relevance": "Strong alignment with role requirements",
    "confidence": "Confident and articulate communication",
}

# Upper bounds (exclusive) on a dimension mean for each gap priority
PRIORITY_BANDS: Tuple[Tuple[float, Priority], ...] = ((5.0, "HIGH"), (7.0, "MEDIUM"), (8.0, "LOW"))
PRIORITY_RANK = {"HIGH": 0, "MEDIUM": 1, "LOW": 2}
STRENGTH_THRESHOLD = 8.0
MAX_TOP_GAPS = 3
OVERALL_KEY = "Overall Performance"


class CompetencyBreakdownItem(BaseModel):
    score: float
    gap: float
    comment: str


class TopGap(BaseModel):
    gap: str
    action: str
    priority: Priority


class CompletionReport(BaseModel):
    """Closing report for a completed session."""

    report_id: str
    session_id: str
    final_score: float = Field(ge=0.0, le=100.0)
    success_probability: float = Field(ge=0.0, le=1.0)
    competency_breakdown: Dict[str, CompetencyBreakdownItem] = Field(default_factory=dict)
    top_gaps: List[TopGap] = Field(default_factory=list)
    strengths: List[str] = Field(default_factory=list)
    feedback_summary: str = ""
    ended_early: bool = False
    created_at: datetime


def _round1(value: float) -> float:
    """Round a float to one decimal place with stable formatting."""
    return float(f"{value:.1f}")


def mean_overall(session: InterviewSession) -> float:
    scores = session.overall_scores
    if not scores:
        return 0.0
    return sum(scores) / len(scores)


def success_probability(final_score: float) -> float:
    for minimum, probability in SUCCESS_BUCKETS:
        if final_score >= minimum:
            return probability
    return SUCCESS_FLOOR


def competency_comment(score: float) -> str:
    for minimum, comment in COMMENT_BANDS:
        if score >= minimum:
            return comment
    return COMMENT_FLOOR


def _target_for(category: str, competencies: Sequence[JobCompetency]) -> float:
    for item in competencies:
        if item.name.lower() == category.lower():
            return float(item.depth * 10)
    return settings.COMPETENCY_TARGET_SCORE


def competency_breakdown(
    session: InterviewSession, competencies: Sequence[JobCompetency]
) -> Dict[str, CompetencyBreakdownItem]:
    """Per-category score, gap to target and comment.

    A category matching a job competency targets ``depth * 10``; others target
    ``settings.COMPETENCY_TARGET_SCORE``.
    """

    averages = session.category_averages()
    if not averages:
        return {
            OVERALL_KEY: CompetencyBreakdownItem(
                score=0.0,
                gap=_round1(settings.COMPETENCY_TARGET_SCORE),
                comment=competency_comment(0.0),
            )
        }
    return {
        category: CompetencyBreakdownItem(
            score=_round1(score),
            gap=_round1(_target_for(category, competencies) - score),
            comment=competency_comment(score),
        )
        for category, score in averages.items()
    }


def _priority(average: float) -> Optional[Priority]:
    for bound, priority in PRIORITY_BANDS:
        if average < bound:
            return priority
    return None


def top_gaps(dimension_averages: Dict[str, float]) -> List[TopGap]:
    ranked: List[Tuple[int, float, TopGap]] = []
    for name in DIMENSIONS:
        average = dimension_averages.get(name, 0.0)
        priority = _priority(average)
        if priority is None:
            continue
        gap, action = GAP_COPY[name]
        ranked.append((PRIORITY_RANK[priority], average, TopGap(gap=gap, action=action, priority=priority)))
    ranked.sort(key=lambda entry: (entry[0], entry[1]))
    return [entry[2] for entry in ranked[:MAX_TOP_GAPS]]


def strengths(dimension_averages: Dict[str, float], final_score: float) -> List[str]:
    found = [
        STRENGTH_COPY[name]
        for name in DIMENSIONS
        if dimension_averages.get(name, 0.0) >= STRENGTH_THRESHOLD
    ]
    if not found:
        if final_score >= 60:
            found.append("Solid overall performance")
        if final_score >= 50:
            found.append("Good effort and engagement")
    return found or ["Completed the interview"]


def complete_session(
    session: InterviewSession,
    competencies: Sequence[JobCompetency] = (),
    *,
    ended_early: bool = False,
    now: datetime,
    report_id: Optional[str] = None,
) -> CompletionReport:
    """Freeze ``session`` and build its closing report."""

    if session.status != "in_progress":
        raise InvalidStateError(f"Cannot complete interview session with status: {session.status}")

    final = min(100.0, max(0.0, mean_overall(session)))
    session.complete(final, ended_early, now=now)

    averages = session.dimension_averages()
    return CompletionReport(
        report_id=report_id or str(uuid.uuid4()),
        session_id=session.session_id,
        final_score=final,
        success_probability=success_probability(final),
        competency_breakdown=competency_breakdown(session, competencies),
        top_gaps=top_gaps(averages),
        strengths=strengths(averages, final),
        feedback_summary=competency_comment(final),
        ended_early=ended_early,
        created_at=now,
    )


__all__ = [
    "SUCCESS_BUCKETS",
    "SUCCESS_FLOOR",
    "CompetencyBreakdownItem",
    "TopGap",
    "CompletionReport",
    "mean_overall",
    "success_probability",
    "competency_comment",
    "competency_breakdown",
    "top_gaps",
    "strengths",
    "complete_session",
]
