"""Remediation advice for low-scoring answers."""
from __future__ import annotations

from typing import Optional

from config.settings import settings
from interviews.types import AnswerScores

ADVICE = {
    "clarity": (
        "Try to structure your answer more clearly. Use proper sentences and organize "
        "your thoughts logically."
    ),
    "completeness_behavioral": (
        "Consider using the STAR format: describe the Situation, Task, Action, and Result."
    ),
    "completeness": (
        "Provide more depth in your answer. Discuss the problem, your approach, "
        "trade-offs, and feasibility."
    ),
    "relevance": (
        "Make sure your answer is relevant to the question and the job requirements. "
        "Use specific examples related to the role."
    ),
    "confidence": (
        "Provide a more detailed answer (aim for 50+ words). Avoid filler words and "
        "speak in complete thoughts."
    ),
}


def weakest_dimension(scores: AnswerScores) -> str:
    """Lowest dimension; ties go to the earliest in evaluation order."""

    name, lowest = scores.dimensions()[0]
    for candidate, value in scores.dimensions()[1:]:
        if value < lowest:
            name, lowest = candidate, value
    return name


def generate_feedback(
    scores: AnswerScores,
    question_type: Optional[str],
    *,
    threshold: Optional[float] = None,
) -> Optional[str]:
    """Return advice for the weakest dimension, or ``None`` when the answer passes."""

    limit = settings.FEEDBACK_THRESHOLD if threshold is None else threshold
    if scores.overall >= limit:
        return None

    dimension = weakest_dimension(scores)
    if dimension == "completeness" and question_type == "behavioral":
        return ADVICE["completeness_behavioral"]
    return ADVICE[dimension]


__all__ = ["ADVICE", "weakest_dimension", "generate_feedback"]
