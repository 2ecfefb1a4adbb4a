"""Heuristic answer scoring across the four rubric dimensions.

Every scorer is total over its input: empty or malformed text yields low scores,
never an exception. Keyword tables come from ``config.scoring_tables``.
"""
from __future__ import annotations

import re
from typing import Iterable, Optional, Sequence

from config.scoring_tables import ScoringTables, active_tables
from interviews.types import AnswerScores

MAX_DIMENSION_SCORE = 10.0

_TERMINAL_PUNCTUATION = re.compile(r"[.!?]")


def _cap(value: float) -> float:
    return max(0.0, min(MAX_DIMENSION_SCORE, value))


def word_count(text: str) -> int:
    """Whitespace-delimited word count."""

    return len((text or "").split())


def sentence_endings(text: str) -> int:
    return len(_TERMINAL_PUNCTUATION.findall(text or ""))


def _contains_any(lower_text: str, keywords: Iterable[str]) -> bool:
    return any(keyword in lower_text for keyword in keywords)


def score_clarity(answer_text: str, tables: ScoringTables) -> float:
    text = answer_text or ""
    lower = text.lower()
    score = 0.0

    endings = sentence_endings(text)
    if endings >= 3:
        score += 3
    elif endings >= 1:
        score += 1.5

    if _contains_any(lower, tables.structure_keywords):
        score += 3

    words = word_count(text)
    if 50 <= words <= 200:
        score += 2
    elif 30 <= words < 50 or 200 < words <= 300:
        score += 1

    if words:
        richness = len(set(lower.split())) / words
        if richness > 0.6:
            score += 2
        elif richness > 0.4:
            score += 1

    return _cap(score)


def _matched_groups(lower_text: str, groups: dict) -> int:
    return sum(1 for pattern in groups.values() if re.search(pattern, lower_text))


def score_completeness(answer_text: str, question_type: Optional[str], tables: ScoringTables) -> float:
    text = answer_text or ""
    lower = text.lower()

    if question_type == "behavioral":
        return _cap(2.5 * _matched_groups(lower, tables.star_groups))
    if question_type == "technical":
        return _cap(2.5 * _matched_groups(lower, tables.technical_groups))

    words = word_count(text)
    if words >= 100:
        return 10.0
    if words >= 50:
        return 5.0
    if words >= 30:
        return 2.5
    return 0.0


def score_relevance(
    answer_text: str,
    question_category: Optional[str],
    job_competencies: Sequence[str],
    tables: ScoringTables,
) -> float:
    lower = (answer_text or "").lower()
    score = 0.0

    category = (question_category or "").strip().lower()
    if category and category in lower:
        score += 2

    mentioned = [name for name in job_competencies if name and name.lower() in lower]
    if len(mentioned) >= 2:
        score += 4
    elif len(mentioned) == 1:
        score += 2

    if _contains_any(lower, tables.technical_terms):
        score += 3
    if _contains_any(lower, tables.role_keywords):
        score += 3

    return _cap(score)


def score_confidence(answer_text: str, tables: ScoringTables) -> float:
    text = answer_text or ""
    score = 2.0

    if word_count(text) >= 50:
        score += 2

    fillers = len(re.findall(tables.filler_pattern, text, flags=re.IGNORECASE))
    if fillers == 0:
        score += 3
    elif fillers <= 2:
        score += 1.5

    endings = sentence_endings(text)
    if endings >= 3:
        score += 3
    elif endings >= 1:
        score += 1.5

    return _cap(score)


def score_answer(
    answer_text: str,
    question_category: Optional[str],
    question_type: Optional[str],
    job_competencies: Sequence[str],
    *,
    tables: Optional[ScoringTables] = None,
) -> AnswerScores:
    """Score an answer on clarity, completeness, relevance and confidence."""

    tables = tables or active_tables()
    return AnswerScores.create(
        clarity=score_clarity(answer_text, tables),
        completeness=score_completeness(answer_text, question_type, tables),
        relevance=score_relevance(answer_text, question_category, job_competencies, tables),
        confidence=score_confidence(answer_text, tables),
    )


__all__ = [
    "MAX_DIMENSION_SCORE",
    "word_count",
    "sentence_endings",
    "score_clarity",
    "score_completeness",
    "score_relevance",
    "score_confidence",
    "score_answer",
]
