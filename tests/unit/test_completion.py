from datetime import datetime, timezone

import pytest

from interviews.errors import InvalidStateError
from interviews.session import InterviewSession
from interviews.types import AnswerScores, JobCompetency, Question
from services.completion import (
    OVERALL_KEY,
    competency_comment,
    complete_session,
    strengths,
    success_probability,
    top_gaps,
)

NOW = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)


def _session_with(answers):
    """Build a session answering one question per ``(category, scores)`` entry."""

    first_category = answers[0][0] if answers else "Problem Solving"
    session = InterviewSession.create(
        "u", "jp", "behavioral", Question(id="q0", text="t", category=first_category, difficulty=5)
    )
    for idx, (category, values) in enumerate(answers):
        if idx:
            session.add_question(Question(id=f"q{idx}", text="t", category=category, difficulty=5))
        session.submit_answer(f"q{idx}", "answer", 30, AnswerScores.create(*values))
    return session


@pytest.mark.parametrize(
    "score,expected",
    [(85, 0.85), (75, 0.72), (62, 0.55), (52, 0.40), (42, 0.25), (0, 0.25), (80, 0.85), (49.99, 0.25)],
)
def test_success_probability_buckets(score, expected):
    assert success_probability(score) == expected


def test_complete_freezes_session_and_reports_mean():
    session = _session_with([("Problem Solving", (8.5,) * 4), ("Problem Solving", (8.5,) * 4)])
    report = complete_session(session, [], ended_early=True, now=NOW, report_id="r-1")

    assert session.status == "completed"
    assert session.completed_at == NOW
    assert session.final_score == pytest.approx(85.0)
    assert session.ended_early is True

    assert report.report_id == "r-1"
    assert report.session_id == session.session_id
    assert report.final_score == pytest.approx(85.0)
    assert report.success_probability == 0.85
    assert report.created_at == NOW
    assert report.ended_early is True


def test_complete_without_answers():
    session = _session_with([])
    report = complete_session(session, now=NOW)
    assert report.final_score == 0
    assert report.success_probability == 0.25
    assert list(report.competency_breakdown) == [OVERALL_KEY]
    assert report.competency_breakdown[OVERALL_KEY].gap == 70.0
    assert report.strengths == ["Completed the interview"]
    assert [gap.priority for gap in report.top_gaps] == ["HIGH", "HIGH", "HIGH"]
    assert report.top_gaps[0].gap == "Answer clarity and structure"
    assert report.report_id


def test_complete_twice_is_invalid():
    session = _session_with([("Problem Solving", (5, 5, 5, 5))])
    complete_session(session, now=NOW)
    with pytest.raises(InvalidStateError):
        complete_session(session, now=NOW)


def test_breakdown_targets_competency_depth():
    session = _session_with(
        [
            ("Leadership", (6.5, 6.5, 6.5, 6.5)),
            ("Leadership", (6.5, 6.5, 6.5, 6.5)),
            ("Culture", (9, 9, 9, 9)),
        ]
    )
    competencies = [JobCompetency(name="leadership", weight=0.5, depth=8)]
    report = complete_session(session, competencies, now=NOW)

    leadership = report.competency_breakdown["Leadership"]
    assert leadership.score == 65.0
    assert leadership.gap == 15.0
    assert leadership.comment == "Satisfactory performance with room for growth"

    culture = report.competency_breakdown["Culture"]
    assert culture.score == 90.0
    assert culture.gap == -20.0
    assert culture.comment == "Excellent performance demonstrated"


def test_top_gaps_prioritised_and_capped():
    gaps = top_gaps({"clarity": 7.5, "completeness": 6.0, "relevance": 4.0, "confidence": 2.0})
    assert [(gap.priority, gap.gap) for gap in gaps] == [
        ("HIGH", "Communication confidence"),
        ("HIGH", "Answer relevance to role requirements"),
        ("MEDIUM", "Completeness of answers"),
    ]


def test_top_gaps_skip_strong_dimensions():
    gaps = top_gaps({"clarity": 8.0, "completeness": 9.0, "relevance": 7.2, "confidence": 10.0})
    assert len(gaps) == 1
    assert gaps[0].priority == "LOW"
    assert gaps[0].action == "Study job description and align examples with requirements"


def test_strengths_from_high_dimensions():
    found = strengths({"clarity": 9, "completeness": 8, "relevance": 7, "confidence": 8.5}, 80)
    assert found == [
        "Excellent clarity and structure in answers",
        "Comprehensive and thorough responses",
        "Confident and articulate communication",
    ]


@pytest.mark.parametrize(
    "final,expected",
    [
        (65, ["Solid overall performance", "Good effort and engagement"]),
        (55, ["Good effort and engagement"]),
        (30, ["Completed the interview"]),
    ],
)
def test_strengths_fallback_by_final_score(final, expected):
    assert strengths({"clarity": 6, "completeness": 6, "relevance": 6, "confidence": 6}, final) == expected


def test_comment_bands():
    assert competency_comment(80) == "Excellent performance demonstrated"
    assert competency_comment(70) == "Strong performance with minor areas for improvement"
    assert competency_comment(50) == "Adequate performance but needs improvement"
    assert competency_comment(49.9) == "Significant improvement needed"
