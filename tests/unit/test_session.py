from datetime import datetime, timezone

import pytest

from interviews.errors import InterviewValidationError, InvalidStateError
from interviews.session import InterviewSession
from interviews.types import AnswerScores, Question

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _q(idx: int, category: str = "Problem Solving") -> Question:
    return Question(id=f"q{idx}", text=f"Question {idx}", category=category, difficulty=5)


def _scores(value: float = 5.0) -> AnswerScores:
    return AnswerScores.create(value, value, value, value)


@pytest.fixture()
def session() -> InterviewSession:
    return InterviewSession.create("user-1", "jp-1", "behavioral", _q(0), now=NOW)


def _answer(session: InterviewSession, idx: int, *, duration: int = 60, value: float = 5.0) -> None:
    session.submit_answer(f"q{idx}", f"answer {idx}", duration, _scores(value), now=NOW)


def test_new_session_has_one_seeded_question(session):
    assert session.status == "in_progress"
    assert [q.id for q in session.questions_asked] == ["q0"]
    assert session.current_question.id == "q0"
    assert session.answers == []
    assert session.progress() == "0/10"
    assert session.time_remaining() == 1800
    assert session.last_score() is None
    assert session.should_end() is False
    assert session.created_at == NOW


def test_interview_type_defaults_to_mixed():
    created = InterviewSession.create("u", "jp", None, _q(0))
    assert created.interview_type == "mixed"
    assert created.session_id


def test_submit_records_turn_and_closes_question(session):
    turn = session.submit_answer("q0", "my answer", 90, _scores(6.0), now=NOW)
    assert turn.overall == pytest.approx(60.0)
    assert session.current_question is None
    assert session.overall_scores == [pytest.approx(60.0)]
    assert session.answers[0].submitted_at == NOW
    assert session.last_score() == pytest.approx(60.0)
    assert session.progress() == "1/10"
    assert session.time_remaining() == 1710


def test_history_invariant_holds_across_turns(session):
    for idx in range(3):
        _answer(session, idx)
        session.add_question(_q(idx + 1))
        assert session.answered_count == len(session.overall_scores) == len(session.answers)
        assert len(session.questions_asked) == session.answered_count + 1
        assert session.questions_asked[-1].id == session.current_question.id


def test_submit_with_stale_question_id_fails(session):
    with pytest.raises(InvalidStateError):
        session.submit_answer("other", "text", 10, _scores())
    _answer(session, 0)
    with pytest.raises(InvalidStateError):
        session.submit_answer("q0", "again", 10, _scores())


def test_submit_after_complete_fails(session):
    session.complete(40.0, now=NOW)
    with pytest.raises(InvalidStateError):
        session.submit_answer("q0", "late", 10, _scores())


def test_add_question_requires_answered_current(session):
    with pytest.raises(InvalidStateError):
        session.add_question(_q(1))


def test_add_question_after_complete_fails(session):
    _answer(session, 0)
    session.complete(50.0, now=NOW)
    with pytest.raises(InvalidStateError):
        session.add_question(_q(1))


def test_complete_is_terminal(session):
    session.complete(72.5, ended_early=True, now=NOW)
    assert session.status == "completed"
    assert session.final_score == 72.5
    assert session.ended_early is True
    assert session.completed_at == NOW
    with pytest.raises(InvalidStateError):
        session.complete(10.0)


def test_complete_rejects_out_of_range_score(session):
    with pytest.raises(InterviewValidationError):
        session.complete(101.0)
    assert session.status == "in_progress"


def test_negative_duration_rejected(session):
    with pytest.raises(InterviewValidationError):
        session.submit_answer("q0", "text", -1, _scores())
    assert session.answered_count == 0


def test_should_end_after_ten_answers(session):
    for idx in range(10):
        assert session.should_end() is False
        _answer(session, idx, duration=10)
        if idx < 9:
            session.add_question(_q(idx + 1))
    assert session.should_end() is True
    assert session.progress() == "10/10"


def test_should_end_when_time_budget_spent(session):
    _answer(session, 0, duration=1799)
    assert session.should_end() is False
    session.add_question(_q(1))
    _answer(session, 1, duration=5)
    assert session.time_remaining() == 0
    assert session.should_end() is True


def test_queries_are_idempotent(session):
    _answer(session, 0, duration=120, value=7.0)
    first = (session.progress(), session.time_remaining(), session.last_score())
    second = (session.progress(), session.time_remaining(), session.last_score())
    assert first == second


def test_category_and_dimension_averages(session):
    session.submit_answer("q0", "a", 10, AnswerScores.create(2, 4, 6, 8), now=NOW)
    session.add_question(_q(1, category="Communication"))
    session.submit_answer("q1", "b", 10, AnswerScores.create(4, 6, 8, 10), now=NOW)
    session.add_question(_q(2))
    session.submit_answer("q2", "c", 10, AnswerScores.create(0, 0, 0, 0), now=NOW)

    averages = session.dimension_averages()
    assert averages["clarity"] == pytest.approx(2.0)
    assert averages["confidence"] == pytest.approx(6.0)

    categories = session.category_averages()
    assert list(categories) == ["Problem Solving", "Communication"]
    assert categories["Problem Solving"] == pytest.approx(AnswerScores.create(2, 4, 6, 8).overall / 2)


def test_round_trips_through_json(session):
    _answer(session, 0)
    session.add_question(_q(1))
    restored = InterviewSession.model_validate_json(session.model_dump_json())
    assert restored == session
    assert restored.current_question.id == "q1"


def test_pool_exhausted_ends_session(session):
    _answer(session, 0)
    assert session.should_end() is False

    session.mark_pool_exhausted()

    assert session.should_end() is True
    assert session.current_question is None
    restored = InterviewSession.model_validate_json(session.model_dump_json())
    assert restored.should_end() is True


def test_pool_exhausted_requires_answered_current(session):
    with pytest.raises(InvalidStateError):
        session.mark_pool_exhausted()
    _answer(session, 0)
    session.complete(50.0, now=NOW)
    with pytest.raises(InvalidStateError):
        session.mark_pool_exhausted()
