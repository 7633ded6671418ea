from dataclasses import replace

import pytest

from mocktest_app.core.exam_session import ExamSession, SessionState, open_exam_session
from mocktest_app.core.services.exam_catalog import MockTestNotFoundError


def _session(test, fake_ticker, fake_clock, wall_clock, completed=None):
    return ExamSession(
        test,
        ticker=fake_ticker,
        on_complete=completed.append if completed is not None else None,
        now=wall_clock,
        time_source=fake_clock,
    )


def test_manual_submit_scores_selected_answers(sample_test, fake_ticker, fake_clock, wall_clock):
    completed = []
    session = _session(sample_test, fake_ticker, fake_clock, wall_clock, completed)
    session.start()

    session.select_current_choice("A")
    wall_clock.advance(42)
    attempt = session.submit()

    assert attempt.score == 2
    assert attempt.breakdown.attempted == 1
    assert attempt.breakdown.unattempted == 1
    assert attempt.duration_seconds == 42
    assert completed == [attempt]
    assert session.get_state() is SessionState.SUBMITTED


def test_submit_is_idempotent(sample_test, fake_ticker, fake_clock, wall_clock):
    completed = []
    session = _session(sample_test, fake_ticker, fake_clock, wall_clock, completed)
    session.start()

    first = session.submit()
    second = session.submit()

    assert first is second
    assert len(completed) == 1


def test_expiry_auto_submits_exactly_once(sample_test, fake_ticker, fake_clock, wall_clock):
    completed = []
    session = _session(sample_test, fake_ticker, fake_clock, wall_clock, completed)
    session.start()
    session.select_choice("q1", "B")
    session.select_choice("q2", "B")

    fake_clock.advance(61)
    fake_ticker.fire()
    fake_ticker.fire()

    assert len(completed) == 1
    assert completed[0].score == 0
    assert completed[0].breakdown.correct == 1
    assert completed[0].breakdown.incorrect == 1
    assert not session.is_active()
    assert session.is_expired()
    assert not fake_ticker.is_active()


def test_tick_attributes_time_to_question_on_screen(sample_test, fake_ticker, fake_clock, wall_clock):
    session = _session(sample_test, fake_ticker, fake_clock, wall_clock)
    session.start()

    fake_clock.advance(3)
    fake_ticker.fire()
    session.go_next()
    fake_clock.advance(2)
    fake_ticker.fire()

    assert session.get_response("q1").time_spent_seconds == 3
    assert session.get_response("q2").time_spent_seconds == 2
    assert session.get_remaining_seconds() == 55


def test_actions_after_submit_are_noops(sample_test, fake_ticker, fake_clock, wall_clock):
    session = _session(sample_test, fake_ticker, fake_clock, wall_clock)
    session.start()
    session.submit()

    assert session.select_choice("q1", "A") is False
    assert session.toggle_review("q1") is False
    assert session.go_next() is False
    assert session.jump_to(0, 1) is False
    assert session.get_response("q1").choice_id is None
    assert session.get_position() == (0, 0)


def test_submitted_attempt_is_unaffected_by_later_ticks(sample_test, fake_ticker, fake_clock, wall_clock):
    session = _session(sample_test, fake_ticker, fake_clock, wall_clock)
    session.start()
    fake_clock.advance(2)
    fake_ticker.fire()
    attempt = session.submit()

    fake_clock.advance(5)
    fake_ticker.fire()

    assert session.get_remaining_seconds() == 58
    assert sum(response.time_spent_seconds for response in attempt.responses) == 2


def test_review_toggle_and_progress(sample_test, fake_ticker, fake_clock, wall_clock):
    session = _session(sample_test, fake_ticker, fake_clock, wall_clock)
    session.start()

    assert session.toggle_current_review() is True
    session.select_choice("q2", "A")

    assert session.review_count() == 1
    assert session.attempted_count() == 1
    assert session.progress_percent() == 50
    assert session.toggle_review("unknown") is False


def test_navigation_queries(two_section_test, fake_ticker, fake_clock, wall_clock):
    session = _session(two_section_test, fake_ticker, fake_clock, wall_clock)

    assert session.is_first_question()
    assert session.jump_to(1, 0) is True
    assert session.is_last_question()
    assert session.get_current_section().title == "Second"
    assert session.get_current_question().id == "s2q1"
    assert len(session.get_slots()) == 3


def test_context_manager_starts_and_closes_ticker(sample_test, fake_ticker, fake_clock, wall_clock):
    with _session(sample_test, fake_ticker, fake_clock, wall_clock) as session:
        assert fake_ticker.is_active()
        assert session.is_active()

    assert not fake_ticker.is_active()
    assert session.get_attempt() is None


def test_close_discards_without_submitting(sample_test, fake_ticker, fake_clock, wall_clock):
    completed = []
    session = _session(sample_test, fake_ticker, fake_clock, wall_clock, completed)
    session.start()
    session.close()

    assert completed == []
    assert not fake_ticker.is_active()


def test_session_without_ticker_can_still_submit(sample_test):
    session = ExamSession(sample_test)
    session.start()
    session.select_choice("q1", "A")

    assert session.submit().score == 2


def test_empty_test_is_rejected(sample_test, fake_ticker):
    empty = replace(sample_test, sections=())
    with pytest.raises(ValueError):
        ExamSession(empty, ticker=fake_ticker)


def test_open_exam_session_unknown_id_raises(catalog):
    with pytest.raises(MockTestNotFoundError):
        open_exam_session(catalog, "does-not-exist")


def test_open_exam_session_resolves_test(catalog):
    session = open_exam_session(catalog, "sample")

    assert session.get_test().id == "sample"
    assert session.is_active()


def test_one_ticker_drives_consecutive_sessions(sample_test, fake_ticker, fake_clock, wall_clock):
    first = _session(sample_test, fake_ticker, fake_clock, wall_clock)
    first.start()
    first.close()

    second = _session(sample_test, fake_ticker, fake_clock, wall_clock)
    second.start()
    fake_clock.advance(5)
    fake_ticker.fire()

    assert fake_ticker.start_calls == 2
    assert fake_ticker.active
    assert second.get_remaining_seconds() == 55
    assert first.get_remaining_seconds() == 60
    assert first.is_active()
