import pytest

from mocktest_app.core.services.navigation_cursor import NavigationCursor
from mocktest_app.core.services.response_store import ResponseStore
from mocktest_app.core.services.session_clock import SessionClock, format_clock


def _clock(test, fake_clock, duration=None):
    cursor = NavigationCursor.for_test(test)
    store = ResponseStore(slot.question_id for slot in cursor.get_slots())
    clock = SessionClock(duration or test.duration_seconds, store, cursor, time_source=fake_clock)
    return clock, store, cursor


def test_tick_before_start_does_nothing(sample_test, fake_clock):
    clock, store, _ = _clock(sample_test, fake_clock)
    fake_clock.advance(5)

    assert clock.tick() == 0
    assert clock.get_remaining_seconds() == 60


def test_each_second_is_charged_to_current_question(sample_test, fake_clock):
    clock, store, cursor = _clock(sample_test, fake_clock)
    clock.start()

    fake_clock.advance(1)
    assert clock.tick() == 1
    fake_clock.advance(1)
    clock.tick()
    cursor.next()
    fake_clock.advance(1)
    clock.tick()

    assert clock.get_remaining_seconds() == 57
    assert store.get_response("q1").time_spent_seconds == 2
    assert store.get_response("q2").time_spent_seconds == 1


def test_delayed_tick_attributes_all_missed_seconds(sample_test, fake_clock):
    clock, store, _ = _clock(sample_test, fake_clock)
    clock.start()

    fake_clock.advance(4.7)
    assert clock.tick() == 4
    fake_clock.advance(0.4)
    assert clock.tick() == 1

    assert store.get_response("q1").time_spent_seconds == 5
    assert clock.get_elapsed_seconds() == 5


def test_sub_second_ticks_do_not_drift(sample_test, fake_clock):
    clock, store, _ = _clock(sample_test, fake_clock)
    clock.start()

    for _ in range(8):
        fake_clock.advance(0.25)
        clock.tick()

    assert clock.get_remaining_seconds() == 58
    assert store.total_time_spent() == 2


def test_expiry_is_sticky_and_caps_attribution(sample_test, fake_clock):
    clock, store, _ = _clock(sample_test, fake_clock, duration=3)
    clock.start()

    fake_clock.advance(10)
    assert clock.tick() == 3
    assert clock.is_expired()
    assert not clock.is_running()
    assert clock.get_remaining_seconds() == 0
    assert store.total_time_spent() == 3

    clock.start()
    fake_clock.advance(5)
    assert clock.tick() == 0
    assert clock.is_expired()


def test_stop_halts_countdown(sample_test, fake_clock):
    clock, _, _ = _clock(sample_test, fake_clock)
    clock.start()
    clock.stop()
    fake_clock.advance(10)

    assert clock.tick() == 0
    assert clock.get_remaining_seconds() == 60


def test_duration_must_be_positive(sample_test, fake_clock):
    with pytest.raises(ValueError):
        _clock(sample_test, fake_clock, duration=-5)


@pytest.mark.parametrize(
    ("seconds", "expected"),
    [(0, "00:00"), (59, "00:59"), (61, "01:01"), (3600, "60:00"), (-4, "00:00")],
)
def test_format_clock(seconds, expected):
    assert format_clock(seconds) == expected
