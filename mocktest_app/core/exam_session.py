"""Controller running one timed attempt of a mock test.

The session owns the navigation cursor, the response store and the countdown
clock. Ticks and user actions are processed one at a time on the caller's
event loop, so no locking is involved. A session moves from ``ACTIVE`` to
``SUBMITTED`` exactly once, either through :meth:`ExamSession.submit` or when
the countdown expires; the completion callback fires a single time.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
from enum import Enum, auto
import logging
import time

from mocktest_app.core.models import MockTest, Question, QuestionResponse, Section, TestAttempt
from mocktest_app.core.scoring import calculate_score
from mocktest_app.core.services.exam_catalog import ExamCatalog
from mocktest_app.core.services.navigation_cursor import NavigationCursor, QuestionSlot
from mocktest_app.core.services.response_store import ResponseStore
from mocktest_app.core.services.session_clock import SessionClock
from mocktest_app.core.services.ticker import NullTicker, Ticker

logger = logging.getLogger(__name__)

CompletionCallback = Callable[[TestAttempt], None]


class SessionState(Enum):
    """Lifecycle of an exam session. ``SUBMITTED`` is terminal."""

    ACTIVE = auto()
    SUBMITTED = auto()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ExamSession:
    """Runs a single attempt: timing, navigation, answers and finalization."""

    def __init__(
        self,
        test: MockTest,
        ticker: Ticker | None = None,
        on_complete: CompletionCallback | None = None,
        now: Callable[[], datetime] = _utcnow,
        time_source: Callable[[], float] = time.monotonic,
    ) -> None:
        if test.question_count == 0:
            raise ValueError("Test must contain at least one question.")
        self._test = test
        self._questions: dict[str, Question] = {question.id: question for question in test.questions}
        self._ticker: Ticker = ticker or NullTicker()
        self._on_complete = on_complete
        self._now = now

        self._cursor = NavigationCursor.for_test(test)
        self._responses = ResponseStore(slot.question_id for slot in self._cursor.get_slots())
        self._clock = SessionClock(test.duration_seconds, self._responses, self._cursor, time_source)

        self._state = SessionState.ACTIVE
        self._started_at = now()
        self._attempt: TestAttempt | None = None

    # --- Lifecycle ---

    def start(self) -> None:
        """Start the countdown and the ticker driving it."""
        if self._state is not SessionState.ACTIVE or self._clock.is_running():
            return
        self._clock.start()
        self._ticker.start(self.handle_tick)
        logger.info(
            "Session started for %s (%d questions, %d s)",
            self._test.id,
            self._test.question_count,
            self._clock.get_duration_seconds(),
        )

    def close(self) -> None:
        """Tear down the ticker without submitting, e.g. when the view goes away."""
        self._ticker.stop()
        self._clock.stop()

    def __enter__(self) -> ExamSession:
        self.start()
        return self

    def __exit__(self, exc_type, exc, traceback) -> None:
        self.close()

    def handle_tick(self) -> None:
        """Ticker callback: one countdown step, auto-submitting on expiry."""
        if self._state is not SessionState.ACTIVE:
            self._ticker.stop()
            return
        self._clock.tick()
        if self._clock.is_expired():
            logger.info("Time expired for %s, submitting automatically", self._test.id)
            self.submit()

    def submit(self) -> TestAttempt:
        """Finalize the session once; later calls return the same attempt."""
        if self._attempt is not None:
            return self._attempt
        self._state = SessionState.SUBMITTED
        self.close()

        completed_at = self._now()
        attempt = calculate_score(self._test, self._responses.snapshot(), self._started_at, completed_at)
        self._attempt = attempt
        logger.info(
            "Submitted %s: score %s, %d/%d correct",
            self._test.id,
            attempt.score,
            attempt.breakdown.correct,
            attempt.breakdown.total_questions,
        )
        if self._on_complete is not None:
            self._on_complete(attempt)
        return attempt

    # --- User actions (no-ops once submitted) ---

    def select_choice(self, question_id: str, choice_id: str) -> bool:
        if not self.is_active():
            return False
        return self._responses.select_choice(question_id, choice_id)

    def select_current_choice(self, choice_id: str) -> bool:
        return self.select_choice(self._cursor.current_question_id(), choice_id)

    def toggle_review(self, question_id: str) -> bool:
        if not self.is_active() or not self._responses.has_question(question_id):
            return False
        self._responses.toggle_review(question_id)
        return True

    def toggle_current_review(self) -> bool:
        return self.toggle_review(self._cursor.current_question_id())

    def go_next(self) -> bool:
        return self.is_active() and self._cursor.next()

    def go_previous(self) -> bool:
        return self.is_active() and self._cursor.previous()

    def jump_to(self, section_index: int, question_index: int) -> bool:
        return self.is_active() and self._cursor.jump_to(section_index, question_index)

    # --- Queries ---

    def is_active(self) -> bool:
        return self._state is SessionState.ACTIVE

    def get_state(self) -> SessionState:
        return self._state

    def get_test(self) -> MockTest:
        return self._test

    def get_started_at(self) -> datetime:
        return self._started_at

    def get_attempt(self) -> TestAttempt | None:
        return self._attempt

    def get_position(self) -> tuple[int, int]:
        return self._cursor.get_position()

    def get_current_slot(self) -> QuestionSlot:
        return self._cursor.current_slot()

    def get_slots(self) -> list[QuestionSlot]:
        return self._cursor.get_slots()

    def get_current_question(self) -> Question:
        return self._questions[self._cursor.current_question_id()]

    def get_current_section(self) -> Section:
        return self._test.sections[self._cursor.current_slot().section_index]

    def is_first_question(self) -> bool:
        return self._cursor.is_first()

    def is_last_question(self) -> bool:
        return self._cursor.is_last()

    def get_response(self, question_id: str) -> QuestionResponse | None:
        return self._responses.get_response(question_id)

    def get_remaining_seconds(self) -> int:
        return self._clock.get_remaining_seconds()

    def is_expired(self) -> bool:
        return self._clock.is_expired()

    def attempted_count(self) -> int:
        return self._responses.attempted_count()

    def review_count(self) -> int:
        return self._responses.review_count()

    def progress_percent(self) -> int:
        return round(self.attempted_count() / self._test.question_count * 100)


def open_exam_session(
    catalog: ExamCatalog,
    test_id: str,
    ticker: Ticker | None = None,
    on_complete: CompletionCallback | None = None,
) -> ExamSession:
    """Resolve ``test_id`` and build a session for it.

    Raises ``MockTestNotFoundError`` before any session exists, so an unknown
    id never reaches the ``ACTIVE`` state.
    """
    test = catalog.require_test(test_id)
    return ExamSession(test, ticker=ticker, on_complete=on_complete)
