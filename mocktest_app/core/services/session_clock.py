"""Countdown clock that attributes elapsed time to the active question."""

from __future__ import annotations

from collections.abc import Callable
import time

from mocktest_app.core.services.navigation_cursor import NavigationCursor
from mocktest_app.core.services.response_store import ResponseStore


class SessionClock:
    """Single countdown seeded with the test duration.

    Ticks may arrive late or be coalesced, so every tick measures real elapsed
    time against the moment the clock started instead of assuming one second
    per tick. Whole seconds not yet accounted for are taken off the countdown
    and credited to whichever question the cursor points at.
    """

    def __init__(
        self,
        duration_seconds: int,
        responses: ResponseStore,
        cursor: NavigationCursor,
        time_source: Callable[[], float] = time.monotonic,
    ) -> None:
        if duration_seconds <= 0:
            raise ValueError("Duration must be a positive number of seconds.")
        self._duration_seconds = duration_seconds
        self._remaining_seconds = duration_seconds
        self._responses = responses
        self._cursor = cursor
        self._time_source = time_source
        self._running: bool = False
        self._expired: bool = False
        self._anchor: float | None = None
        self._accounted_seconds: int = 0

    def start(self) -> None:
        if self._running or self._expired:
            return
        self._anchor = self._time_source()
        self._accounted_seconds = 0
        self._running = True

    def stop(self) -> None:
        self._running = False
        self._anchor = None

    def tick(self) -> int:
        """Advance the countdown. Returns the seconds attributed by this tick."""
        if not self._running or self._anchor is None:
            return 0

        whole_seconds = int(self._time_source() - self._anchor)
        delta = whole_seconds - self._accounted_seconds
        if delta <= 0:
            return 0
        self._accounted_seconds = whole_seconds

        attributed = min(delta, self._remaining_seconds)
        self._remaining_seconds -= attributed
        self._responses.add_elapsed(self._cursor.current_question_id(), attributed)

        if self._remaining_seconds <= 0:
            self._remaining_seconds = 0
            self._expired = True
            self.stop()
        return attributed

    def is_running(self) -> bool:
        return self._running

    def is_expired(self) -> bool:
        return self._expired

    def get_remaining_seconds(self) -> int:
        return self._remaining_seconds

    def get_duration_seconds(self) -> int:
        return self._duration_seconds

    def get_elapsed_seconds(self) -> int:
        return self._duration_seconds - self._remaining_seconds


def format_clock(seconds: int) -> str:
    """Format a second count as ``MM:SS`` (minutes may exceed 59)."""
    minutes, secs = divmod(max(0, seconds), 60)
    return f"{minutes:02d}:{secs:02d}"
