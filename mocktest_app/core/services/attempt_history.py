"""Service for the newest-first attempt history and progress statistics."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
import logging
from threading import Lock

from mocktest_app.core.models import MockTest, TestAttempt
from mocktest_app.core.services.exam_repository import ExamRepository
from mocktest_app.core.services.storage import StorageError

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ProgressOverview:
    """Snapshot of the device-wide statistics shown on the dashboard."""

    test_count: int
    question_count: int
    attempt_count: int
    average_score: float
    average_accuracy: float


class AttemptHistory:
    """Keeps submitted attempts in memory and mirrors them to the repository."""

    def __init__(self, repository: ExamRepository) -> None:
        self._lock = Lock()
        self._repository = repository
        self._attempts: list[TestAttempt] = repository.load_attempts()

    def get_attempts(self) -> list[TestAttempt]:
        with self._lock:
            return list(self._attempts)

    def add_attempt(self, attempt: TestAttempt) -> bool:
        """Prepend ``attempt`` and persist the history.

        Returns ``False`` when the history could not be saved. The attempt is
        kept in memory either way so the result can still be shown.
        """
        with self._lock:
            self._attempts = [attempt, *self._attempts]
            snapshot = list(self._attempts)
        try:
            self._repository.save_attempts(snapshot)
        except StorageError as exc:
            logger.warning("Attempt for %s kept in memory only: %s", attempt.test_id, exc)
            return False
        return True

    def get_attempts_for_test(self, test_id: str) -> list[TestAttempt]:
        with self._lock:
            return [attempt for attempt in self._attempts if attempt.test_id == test_id]

    def get_latest_attempt(self, test_id: str) -> TestAttempt | None:
        with self._lock:
            return next((attempt for attempt in self._attempts if attempt.test_id == test_id), None)


def attempt_accuracy(attempt: TestAttempt) -> int:
    """Percentage of all questions answered correctly, rounded."""
    return attempt.breakdown.accuracy_percent


def build_overview(tests: Sequence[MockTest], attempts: Sequence[TestAttempt]) -> ProgressOverview:
    """Aggregate catalog and history figures, averages rounded to one decimal."""
    average_score = 0.0
    average_accuracy = 0.0
    if attempts:
        average_score = round(sum(attempt.score for attempt in attempts) / len(attempts), 1)
        accuracy_total = sum(
            attempt.breakdown.correct / (attempt.breakdown.total_questions or 1) * 100
            for attempt in attempts
        )
        average_accuracy = round(accuracy_total / len(attempts), 1)
    return ProgressOverview(
        test_count=len(tests),
        question_count=sum(test.question_count for test in tests),
        attempt_count=len(attempts),
        average_score=average_score,
        average_accuracy=average_accuracy,
    )
