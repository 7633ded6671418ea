from collections.abc import Callable
from datetime import datetime, timedelta, timezone

import pytest

from mocktest_app.core import models
from mocktest_app.core.services.attempt_history import AttemptHistory
from mocktest_app.core.services.exam_catalog import ExamCatalog
from mocktest_app.core.services.exam_repository import ExamRepository
from mocktest_app.core.services.storage import InMemoryStore, StorageError


class FakeClock:
    """Manually advanced monotonic time source."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeTicker:
    """Ticker whose callback only runs when the test calls ``fire``."""

    def __init__(self):
        self.callback: Callable[[], None] | None = None
        self.active = False
        self.start_calls = 0
        self.stop_calls = 0

    def start(self, callback):
        self.callback = callback
        self.active = True
        self.start_calls += 1

    def stop(self):
        self.active = False
        self.stop_calls += 1

    def is_active(self):
        return self.active

    def fire(self):
        assert self.callback is not None
        self.callback()


class FailingStore:
    """Key-value store whose writes always fail."""

    def __init__(self, initial=None):
        self._values = dict(initial or {})

    def load(self, key):
        return self._values.get(key)

    def save(self, key, value):
        raise StorageError("disk full")


class WallClock:
    """Deterministic ``now`` callable returning timezone-aware datetimes."""

    def __init__(self, start: datetime | None = None):
        self.current = start or datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += timedelta(seconds=seconds)


def make_sample_test(test_id: str = "sample", duration_minutes: int = 1) -> models.MockTest:
    q1 = models.Question(
        id="q1",
        prompt="Pick A",
        choices=(
            models.Choice(id="A", label="Alpha", is_correct=True, explanation="A is right."),
            models.Choice(id="B", label="Beta", explanation="B is a distractor."),
        ),
        marks=2,
        negative_marks=1,
    )
    q2 = models.Question(
        id="q2",
        prompt="Pick B",
        choices=(
            models.Choice(id="A", label="Alpha"),
            models.Choice(id="B", label="Beta", is_correct=True),
        ),
        marks=1,
        negative_marks=0,
    )
    return models.MockTest(
        id=test_id,
        title="Sample Test",
        description="Two questions in one section",
        duration_minutes=duration_minutes,
        total_marks=3,
        category="Practice",
        difficulty=models.TestDifficulty.BEGINNER,
        sections=(models.Section(id="s1", title="Only section", questions=(q1, q2)),),
    )


def make_two_section_test() -> models.MockTest:
    def question(question_id: str) -> models.Question:
        return models.Question(
            id=question_id,
            prompt=f"Prompt {question_id}",
            choices=(
                models.Choice(id="a", label="yes", is_correct=True),
                models.Choice(id="b", label="no"),
            ),
        )

    return models.MockTest(
        id="two-sections",
        title="Two Sections",
        description="Sectioned navigation",
        duration_minutes=2,
        total_marks=3,
        category="Logic",
        difficulty=models.TestDifficulty.ADVANCED,
        sections=(
            models.Section(id="s1", title="First", questions=(question("s1q1"), question("s1q2"))),
            models.Section(id="s2", title="Second", questions=(question("s2q1"),)),
        ),
    )


@pytest.fixture
def sample_test():
    return make_sample_test()


@pytest.fixture
def two_section_test():
    return make_two_section_test()


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def wall_clock():
    return WallClock()


@pytest.fixture
def fake_ticker():
    return FakeTicker()


@pytest.fixture
def memory_store():
    return InMemoryStore()


@pytest.fixture
def repository(memory_store):
    return ExamRepository(memory_store)


@pytest.fixture
def catalog(repository, sample_test):
    return ExamCatalog(repository, builtin_tests=[sample_test])


@pytest.fixture
def history(repository):
    return AttemptHistory(repository)
