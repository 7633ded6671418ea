"""Service combining built-in tests with user-created overlays."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
import logging
from threading import Lock

from mocktest_app.core.models import MockTest, TestDifficulty
from mocktest_app.core.services.exam_repository import ExamRepository
from mocktest_app.core.validation import collect_problems, validate_mock_test

logger = logging.getLogger(__name__)


class MockTestNotFoundError(LookupError):
    """Raised when a test id resolves to neither a built-in nor a custom test."""

    def __init__(self, test_id: str) -> None:
        self.test_id = test_id
        super().__init__(f"Test not found: {test_id}")


class ReadOnlyTestError(RuntimeError):
    """Raised when a change would overwrite or delete a built-in test."""


@dataclass(slots=True)
class CatalogFilters:
    """Search criteria for browsing the catalog."""

    search: str = ""
    difficulty: TestDifficulty | None = None
    category: str | None = None

    def matches(self, test: MockTest) -> bool:
        needle = self.search.strip().lower()
        if needle and needle not in test.title.lower() and needle not in test.description.lower():
            return False
        if self.difficulty is not None and test.difficulty != self.difficulty:
            return False
        if self.category and test.category != self.category:
            return False
        return True


class ExamCatalog:
    """Looks up, lists and edits the tests available on this device.

    Built-in tests are searched first; custom tests are overlays persisted
    through the repository. The catalog is shared with the API thread, so all
    state access happens under a lock.
    """

    def __init__(self, repository: ExamRepository, builtin_tests: Sequence[MockTest] = ()) -> None:
        self._lock = Lock()
        self._repository = repository
        self._builtin: list[MockTest] = list(builtin_tests)
        self._custom: list[MockTest] = _usable_tests(repository.load_custom_tests())
        logger.info(
            "Catalog ready with %d built-in and %d custom tests",
            len(self._builtin),
            len(self._custom),
        )

    def list_tests(self) -> list[MockTest]:
        with self._lock:
            return [*self._builtin, *self._custom]

    def get_custom_tests(self) -> list[MockTest]:
        with self._lock:
            return list(self._custom)

    def find_test(self, test_id: str) -> MockTest | None:
        with self._lock:
            return next((test for test in self._all_unlocked() if test.id == test_id), None)

    def require_test(self, test_id: str) -> MockTest:
        test = self.find_test(test_id)
        if test is None:
            raise MockTestNotFoundError(test_id)
        return test

    def is_builtin(self, test_id: str) -> bool:
        with self._lock:
            return any(test.id == test_id for test in self._builtin)

    def add_test(self, test: MockTest) -> MockTest:
        """Validate and upsert a custom test: replace by id, else prepend."""
        prepared = validate_mock_test(test)
        with self._lock:
            if any(item.id == prepared.id for item in self._builtin):
                raise ReadOnlyTestError(f"Test id {prepared.id!r} belongs to a built-in test.")
            if any(item.id == prepared.id for item in self._custom):
                updated = [prepared if item.id == prepared.id else item for item in self._custom]
            else:
                updated = [prepared, *self._custom]
            self._custom = updated
            self._repository.save_custom_tests(updated)
        logger.info("Saved custom test %s", prepared.id)
        return prepared

    def remove_test(self, test_id: str) -> None:
        with self._lock:
            if any(item.id == test_id for item in self._builtin):
                raise ReadOnlyTestError(f"Built-in test {test_id!r} cannot be removed.")
            remaining = [item for item in self._custom if item.id != test_id]
            if len(remaining) == len(self._custom):
                raise MockTestNotFoundError(test_id)
            self._custom = remaining
            self._repository.save_custom_tests(remaining)
        logger.info("Removed custom test %s", test_id)

    def filter_tests(self, filters: CatalogFilters) -> list[MockTest]:
        return [test for test in self.list_tests() if filters.matches(test)]

    def get_categories(self) -> list[str]:
        seen: dict[str, None] = {}
        for test in self.list_tests():
            seen.setdefault(test.category, None)
        return list(seen)

    def _all_unlocked(self) -> list[MockTest]:
        return [*self._builtin, *self._custom]


def _usable_tests(stored: list[MockTest]) -> list[MockTest]:
    """Drop stored tests that could not start a session."""
    usable: list[MockTest] = []
    for test in stored:
        problems = collect_problems(test)
        if problems:
            logger.warning("Skipping stored test %r: %s", test.id, "; ".join(problems))
            continue
        usable.append(test)
    return usable
