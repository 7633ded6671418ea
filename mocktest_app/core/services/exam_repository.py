"""Repository persisting attempt history and user-created tests."""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, TypeVar

from mocktest_app.constants.storage_constants import ATTEMPTS_KEY, CUSTOM_TESTS_KEY
from mocktest_app.core.exam_codec import (
    ExamDataError,
    attempt_from_dict,
    attempt_to_dict,
    mock_test_from_dict,
    mock_test_to_dict,
)
from mocktest_app.core.models import MockTest, TestAttempt
from mocktest_app.core.services.storage import KeyValueStore, StorageError

logger = logging.getLogger(__name__)

_T = TypeVar("_T")


class ExamRepository:
    """Load/save capability over an opaque key-value store.

    Loading never fails: a missing, unreadable or corrupt document yields an
    empty list. Saving overwrites the previous document and raises
    ``StorageError`` when the store cannot be written.
    """

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def load_attempts(self) -> list[TestAttempt]:
        return self._load_list(ATTEMPTS_KEY, attempt_from_dict)

    def save_attempts(self, attempts: list[TestAttempt]) -> None:
        self._save_list(ATTEMPTS_KEY, [attempt_to_dict(attempt) for attempt in attempts])

    def load_custom_tests(self) -> list[MockTest]:
        return self._load_list(CUSTOM_TESTS_KEY, mock_test_from_dict)

    def save_custom_tests(self, tests: list[MockTest]) -> None:
        self._save_list(CUSTOM_TESTS_KEY, [mock_test_to_dict(test) for test in tests])

    def _load_list(self, key: str, decode: Callable[[dict[str, Any]], _T]) -> list[_T]:
        try:
            raw = self._store.load(key)
        except StorageError as exc:
            logger.warning("Storage unavailable for %s, using empty list: %s", key, exc)
            return []
        if raw is None:
            return []
        try:
            documents = json.loads(raw)
            if not isinstance(documents, list):
                raise ExamDataError(f"Expected a list under {key!r}.")
            return [decode(document) for document in documents]
        except (json.JSONDecodeError, ExamDataError) as exc:
            logger.warning("Discarding corrupt document %s: %s", key, exc)
            return []

    def _save_list(self, key: str, documents: list[dict[str, Any]]) -> None:
        self._store.save(key, json.dumps(documents, ensure_ascii=False, indent=2))
