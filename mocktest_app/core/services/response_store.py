"""Service holding the per-question answer state of one exam session."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace

from mocktest_app.core.models import QuestionResponse


class ResponseStore:
    """Maps question ids to the user's answer, review flag and time spent."""

    def __init__(self, question_ids: Iterable[str]) -> None:
        # Insertion order follows the flattened test order.
        self._responses: dict[str, QuestionResponse] = {}
        for question_id in question_ids:
            self._responses.setdefault(question_id, QuestionResponse(question_id=question_id))

    def select_choice(self, question_id: str, choice_id: str) -> bool:
        """Record ``choice_id`` as the answer, replacing any previous selection."""
        response = self._responses.get(question_id)
        if response is None:
            return False
        response.choice_id = choice_id
        return True

    def toggle_review(self, question_id: str) -> bool:
        """Flip the review flag. Returns the new flag value."""
        response = self._responses.get(question_id)
        if response is None:
            return False
        response.marked_for_review = not response.marked_for_review
        return response.marked_for_review

    def add_elapsed(self, question_id: str, seconds: int) -> None:
        if seconds < 0:
            raise ValueError("Elapsed time must not be negative.")
        response = self._responses.get(question_id)
        if response is None:
            return
        response.time_spent_seconds += seconds

    def get_response(self, question_id: str) -> QuestionResponse | None:
        response = self._responses.get(question_id)
        return replace(response) if response is not None else None

    def has_question(self, question_id: str) -> bool:
        return question_id in self._responses

    def attempted_count(self) -> int:
        return sum(1 for response in self._responses.values() if response.is_attempted)

    def review_count(self) -> int:
        return sum(1 for response in self._responses.values() if response.marked_for_review)

    def total_time_spent(self) -> int:
        return sum(response.time_spent_seconds for response in self._responses.values())

    def snapshot(self) -> list[QuestionResponse]:
        """Return detached copies of every response in test order."""
        return [replace(response) for response in self._responses.values()]
