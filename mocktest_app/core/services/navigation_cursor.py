"""Service tracking the active position inside a sectioned question tree."""

from __future__ import annotations

from dataclasses import dataclass

from mocktest_app.core.models import MockTest


@dataclass(frozen=True, slots=True)
class QuestionSlot:
    """One entry of the flattened question list with its tree backreference."""

    flat_index: int
    section_index: int
    question_index: int
    question_id: str


def flatten_questions(test: MockTest) -> list[QuestionSlot]:
    """Return the test's questions in section order as addressable slots."""
    slots: list[QuestionSlot] = []
    for section_index, section in enumerate(test.sections):
        for question_index, question in enumerate(section.questions):
            slots.append(
                QuestionSlot(
                    flat_index=len(slots),
                    section_index=section_index,
                    question_index=question_index,
                    question_id=question.id,
                )
            )
    return slots


class NavigationCursor:
    """Moves forward, backward or directly across the flattened question list.

    The cursor never leaves the bounds of the tree and never wraps around.
    Every movement returns ``True`` only when the position actually changed.
    """

    def __init__(self, slots: list[QuestionSlot]) -> None:
        if not slots:
            raise ValueError("Navigation requires at least one question.")
        self._slots = list(slots)
        self._positions = {
            (slot.section_index, slot.question_index): slot.flat_index for slot in self._slots
        }
        self._flat_index = 0

    @classmethod
    def for_test(cls, test: MockTest) -> NavigationCursor:
        return cls(flatten_questions(test))

    def next(self) -> bool:
        if self._flat_index >= len(self._slots) - 1:
            return False
        self._flat_index += 1
        return True

    def previous(self) -> bool:
        if self._flat_index <= 0:
            return False
        self._flat_index -= 1
        return True

    def jump_to(self, section_index: int, question_index: int) -> bool:
        # Stale navigator buttons may point at positions that no longer exist.
        target = self._positions.get((section_index, question_index))
        if target is None or target == self._flat_index:
            return False
        self._flat_index = target
        return True

    def get_position(self) -> tuple[int, int]:
        slot = self.current_slot()
        return slot.section_index, slot.question_index

    def current_slot(self) -> QuestionSlot:
        return self._slots[self._flat_index]

    def current_question_id(self) -> str:
        return self.current_slot().question_id

    def get_slots(self) -> list[QuestionSlot]:
        return list(self._slots)

    def is_first(self) -> bool:
        return self._flat_index == 0

    def is_last(self) -> bool:
        return self._flat_index == len(self._slots) - 1
