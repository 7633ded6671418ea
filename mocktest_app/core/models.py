"""Domain models for mock tests and their attempts."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class QuestionDifficulty(str, Enum):
    """Difficulty tag attached to a single question."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class TestDifficulty(str, Enum):
    """Difficulty tier of a whole mock test."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


@dataclass(frozen=True, slots=True)
class Choice:
    """One selectable answer of a question."""

    id: str
    label: str
    is_correct: bool = False
    explanation: str | None = None


@dataclass(frozen=True, slots=True)
class Question:
    """Multiple-choice question owned by exactly one section."""

    id: str
    prompt: str
    choices: tuple[Choice, ...]
    difficulty: QuestionDifficulty = QuestionDifficulty.EASY
    marks: float = 1
    negative_marks: float | None = None
    tags: tuple[str, ...] | None = None

    def find_choice(self, choice_id: str | None) -> Choice | None:
        if choice_id is None:
            return None
        return next((choice for choice in self.choices if choice.id == choice_id), None)

    def correct_choices(self) -> list[Choice]:
        return [choice for choice in self.choices if choice.is_correct]

    @property
    def penalty(self) -> float:
        """Marks deducted for an incorrect selection."""
        return self.negative_marks or 0


@dataclass(frozen=True, slots=True)
class Section:
    """Ordered group of questions inside a mock test."""

    id: str
    title: str
    questions: tuple[Question, ...]
    description: str | None = None


@dataclass(frozen=True, slots=True)
class MockTest:
    """Complete, immutable test definition."""

    id: str
    title: str
    description: str
    duration_minutes: int
    total_marks: float
    category: str
    difficulty: TestDifficulty
    sections: tuple[Section, ...]
    recommended_prep: tuple[str, ...] | None = None

    @property
    def questions(self) -> list[Question]:
        """Questions of every section concatenated in section order."""
        return [question for section in self.sections for question in section.questions]

    @property
    def question_count(self) -> int:
        return sum(len(section.questions) for section in self.sections)

    @property
    def duration_seconds(self) -> int:
        return self.duration_minutes * 60


@dataclass(slots=True)
class QuestionResponse:
    """The user's current answer state for one question."""

    question_id: str
    choice_id: str | None = None
    marked_for_review: bool = False
    time_spent_seconds: int = 0

    @property
    def is_attempted(self) -> bool:
        return self.choice_id is not None


@dataclass(frozen=True, slots=True)
class AttemptBreakdown:
    """Categorical tally of a submitted attempt."""

    total_questions: int
    attempted: int
    correct: int
    incorrect: int
    unattempted: int

    @property
    def accuracy_percent(self) -> int:
        if self.total_questions <= 0:
            return 0
        return round(self.correct / self.total_questions * 100)


@dataclass(frozen=True, slots=True)
class TestAttempt:
    """Scored, immutable result of one run of a test."""

    test_id: str
    started_at: datetime
    completed_at: datetime | None
    duration_seconds: int
    responses: tuple[QuestionResponse, ...]
    score: float
    breakdown: AttemptBreakdown = field(
        default_factory=lambda: AttemptBreakdown(0, 0, 0, 0, 0)
    )
