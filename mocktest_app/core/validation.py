"""Authoring-time validation and normalization of mock test definitions.

The exam engine itself accepts whatever it is given; these rules run when a
test is created, imported or upserted so malformed definitions never reach a
session.
"""

from __future__ import annotations

from dataclasses import replace
import re
from uuid import uuid4

from mocktest_app.core.models import Choice, MockTest, Question, Section

_WHITESPACE = re.compile(r"\s+")


class MockTestValidationError(ValueError):
    """Raised when a test definition breaks one or more authoring rules."""

    def __init__(self, problems: list[str]) -> None:
        self.problems = list(problems)
        super().__init__("; ".join(self.problems))


def slugify_title(title: str) -> str:
    """Build a test id from its title, falling back to a random id."""
    slug = _WHITESPACE.sub("-", title.strip().lower())
    return slug or uuid4().hex[:9]


def compute_total_marks(sections: tuple[Section, ...]) -> float:
    return sum(question.marks for section in sections for question in section.questions)


def collect_problems(test: MockTest) -> list[str]:
    """Return every authoring problem found in ``test`` (empty when valid)."""
    problems: list[str] = []
    if not test.id.strip():
        problems.append("Test id must not be empty.")
    if not test.title.strip():
        problems.append("Test title must not be empty.")
    if test.duration_minutes <= 0:
        problems.append("Duration must be a positive number of minutes.")
    if not test.sections:
        problems.append("A test needs at least one section.")

    seen_question_ids: set[str] = set()
    for section_number, section in enumerate(test.sections, start=1):
        if not section.title.strip():
            problems.append(f"Section {section_number} needs a title.")
        if not section.questions:
            problems.append(f"Section {section_number} needs at least one question.")
        for question_number, question in enumerate(section.questions, start=1):
            where = f"Section {section_number}, question {question_number}"
            if question.id in seen_question_ids:
                problems.append(f"{where}: duplicate question id {question.id!r}.")
            seen_question_ids.add(question.id)
            problems.extend(f"{where}: {problem}" for problem in _question_problems(question))
    return problems


def _question_problems(question: Question) -> list[str]:
    problems: list[str] = []
    if not question.prompt.strip():
        problems.append("prompt must not be empty.")
    if len(question.choices) < 2:
        problems.append("at least two choices are required.")
    if any(not choice.label.strip() for choice in question.choices):
        problems.append("choice labels must not be empty.")
    if len({choice.id for choice in question.choices}) != len(question.choices):
        problems.append("choice ids must be unique.")
    correct_count = len(question.correct_choices())
    if correct_count != 1:
        problems.append(f"exactly one correct choice is required (found {correct_count}).")
    if question.marks < 1:
        problems.append("marks must be at least 1.")
    if question.negative_marks is not None and question.negative_marks < 0:
        problems.append("negative marks must not be below 0.")
    return problems


def validate_mock_test(test: MockTest) -> MockTest:
    """Normalize ``test`` and raise ``MockTestValidationError`` if it is invalid.

    Normalization trims text fields, derives a missing id from the title and
    recomputes the declared total marks from the questions.
    """
    normalized = normalize_mock_test(test)
    problems = collect_problems(normalized)
    if problems:
        raise MockTestValidationError(problems)
    return normalized


def normalize_mock_test(test: MockTest) -> MockTest:
    sections = tuple(_normalize_section(section) for section in test.sections)
    title = test.title.strip()
    return replace(
        test,
        id=test.id.strip() or slugify_title(title),
        title=title,
        description=test.description.strip(),
        category=test.category.strip(),
        sections=sections,
        total_marks=compute_total_marks(sections),
    )


def _normalize_section(section: Section) -> Section:
    description = section.description.strip() if section.description is not None else None
    return replace(
        section,
        title=section.title.strip(),
        description=description or None,
        questions=tuple(_normalize_question(question) for question in section.questions),
    )


def _normalize_question(question: Question) -> Question:
    tags = None
    if question.tags is not None:
        tags = tuple(tag.strip() for tag in question.tags if tag.strip())
    return replace(
        question,
        prompt=question.prompt.strip(),
        choices=tuple(
            Choice(
                id=choice.id,
                label=choice.label.strip(),
                is_correct=choice.is_correct,
                explanation=(choice.explanation or "").strip() or None,
            )
            for choice in question.choices
        ),
        tags=tags,
    )
