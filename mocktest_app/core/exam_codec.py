"""Conversion between domain models and JSON-compatible documents.

Documents use camelCase keys. Optional fields are omitted when absent and
come back as ``None``, so presence survives a save/load round trip.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from mocktest_app.core.models import (
    AttemptBreakdown,
    Choice,
    MockTest,
    Question,
    QuestionDifficulty,
    QuestionResponse,
    Section,
    TestAttempt,
    TestDifficulty,
)


class ExamDataError(ValueError):
    """Raised when a stored document cannot be decoded into a model."""


def mock_test_to_dict(test: MockTest) -> dict[str, Any]:
    document: dict[str, Any] = {
        "id": test.id,
        "title": test.title,
        "description": test.description,
        "durationMinutes": test.duration_minutes,
        "totalMarks": test.total_marks,
        "category": test.category,
        "difficulty": test.difficulty.value,
        "sections": [_section_to_dict(section) for section in test.sections],
    }
    if test.recommended_prep is not None:
        document["recommendedPrep"] = list(test.recommended_prep)
    return document


def _section_to_dict(section: Section) -> dict[str, Any]:
    document: dict[str, Any] = {
        "id": section.id,
        "title": section.title,
        "questions": [_question_to_dict(question) for question in section.questions],
    }
    if section.description is not None:
        document["description"] = section.description
    return document


def _question_to_dict(question: Question) -> dict[str, Any]:
    document: dict[str, Any] = {
        "id": question.id,
        "prompt": question.prompt,
        "choices": [_choice_to_dict(choice) for choice in question.choices],
        "difficulty": question.difficulty.value,
        "marks": question.marks,
    }
    if question.negative_marks is not None:
        document["negativeMarks"] = question.negative_marks
    if question.tags is not None:
        document["tags"] = list(question.tags)
    return document


def _choice_to_dict(choice: Choice) -> dict[str, Any]:
    document: dict[str, Any] = {
        "id": choice.id,
        "label": choice.label,
        "isCorrect": choice.is_correct,
    }
    if choice.explanation is not None:
        document["explanation"] = choice.explanation
    return document


def mock_test_from_dict(document: dict[str, Any]) -> MockTest:
    try:
        recommended = document.get("recommendedPrep")
        return MockTest(
            id=str(document["id"]),
            title=str(document["title"]),
            description=str(document.get("description", "")),
            duration_minutes=int(document["durationMinutes"]),
            total_marks=_number(document["totalMarks"], "totalMarks"),
            category=str(document["category"]),
            difficulty=TestDifficulty(document["difficulty"]),
            sections=tuple(_section_from_dict(item) for item in document["sections"]),
            recommended_prep=tuple(recommended) if recommended is not None else None,
        )
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise ExamDataError(f"Invalid mock test document: {exc}") from exc


def _section_from_dict(document: dict[str, Any]) -> Section:
    return Section(
        id=str(document["id"]),
        title=str(document["title"]),
        questions=tuple(_question_from_dict(item) for item in document["questions"]),
        description=document.get("description"),
    )


def _question_from_dict(document: dict[str, Any]) -> Question:
    tags = document.get("tags")
    return Question(
        id=str(document["id"]),
        prompt=str(document["prompt"]),
        choices=tuple(_choice_from_dict(item) for item in document["choices"]),
        difficulty=QuestionDifficulty(document.get("difficulty", QuestionDifficulty.EASY.value)),
        marks=_number(document["marks"], "marks"),
        negative_marks=_optional_number(document.get("negativeMarks"), "negativeMarks"),
        tags=tuple(tags) if tags is not None else None,
    )


def _choice_from_dict(document: dict[str, Any]) -> Choice:
    return Choice(
        id=str(document["id"]),
        label=str(document["label"]),
        is_correct=bool(document.get("isCorrect", False)),
        explanation=document.get("explanation"),
    )


def attempt_to_dict(attempt: TestAttempt) -> dict[str, Any]:
    document: dict[str, Any] = {
        "testId": attempt.test_id,
        "startedAt": format_timestamp(attempt.started_at),
        "durationSeconds": attempt.duration_seconds,
        "responses": [_response_to_dict(response) for response in attempt.responses],
        "score": attempt.score,
        "breakdown": {
            "totalQuestions": attempt.breakdown.total_questions,
            "attempted": attempt.breakdown.attempted,
            "correct": attempt.breakdown.correct,
            "incorrect": attempt.breakdown.incorrect,
            "unattempted": attempt.breakdown.unattempted,
        },
    }
    if attempt.completed_at is not None:
        document["completedAt"] = format_timestamp(attempt.completed_at)
    return document


def _response_to_dict(response: QuestionResponse) -> dict[str, Any]:
    document: dict[str, Any] = {
        "questionId": response.question_id,
        "markedForReview": response.marked_for_review,
        "timeSpentSeconds": response.time_spent_seconds,
    }
    if response.choice_id is not None:
        document["choiceId"] = response.choice_id
    return document


def attempt_from_dict(document: dict[str, Any]) -> TestAttempt:
    try:
        breakdown = document["breakdown"]
        completed_raw = document.get("completedAt")
        return TestAttempt(
            test_id=str(document["testId"]),
            started_at=parse_timestamp(document["startedAt"]),
            completed_at=parse_timestamp(completed_raw) if completed_raw is not None else None,
            duration_seconds=int(document["durationSeconds"]),
            responses=tuple(
                QuestionResponse(
                    question_id=str(item["questionId"]),
                    choice_id=item.get("choiceId"),
                    marked_for_review=bool(item.get("markedForReview", False)),
                    time_spent_seconds=int(item.get("timeSpentSeconds", 0)),
                )
                for item in document["responses"]
            ),
            score=_number(document["score"], "score"),
            breakdown=AttemptBreakdown(
                total_questions=int(breakdown["totalQuestions"]),
                attempted=int(breakdown["attempted"]),
                correct=int(breakdown["correct"]),
                incorrect=int(breakdown["incorrect"]),
                unattempted=int(breakdown["unattempted"]),
            ),
        )
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise ExamDataError(f"Invalid attempt document: {exc}") from exc


def _number(value: Any, key: str) -> int | float:
    # bool is an int subclass but never a valid mark or score
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ExamDataError(f"{key} must be a number, got {value!r}.")
    return value


def _optional_number(value: Any, key: str) -> int | float | None:
    return None if value is None else _number(value, key)


def format_timestamp(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).isoformat()


def parse_timestamp(raw: str) -> datetime:
    value = str(raw)
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
