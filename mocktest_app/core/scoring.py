"""Deterministic scoring of a finished attempt, including negative marking."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace
from datetime import datetime
from enum import Enum

from mocktest_app.core.models import (
    AttemptBreakdown,
    MockTest,
    Question,
    QuestionResponse,
    TestAttempt,
)


class Outcome(str, Enum):
    """Classification of one question within an attempt."""

    CORRECT = "correct"
    INCORRECT = "incorrect"
    UNATTEMPTED = "unattempted"


def classify_response(question: Question, response: QuestionResponse | None) -> Outcome:
    """Classify a response without ever raising on malformed input.

    A selection only counts as correct when it names a choice of this question
    that is flagged correct. Unknown choice ids and questions without any
    flagged choice therefore always classify as incorrect.
    """
    if response is None or response.choice_id is None:
        return Outcome.UNATTEMPTED
    selected = question.find_choice(response.choice_id)
    if selected is not None and selected.is_correct:
        return Outcome.CORRECT
    return Outcome.INCORRECT


def score_for(question: Question, outcome: Outcome) -> float:
    if outcome is Outcome.CORRECT:
        return question.marks
    if outcome is Outcome.INCORRECT:
        return -question.penalty
    return 0


def calculate_score(
    test: MockTest,
    responses: Iterable[QuestionResponse],
    started_at: datetime,
    completed_at: datetime,
) -> TestAttempt:
    """Score ``responses`` against ``test`` and build the resulting attempt.

    Args:
        test: The test definition the responses belong to.
        responses: Response snapshot; questions without a response count as
            unattempted and responses for unknown questions are ignored.
        started_at: When the session started.
        completed_at: When the session was finalized.

    Returns:
        A new ``TestAttempt``. The score is not clamped and may be negative.
    """
    snapshot = tuple(replace(response) for response in responses)
    by_question_id = {response.question_id: response for response in snapshot}

    score: float = 0
    correct = incorrect = unattempted = 0
    questions = test.questions
    for question in questions:
        outcome = classify_response(question, by_question_id.get(question.id))
        score += score_for(question, outcome)
        if outcome is Outcome.CORRECT:
            correct += 1
        elif outcome is Outcome.INCORRECT:
            incorrect += 1
        else:
            unattempted += 1

    breakdown = AttemptBreakdown(
        total_questions=len(questions),
        attempted=correct + incorrect,
        correct=correct,
        incorrect=incorrect,
        unattempted=unattempted,
    )
    return TestAttempt(
        test_id=test.id,
        started_at=started_at,
        completed_at=completed_at,
        duration_seconds=round((completed_at - started_at).total_seconds()),
        responses=snapshot,
        score=score,
        breakdown=breakdown,
    )
