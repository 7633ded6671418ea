"""Per-question feedback for a submitted attempt."""

from __future__ import annotations

from dataclasses import dataclass

from mocktest_app.core.models import Choice, MockTest, Question, TestAttempt
from mocktest_app.core.scoring import Outcome, classify_response, score_for


@dataclass(frozen=True, slots=True)
class ReviewItem:
    """What the user picked for one question and what was expected."""

    question: Question
    outcome: Outcome
    selected_choice: Choice | None
    correct_choice: Choice | None
    marks_awarded: float
    time_spent_seconds: int
    marked_for_review: bool


def build_review(test: MockTest, attempt: TestAttempt) -> list[ReviewItem]:
    """Pair every question of ``test`` with the attempt's response for it."""
    responses = {response.question_id: response for response in attempt.responses}
    items: list[ReviewItem] = []
    for question in test.questions:
        response = responses.get(question.id)
        outcome = classify_response(question, response)
        correct = question.correct_choices()
        items.append(
            ReviewItem(
                question=question,
                outcome=outcome,
                selected_choice=question.find_choice(response.choice_id) if response else None,
                correct_choice=correct[0] if correct else None,
                marks_awarded=score_for(question, outcome),
                time_spent_seconds=response.time_spent_seconds if response else 0,
                marked_for_review=response.marked_for_review if response else False,
            )
        )
    return items


def review_to_markdown(items: list[ReviewItem]) -> str:
    """Render review items as markdown for the result view."""
    blocks: list[str] = []
    for number, item in enumerate(items, start=1):
        lines = [f"### {number}. {item.question.prompt}"]
        if item.selected_choice is not None:
            verdict = "correct" if item.outcome is Outcome.CORRECT else "incorrect"
            lines.append(f"**Your answer:** {item.selected_choice.label} ({verdict})")
        elif item.outcome is Outcome.INCORRECT:
            lines.append("**Your answer:** unknown choice (incorrect)")
        else:
            lines.append("**Your answer:** Not answered")
        correct_label = item.correct_choice.label if item.correct_choice else "not defined"
        lines.append(f"**Correct answer:** {correct_label}")
        selected = item.selected_choice
        if selected is not None and item.outcome is Outcome.INCORRECT and selected.explanation:
            lines.append(f"*Explanation:* {selected.explanation}")
        if item.correct_choice is not None and item.correct_choice.explanation:
            lines.append(f"*Why correct:* {item.correct_choice.explanation}")
        lines.append(f"Marks: {item.marks_awarded:g} · Time spent: {item.time_spent_seconds}s")
        blocks.append("\n\n".join(lines))
    return "\n\n---\n\n".join(blocks)
