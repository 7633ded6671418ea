"""Utilities for exporting mock tests to the plain-text import format."""

from __future__ import annotations

from pathlib import Path

from mocktest_app.core.mocktest_importer import OPTION_LETTERS, PARAGRAPH_BREAK
from mocktest_app.core.models import MockTest, Question, Section


def save_test_to_file(file_path: Path, test: MockTest) -> None:
    """Persist ``test`` to disk in the text import format."""

    if test.question_count == 0:
        raise ValueError("Cannot export a test without questions.")
    if any(len(question.choices) > len(OPTION_LETTERS) for question in test.questions):
        raise ValueError(f"The text format supports at most {len(OPTION_LETTERS)} options.")

    file_path = file_path.resolve()
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(serialize_test(test), encoding="utf-8")


def serialize_test(test: MockTest) -> str:
    blocks = [_serialize_header(test)]
    for section in test.sections:
        blocks.append(_serialize_section(section))
        blocks.extend(_serialize_question(question) for question in section.questions)
    return "\n\n---\n\n".join(blocks) + "\n"


def _serialize_header(test: MockTest) -> str:
    lines = [f"TITLE: {test.title}"]
    if test.description:
        lines.append(f"DESCRIPTION: {_single_line(test.description)}")
    lines.append(f"CATEGORY: {test.category}")
    lines.append(f"DIFFICULTY: {test.difficulty.value}")
    lines.append(f"DURATION: {test.duration_minutes}")
    for item in test.recommended_prep or ():
        lines.append(f"PREP: {item}")
    return "\n".join(lines)


def _serialize_section(section: Section) -> str:
    lines = [f"SECTION: {section.title}"]
    if section.description:
        lines.extend(f"NOTE: {line}" for line in section.description.splitlines())
    return "\n".join(lines)


def _serialize_question(question: Question) -> str:
    lines: list[str] = []
    lines.extend(_with_marker("Q", question.prompt))

    correct_letter: str | None = None
    for letter, choice in zip(OPTION_LETTERS, question.choices):
        lines.extend(_with_marker(letter, choice.label))
        if choice.is_correct and correct_letter is None:
            correct_letter = letter

    if correct_letter is not None:
        lines.append(f"CORRECT: {correct_letter}")
    lines.append(f"MARKS: {question.marks:g}")
    if question.negative_marks is not None:
        lines.append(f"NEGATIVE: {question.negative_marks:g}")
    lines.append(f"LEVEL: {question.difficulty.value}")
    if question.tags:
        lines.append(f"TAGS: {', '.join(question.tags)}")
    for letter, choice in zip(OPTION_LETTERS, question.choices):
        if choice.explanation:
            lines.extend(_with_marker(f"EXPLAIN {letter}", choice.explanation))
    return "\n".join(lines)


def _with_marker(marker: str, text: str) -> list[str]:
    text_lines: list[str] = []
    for line in text.strip().splitlines():
        if line.strip():
            text_lines.append(line)
        elif text_lines[-1] != PARAGRAPH_BREAK:
            text_lines.append(PARAGRAPH_BREAK)
    if not text_lines:
        text_lines = [text]
    return [f"{marker}: {text_lines[0]}", *text_lines[1:]]


def _single_line(text: str) -> str:
    return " ".join(text.split())
