"""Utilities for importing mock tests from a human-friendly text file.

File format (blocks separated by blank lines or '---'):

    TITLE: Test title                  (header block, required once)
    DESCRIPTION: One line summary
    CATEGORY: Practice
    DIFFICULTY: beginner|intermediate|advanced
    DURATION: minutes
    PREP: Recommended preparation item (repeatable)

    SECTION: Section title             (starts a new section)
    NOTE: Optional section description

    Q: Question text (supports markdown + LaTeX). Additional lines until the
       next marker are treated as part of the question.
    A: First option
    B: Second option                   (two to six options, A-F)
    CORRECT: B
    MARKS: 2                           (optional, default 1)
    NEGATIVE: 0.5                      (optional)
    LEVEL: easy|medium|hard            (optional, default easy)
    TAGS: comma, separated             (optional)
    EXPLAIN B: Why B is right          (optional, any option letter)

Inside a prompt, option or explanation a line holding a single backslash
stands for a blank line, so multi-paragraph markdown survives the format.

Questions that appear before the first SECTION block land in a section named
"Section 1". Ids are derived from the title: ``<slug>-s<n>`` for sections,
``<slug>-q<n>`` for questions and the lowercase option letter for choices.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
import re

from mocktest_app.constants.exam_constants import DEFAULT_CATEGORY
from mocktest_app.core.models import (
    Choice,
    MockTest,
    Question,
    QuestionDifficulty,
    Section,
    TestDifficulty,
)
from mocktest_app.core.validation import compute_total_marks, slugify_title


class MockTestImportError(ValueError):
    """Raised when a test definition cannot be parsed."""


@dataclass(slots=True)
class ImportedTest:
    """Container for the parsed test and where it came from."""

    source_path: Path
    test: MockTest


OPTION_LETTERS = ("A", "B", "C", "D", "E", "F")
PARAGRAPH_BREAK = "\\"
_HEADER_KEYS = ("TITLE", "DESCRIPTION", "CATEGORY", "DIFFICULTY", "DURATION", "PREP")
_EXPLAIN_MARKER = re.compile(r"^EXPLAIN\s+([A-F])\s*:", re.IGNORECASE)


@dataclass(slots=True)
class _QuestionDraft:
    prompt_lines: list[str] = field(default_factory=list)
    options: dict[str, str] = field(default_factory=dict)
    explanations: dict[str, str] = field(default_factory=dict)
    correct_letter: str | None = None
    marks: float = 1
    negative_marks: float | None = None
    difficulty: QuestionDifficulty = QuestionDifficulty.EASY
    tags: tuple[str, ...] | None = None


@dataclass(slots=True)
class _SectionDraft:
    title: str
    description: str | None = None
    questions: list[_QuestionDraft] = field(default_factory=list)


def load_test_from_file(file_path: Path) -> ImportedTest:
    text = file_path.read_text(encoding="utf-8")
    return ImportedTest(source_path=file_path, test=parse_test_text(text))


def parse_test_text(text: str) -> MockTest:
    header: dict[str, str] = {}
    prep: list[str] = []
    sections: list[_SectionDraft] = []

    for block in _split_blocks(text):
        first_line = block.splitlines()[0].strip().upper()
        if first_line.startswith("SECTION:"):
            sections.append(_parse_section_block(block))
        elif first_line.startswith("Q:"):
            if not sections:
                sections.append(_SectionDraft(title="Section 1"))
            sections[-1].questions.append(_parse_question_block(block))
        elif first_line.split(":", 1)[0] in _HEADER_KEYS:
            _parse_header_block(block, header, prep)
        else:
            raise MockTestImportError(f"Unrecognized block starting with '{block.splitlines()[0]}'.")

    if "TITLE" not in header:
        raise MockTestImportError("TITLE is required.")
    if "DURATION" not in header:
        raise MockTestImportError("DURATION is required.")
    if not any(section.questions for section in sections):
        raise MockTestImportError("Test file did not contain any questions.")

    return _build_test(header, prep, sections)


def _split_blocks(text: str) -> list[str]:
    blocks: list[str] = []
    current_block: list[str] = []
    for raw_line in text.splitlines():
        stripped = raw_line.strip()
        if stripped == "---":
            if current_block:
                blocks.append("\n".join(current_block).strip())
                current_block = []
            continue
        if stripped:
            current_block.append(raw_line)
        elif current_block:
            blocks.append("\n".join(current_block).strip())
            current_block = []
    if current_block:
        blocks.append("\n".join(current_block).strip())
    return [block for block in blocks if block]


def _parse_header_block(block: str, header: dict[str, str], prep: list[str]) -> None:
    for raw_line in block.splitlines():
        line = raw_line.strip()
        key, separator, value = line.partition(":")
        key = key.strip().upper()
        if not separator or key not in _HEADER_KEYS:
            raise MockTestImportError(f"Encountered text outside of a known header field: '{line}'.")
        if key == "PREP":
            prep.append(value.strip())
        else:
            header[key] = value.strip()


def _parse_section_block(block: str) -> _SectionDraft:
    title = ""
    notes: list[str] = []
    for raw_line in block.splitlines():
        line = raw_line.strip()
        upper = line.upper()
        if upper.startswith("SECTION:"):
            title = line.split(":", 1)[1].strip()
        elif upper.startswith("NOTE:"):
            notes.append(line.split(":", 1)[1].strip())
        else:
            raise MockTestImportError(f"Encountered text outside of a known section field: '{line}'.")
    if not title:
        raise MockTestImportError("SECTION must include a title.")
    return _SectionDraft(title=title, description="\n".join(notes) or None)


def _parse_question_block(block: str) -> _QuestionDraft:
    draft = _QuestionDraft()
    current_part: str | None = None

    for raw_line in block.splitlines():
        line = raw_line.strip()
        if not line:
            continue
        if line == PARAGRAPH_BREAK and current_part is not None:
            _append_paragraph_break(draft, current_part)
            continue
        upper = line.upper()
        value = line.split(":", 1)[1].strip() if ":" in line else ""
        explain_match = _EXPLAIN_MARKER.match(line)

        if upper.startswith("Q:"):
            draft.prompt_lines = [value]
            current_part = "Q"
        elif upper.startswith("CORRECT:"):
            draft.correct_letter = value.upper()
            current_part = None
        elif upper.startswith("MARKS:"):
            draft.marks = _parse_number("MARKS", value)
            current_part = None
        elif upper.startswith("NEGATIVE:"):
            draft.negative_marks = _parse_number("NEGATIVE", value)
            current_part = None
        elif upper.startswith("LEVEL:"):
            try:
                draft.difficulty = QuestionDifficulty(value.lower())
            except ValueError as exc:
                raise MockTestImportError("LEVEL must be easy, medium or hard.") from exc
            current_part = None
        elif upper.startswith("TAGS:"):
            draft.tags = tuple(tag.strip() for tag in value.split(",") if tag.strip())
            current_part = None
        elif explain_match:
            letter = explain_match.group(1).upper()
            draft.explanations[letter] = value
            current_part = f"EXPLAIN {letter}"
        elif len(line) > 2 and line[0].upper() in OPTION_LETTERS and line[1] == ":":
            letter = line[0].upper()
            draft.options[letter] = line[2:].strip()
            current_part = letter
        elif current_part == "Q":
            draft.prompt_lines.append(line)
        elif current_part in OPTION_LETTERS:
            draft.options[current_part] = draft.options[current_part] + f"\n{line}"
        elif current_part is not None and current_part.startswith("EXPLAIN "):
            letter = current_part[-1]
            draft.explanations[letter] = draft.explanations[letter] + f"\n{line}"
        else:
            raise MockTestImportError(f"Encountered text outside of a known section: '{line}'.")

    if not "\n".join(draft.prompt_lines).strip():
        raise MockTestImportError("Question text missing (Q: ...)")
    letters = [letter for letter in OPTION_LETTERS if letter in draft.options]
    if len(letters) < 2:
        raise MockTestImportError("Each question must define at least two options.")
    if letters != list(OPTION_LETTERS[: len(letters)]):
        raise MockTestImportError("Options must use consecutive letters starting at A.")
    if draft.correct_letter is None:
        raise MockTestImportError("CORRECT is required for every question.")
    if draft.correct_letter not in letters:
        raise MockTestImportError(f"CORRECT must be one of {', '.join(letters)}.")
    unknown = set(draft.explanations) - set(letters)
    if unknown:
        raise MockTestImportError(f"EXPLAIN refers to missing option {sorted(unknown)[0]}.")
    return draft


def _append_paragraph_break(draft: _QuestionDraft, part: str) -> None:
    if part == "Q":
        draft.prompt_lines.append("")
    elif part in OPTION_LETTERS:
        draft.options[part] += "\n"
    else:
        draft.explanations[part[-1]] += "\n"


def _parse_number(key: str, raw_value: str) -> float:
    if not raw_value:
        raise MockTestImportError(f"{key} must include a number.")
    try:
        number = float(raw_value)
    except ValueError as exc:
        raise MockTestImportError(f"{key} must be a number.") from exc
    return int(number) if number.is_integer() else number


def _build_test(header: dict[str, str], prep: list[str], drafts: list[_SectionDraft]) -> MockTest:
    try:
        duration = int(header["DURATION"])
    except ValueError as exc:
        raise MockTestImportError("DURATION must be an integer number of minutes.") from exc
    try:
        difficulty = TestDifficulty(header.get("DIFFICULTY", TestDifficulty.BEGINNER.value).lower())
    except ValueError as exc:
        raise MockTestImportError("DIFFICULTY must be beginner, intermediate or advanced.") from exc

    test_id = slugify_title(header["TITLE"])
    question_number = 0
    sections: list[Section] = []
    for section_number, draft in enumerate(drafts, start=1):
        questions: list[Question] = []
        for question_draft in draft.questions:
            question_number += 1
            questions.append(_build_question(f"{test_id}-q{question_number}", question_draft))
        sections.append(
            Section(
                id=f"{test_id}-s{section_number}",
                title=draft.title,
                questions=tuple(questions),
                description=draft.description,
            )
        )

    section_tuple = tuple(sections)
    return MockTest(
        id=test_id,
        title=header["TITLE"],
        description=header.get("DESCRIPTION", ""),
        duration_minutes=duration,
        total_marks=compute_total_marks(section_tuple),
        category=header.get("CATEGORY", DEFAULT_CATEGORY),
        difficulty=difficulty,
        sections=section_tuple,
        recommended_prep=tuple(prep) if prep else None,
    )


def _build_question(question_id: str, draft: _QuestionDraft) -> Question:
    choices = tuple(
        Choice(
            id=letter.lower(),
            label=draft.options[letter].strip(),
            is_correct=letter == draft.correct_letter,
            explanation=draft.explanations.get(letter),
        )
        for letter in OPTION_LETTERS
        if letter in draft.options
    )
    return Question(
        id=question_id,
        prompt="\n".join(draft.prompt_lines).strip(),
        choices=choices,
        difficulty=draft.difficulty,
        marks=draft.marks,
        negative_marks=draft.negative_marks,
        tags=draft.tags,
    )
