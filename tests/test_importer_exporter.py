from dataclasses import replace

import pytest

from mocktest_app.core import models
from mocktest_app.core.mocktest_exporter import save_test_to_file, serialize_test
from mocktest_app.core.mocktest_importer import MockTestImportError, load_test_from_file, parse_test_text

SAMPLE_TEXT = """
TITLE: Radian Drill
DESCRIPTION: Convert between degrees and radians
CATEGORY: Maths
DIFFICULTY: intermediate
DURATION: 10
PREP: Unit circle
PREP: Common angles

---

SECTION: Conversions
NOTE: Answers are exact.

Q: What is $30^o$ in radians?
A: $\\frac{\\pi}{2}$
B: $\\frac{\\pi}{6}$
C: $\\frac{\\pi}{3}$
CORRECT: B
MARKS: 2
NEGATIVE: 0.5
LEVEL: medium
TAGS: angles, radians
EXPLAIN B: $30 \\cdot \\frac{\\pi}{180}$
EXPLAIN A: That is $90^o$.

Q: Which is larger?
Take a moment.
A: 1 rad
B: 1 degree
CORRECT: a
"""


def test_parse_header_and_sections():
    test = parse_test_text(SAMPLE_TEXT)

    assert test.id == "radian-drill"
    assert test.title == "Radian Drill"
    assert test.category == "Maths"
    assert test.difficulty is models.TestDifficulty.INTERMEDIATE
    assert test.duration_minutes == 10
    assert test.recommended_prep == ("Unit circle", "Common angles")
    assert [section.title for section in test.sections] == ["Conversions"]
    assert test.sections[0].description == "Answers are exact."
    assert test.sections[0].id == "radian-drill-s1"


def test_parse_questions():
    first, second = parse_test_text(SAMPLE_TEXT).questions

    assert first.id == "radian-drill-q1"
    assert [choice.id for choice in first.choices] == ["a", "b", "c"]
    assert first.correct_choices()[0].id == "b"
    assert first.marks == 2
    assert first.negative_marks == 0.5
    assert first.difficulty is models.QuestionDifficulty.MEDIUM
    assert first.tags == ("angles", "radians")
    assert first.choices[0].explanation == "That is $90^o$."
    assert second.prompt == "Which is larger?\nTake a moment."
    assert second.correct_choices()[0].label == "1 rad"
    assert second.marks == 1
    assert second.negative_marks is None


def test_total_marks_and_defaults():
    text = "TITLE: Tiny\nDURATION: 5\n\nQ: 1+1?\nA: 2\nB: 3\nCORRECT: A\n"

    test = parse_test_text(text)

    assert test.total_marks == 1
    assert test.category == "Practice"
    assert test.difficulty is models.TestDifficulty.BEGINNER
    assert test.sections[0].title == "Section 1"


@pytest.mark.parametrize(
    ("text", "message"),
    [
        ("DURATION: 5\n\nQ: x\nA: 1\nB: 2\nCORRECT: A", "TITLE is required"),
        ("TITLE: T\n\nQ: x\nA: 1\nB: 2\nCORRECT: A", "DURATION is required"),
        ("TITLE: T\nDURATION: 5", "did not contain any questions"),
        ("TITLE: T\nDURATION: 5\n\nQ: x\nA: 1\nCORRECT: A", "at least two options"),
        ("TITLE: T\nDURATION: 5\n\nQ: x\nA: 1\nC: 2\nCORRECT: A", "consecutive letters"),
        ("TITLE: T\nDURATION: 5\n\nQ: x\nA: 1\nB: 2", "CORRECT is required"),
        ("TITLE: T\nDURATION: 5\n\nQ: x\nA: 1\nB: 2\nCORRECT: D", "CORRECT must be one of"),
        ("TITLE: T\nDURATION: 5\n\nQ: x\nA: 1\nB: 2\nCORRECT: A\nLEVEL: brutal", "LEVEL must be"),
        ("TITLE: T\nDURATION: five\n\nQ: x\nA: 1\nB: 2\nCORRECT: A", "DURATION must be an integer"),
        ("TITLE: T\nDURATION: 5\nDIFFICULTY: extreme\n\nQ: x\nA: 1\nB: 2\nCORRECT: A", "DIFFICULTY must be"),
        ("TITLE: T\nDURATION: 5\n\nhello there", "Unrecognized block"),
    ],
)
def test_parse_errors(text, message):
    with pytest.raises(MockTestImportError, match=message):
        parse_test_text(text)


def test_serialize_then_parse_preserves_content():
    original = parse_test_text(SAMPLE_TEXT)

    reparsed = parse_test_text(serialize_test(original))

    assert reparsed == original


def test_serialize_sample_test(sample_test):
    text = serialize_test(sample_test)

    assert text.startswith("TITLE: Sample Test\n")
    assert "SECTION: Only section" in text
    assert "CORRECT: A" in text
    assert "NEGATIVE: 1" in text
    assert "EXPLAIN A: A is right." in text
    assert "\n\n---\n\n" in text


def test_file_round_trip(tmp_path, sample_test):
    path = tmp_path / "nested" / "sample.txt"
    save_test_to_file(path, sample_test)

    imported = load_test_from_file(path)

    assert imported.source_path == path
    assert imported.test.title == sample_test.title
    assert imported.test.question_count == 2
    assert imported.test.total_marks == 3


def test_export_rejects_too_many_options(tmp_path, sample_test):
    many = tuple(models.Choice(id=str(index), label=f"opt {index}") for index in range(7))
    question = models.Question(id="wide", prompt="?", choices=many)
    wide = models.MockTest(
        id="wide",
        title="Wide",
        description="",
        duration_minutes=1,
        total_marks=1,
        category="Practice",
        difficulty=models.TestDifficulty.BEGINNER,
        sections=(models.Section(id="s", title="S", questions=(question,)),),
    )

    with pytest.raises(ValueError):
        save_test_to_file(tmp_path / "wide.txt", wide)


def _test_with_prompt(sample_test, prompt, explanation=None):
    question = sample_test.sections[0].questions[0]
    choices = tuple(
        replace(choice, explanation=explanation) if choice.is_correct and explanation else choice
        for choice in question.choices
    )
    section = replace(sample_test.sections[0], questions=(replace(question, prompt=prompt, choices=choices),))
    return replace(sample_test, sections=(section,))


def test_prompt_lines_starting_with_explain_are_prompt_text():
    test = parse_test_text(
        "TITLE: Reasoning\nDURATION: 5\n\n"
        "Q: Which is larger?\nExplain your reasoning briefly.\nA: one\nB: two\nCORRECT: B"
    )

    assert test.questions[0].prompt == "Which is larger?\nExplain your reasoning briefly."
    assert test.questions[0].choices[1].explanation is None


def test_exported_prompt_starting_with_explain_imports_again(sample_test):
    exported = _test_with_prompt(sample_test, "Pick one\nExplain why")

    parsed = parse_test_text(serialize_test(exported))

    assert parsed.questions[0].prompt == "Pick one\nExplain why"


def test_paragraph_breaks_survive_export_and_import(sample_test):
    exported = _test_with_prompt(
        sample_test,
        "First paragraph.\n\nSecond paragraph with $x^2$.",
        explanation="Because of this.\n\n\nAnd that.",
    )

    text = serialize_test(exported)
    parsed = parse_test_text(text)

    assert "\n\\\n" in text
    assert parsed.questions[0].prompt == "First paragraph.\n\nSecond paragraph with $x^2$."
    assert parsed.questions[0].choices[0].explanation == "Because of this.\n\nAnd that."
