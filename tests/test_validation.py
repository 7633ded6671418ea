from dataclasses import replace

import pytest

from mocktest_app.core import models
from mocktest_app.core.validation import (
    MockTestValidationError,
    collect_problems,
    compute_total_marks,
    normalize_mock_test,
    slugify_title,
    validate_mock_test,
)
from mocktest_app.data.builtin_tests import BUILTIN_TESTS


def _with_first_question(test, **changes):
    section = test.sections[0]
    question = replace(section.questions[0], **changes)
    return replace(test, sections=(replace(section, questions=(question, *section.questions[1:])),))


def test_valid_test_has_no_problems(sample_test):
    assert collect_problems(sample_test) == []


def test_slugify_title():
    assert slugify_title("  Physics   Mock 1 ") == "physics-mock-1"
    assert len(slugify_title("   ")) == 9


def test_normalize_trims_and_derives_id(sample_test):
    messy = replace(sample_test, id="  ", title="  Unit Test Paper  ", description=" spaced ")

    normalized = normalize_mock_test(messy)

    assert normalized.id == "unit-test-paper"
    assert normalized.title == "Unit Test Paper"
    assert normalized.description == "spaced"


def test_total_marks_is_derived(sample_test):
    assert compute_total_marks(sample_test.sections) == 3
    assert validate_mock_test(replace(sample_test, total_marks=0)).total_marks == 3


@pytest.mark.parametrize(
    ("changes", "fragment"),
    [
        ({"prompt": "   "}, "prompt must not be empty"),
        ({"choices": (models.Choice(id="a", label="only", is_correct=True),)}, "at least two choices"),
        (
            {"choices": (models.Choice(id="a", label="x"), models.Choice(id="b", label="y"))},
            "exactly one correct choice is required (found 0)",
        ),
        (
            {
                "choices": (
                    models.Choice(id="a", label="x", is_correct=True),
                    models.Choice(id="b", label="y", is_correct=True),
                )
            },
            "(found 2)",
        ),
        (
            {
                "choices": (
                    models.Choice(id="a", label="x", is_correct=True),
                    models.Choice(id="a", label="y"),
                )
            },
            "choice ids must be unique",
        ),
        ({"marks": 0}, "marks must be at least 1"),
        ({"negative_marks": -1}, "negative marks must not be below 0"),
    ],
)
def test_question_rules(sample_test, changes, fragment):
    with pytest.raises(MockTestValidationError) as excinfo:
        validate_mock_test(_with_first_question(sample_test, **changes))

    assert any(fragment in problem for problem in excinfo.value.problems)


def test_duplicate_question_ids_are_rejected(sample_test):
    duplicated = _with_first_question(sample_test, id="q2")

    problems = collect_problems(duplicated)

    assert any("duplicate question id 'q2'" in problem for problem in problems)


def test_test_level_rules(sample_test):
    problems = collect_problems(replace(sample_test, title=" ", duration_minutes=0, sections=()))

    assert "Test title must not be empty." in problems
    assert "Duration must be a positive number of minutes." in problems
    assert "A test needs at least one section." in problems


def test_error_message_joins_problems():
    error = MockTestValidationError(["one.", "two."])

    assert str(error) == "one.; two."
    assert isinstance(error, ValueError)


def test_builtin_tests_are_valid():
    for test in BUILTIN_TESTS:
        assert collect_problems(test) == []
        assert compute_total_marks(test.sections) == test.total_marks
    assert len({test.id for test in BUILTIN_TESTS}) == len(BUILTIN_TESTS)
