from dataclasses import replace
from datetime import datetime, timedelta, timezone

from mocktest_app.core import models
from mocktest_app.core.scoring import Outcome, calculate_score, classify_response, score_for

STARTED = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)


def _responses(**choices):
    return [models.QuestionResponse(question_id=qid, choice_id=cid) for qid, cid in choices.items()]


def test_correct_answer_and_unattempted_question(sample_test):
    attempt = calculate_score(sample_test, _responses(q1="A", q2=None), STARTED, STARTED + timedelta(seconds=30))

    assert attempt.score == 2
    assert attempt.breakdown == models.AttemptBreakdown(
        total_questions=2, attempted=1, correct=1, incorrect=0, unattempted=1
    )


def test_negative_marking_offsets_correct_answer(sample_test):
    attempt = calculate_score(sample_test, _responses(q1="B", q2="B"), STARTED, STARTED)

    assert attempt.score == 0
    assert attempt.breakdown.correct == 1
    assert attempt.breakdown.incorrect == 1
    assert attempt.breakdown.unattempted == 0


def test_score_is_not_clamped_at_zero(sample_test):
    attempt = calculate_score(sample_test, _responses(q1="B", q2="A"), STARTED, STARTED)

    assert attempt.score == -1


def test_missing_responses_count_as_unattempted(sample_test):
    attempt = calculate_score(sample_test, [], STARTED, STARTED)

    assert attempt.score == 0
    assert attempt.breakdown.unattempted == 2
    assert attempt.breakdown.attempted == 0


def test_responses_for_unknown_questions_are_ignored(sample_test):
    responses = _responses(q1="A", ghost="A")
    attempt = calculate_score(sample_test, responses, STARTED, STARTED)

    assert attempt.score == 2
    assert attempt.breakdown.total_questions == 2


def test_unknown_choice_id_is_incorrect(sample_test):
    question = sample_test.questions[0]
    response = models.QuestionResponse(question_id="q1", choice_id="Z")

    assert classify_response(question, response) is Outcome.INCORRECT
    assert score_for(question, Outcome.INCORRECT) == -1


def test_question_without_correct_choice_never_scores():
    question = models.Question(
        id="q",
        prompt="?",
        choices=(models.Choice(id="a", label="x"), models.Choice(id="b", label="y")),
    )

    assert classify_response(question, models.QuestionResponse(question_id="q", choice_id="a")) is Outcome.INCORRECT


def test_missing_negative_marks_default_to_zero(sample_test):
    question = replace(sample_test.questions[0], negative_marks=None)

    assert score_for(question, Outcome.INCORRECT) == 0


def test_duration_is_rounded_to_whole_seconds(sample_test):
    attempt = calculate_score(sample_test, [], STARTED, STARTED + timedelta(seconds=61, milliseconds=600))

    assert attempt.duration_seconds == 62
    assert attempt.completed_at == STARTED + timedelta(seconds=61, milliseconds=600)


def test_attempt_holds_a_copy_of_the_responses(sample_test):
    responses = _responses(q1="A")
    attempt = calculate_score(sample_test, responses, STARTED, STARTED)

    responses[0].choice_id = "B"

    assert attempt.responses[0].choice_id == "A"
    assert attempt.score == 2
