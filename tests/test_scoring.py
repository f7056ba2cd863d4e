import pytest

from studentix.models.quizzes import AnswerOption, AnswerSubmission, Question
from studentix.services.scoring import count_correct, score_submission


def _question(correct: int, option_count: int = 3) -> Question:
    return Question(
        text=f"Question with answer {correct}",
        options=[AnswerOption(text=str(i)) for i in range(option_count)],
        correctOptionIndex=correct,
    )


def _answers(*chosen: int) -> list[AnswerSubmission]:
    return [
        AnswerSubmission(questionIndex=index, chosenOptionIndex=option)
        for index, option in enumerate(chosen)
    ]


TWO_QUESTIONS = [_question(1), _question(0)]


@pytest.mark.parametrize(
    ("chosen", "expected"),
    [
        ((1, 0), 10),
        ((0, 1), 0),
        ((1, 1), 5),
    ],
)
def test_two_question_quiz_scores(chosen: tuple[int, ...], expected: int) -> None:
    assert score_submission(TWO_QUESTIONS, _answers(*chosen), 10) == expected


def test_empty_quiz_scores_zero() -> None:
    assert score_submission([], _answers(0, 1), 100) == 0


def test_no_answers_scores_zero() -> None:
    assert score_submission(TWO_QUESTIONS, [], 10) == 0


def test_score_is_floored() -> None:
    questions = [_question(0), _question(0), _question(0)]
    assert score_submission(questions, _answers(0), 10) == 3
    assert score_submission(questions, _answers(0, 0), 10) == 6
    assert score_submission(questions, _answers(0, 0, 0), 10) == 10


def test_zero_max_score_always_scores_zero() -> None:
    assert score_submission(TWO_QUESTIONS, _answers(1, 0), 0) == 0


def test_answers_outside_quiz_are_ignored() -> None:
    answers = [
        AnswerSubmission(questionIndex=7, chosenOptionIndex=0),
        AnswerSubmission(questionIndex=-1, chosenOptionIndex=1),
    ]
    assert count_correct(TWO_QUESTIONS, answers) == 0


def test_unknown_option_counts_as_wrong() -> None:
    assert count_correct(TWO_QUESTIONS, _answers(9, 0)) == 1


def test_repeated_question_keeps_last_answer() -> None:
    answers = [
        AnswerSubmission(questionIndex=0, chosenOptionIndex=1),
        AnswerSubmission(questionIndex=0, chosenOptionIndex=2),
    ]
    assert count_correct(TWO_QUESTIONS, answers) == 0


@pytest.mark.parametrize("max_score", [0, 1, 7, 10, 100])
@pytest.mark.parametrize("chosen", [(), (1,), (1, 0), (0, 1), (2, 2)])
def test_score_stays_within_bounds(max_score: int, chosen: tuple[int, ...]) -> None:
    score = score_submission(TWO_QUESTIONS, _answers(*chosen), max_score)
    assert 0 <= score <= max_score
