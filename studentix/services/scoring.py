"""Grading of a submission against a quiz."""
from collections.abc import Iterable

from studentix.models.quizzes import AnswerSubmission, Question


def count_correct(
    questions: list[Question], answers: Iterable[AnswerSubmission]
) -> int:
    """Count questions whose chosen option is the correct one.

    Answers are keyed by ``questionIndex`` (a repeated index keeps the last
    answer); answers for indices outside the quiz are ignored.
    """
    chosen = {answer.questionIndex: answer.chosenOptionIndex for answer in answers}
    correct = 0
    for index, question in enumerate(questions):
        if chosen.get(index) == question.correctOptionIndex:
            correct += 1
    return correct


def score_submission(
    questions: list[Question],
    answers: Iterable[AnswerSubmission],
    max_score: int,
) -> int:
    """Score as ``floor(correct / total * max_score)``, 0 for an empty quiz."""
    total = len(questions)
    if total == 0:
        return 0
    # Integer arithmetic gives the exact floor without float rounding
    return count_correct(questions, answers) * max_score // total
