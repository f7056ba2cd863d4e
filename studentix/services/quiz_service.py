"""Service layer for quizzes and graded attempts."""
import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session as DbSession

from studentix.models.db.content import CourseSection
from studentix.models.db.quiz import Quiz, QuizResult
from studentix.models.quizzes import (
    QuizForEditing,
    QuizForTaking,
    QuizRequest,
    SubmissionRequest,
)
from studentix.services import quiz_codec
from studentix.services.outcomes import Failure, Outcome
from studentix.services.quiz_projection import project_for_editing, project_for_taking
from studentix.services.scoring import score_submission

logger = logging.getLogger(__name__)


def get_quiz(db: DbSession, test_id: int) -> Quiz | None:
    """Get quiz by ID."""
    return db.get(Quiz, test_id)


def create_quiz(db: DbSession, section_id: int, request: QuizRequest) -> Outcome[int]:
    """Create a quiz in a section and return its id."""
    if db.get(CourseSection, section_id) is None:
        return Outcome.fail(Failure.SECTION_NOT_FOUND)

    quiz = Quiz(
        section_id=section_id,
        title=request.title,
        max_score=request.maxScore,
        content_json=quiz_codec.encode(request.questions),
    )
    db.add(quiz)
    db.commit()
    db.refresh(quiz)
    logger.info(
        f"Created test {quiz.id} in section {section_id} "
        f"with {len(request.questions)} questions"
    )
    return Outcome.success(quiz.id)


def get_quiz_for_editing(db: DbSession, test_id: int) -> Outcome[QuizForEditing]:
    """Get quiz with correct answers."""
    quiz = get_quiz(db, test_id)
    if quiz is None:
        return Outcome.fail(Failure.TEST_NOT_FOUND)
    return Outcome.success(project_for_editing(quiz))


def get_quiz_for_taking(db: DbSession, test_id: int) -> Outcome[QuizForTaking]:
    """Get quiz without correct answers."""
    quiz = get_quiz(db, test_id)
    if quiz is None:
        return Outcome.fail(Failure.TEST_NOT_FOUND)
    return Outcome.success(project_for_taking(quiz))


def update_quiz(db: DbSession, test_id: int, request: QuizRequest) -> Outcome[bool]:
    """Replace title, max score and questions of a quiz."""
    quiz = get_quiz(db, test_id)
    if quiz is None:
        return Outcome.fail(Failure.TEST_NOT_FOUND)

    quiz.title = request.title
    quiz.max_score = request.maxScore
    quiz.content_json = quiz_codec.encode(request.questions)
    db.commit()
    logger.info(f"Updated test {test_id}")
    return Outcome.success(True)


def delete_quiz(db: DbSession, test_id: int) -> Outcome[bool]:
    """Delete a quiz and all results recorded for it."""
    quiz = get_quiz(db, test_id)
    if quiz is None:
        return Outcome.fail(Failure.TEST_NOT_FOUND)

    db.delete(quiz)
    db.commit()
    logger.info(f"Deleted test {test_id}")
    return Outcome.success(True)


def has_submitted(db: DbSession, test_id: int, student_id: int) -> bool:
    """Check if the student already has a result for the test."""
    stmt = select(QuizResult.id).where(
        QuizResult.test_id == test_id,
        QuizResult.student_id == student_id,
    )
    return db.execute(stmt).first() is not None


def submit_quiz(
    db: DbSession,
    test_id: int,
    student_id: int,
    submission: SubmissionRequest,
) -> Outcome[int]:
    """
    Grade a submission and record it as the student's only attempt.

    The duplicate check, grading and insert share the request's transaction.
    The (test_id, student_id) unique constraint catches a concurrent
    submission that passed the check at the same time.
    """
    if has_submitted(db, test_id, student_id):
        logger.warning(f"Student {student_id} tried to resubmit test {test_id}")
        return Outcome.fail(Failure.DUPLICATE_ATTEMPT)

    quiz = get_quiz(db, test_id)
    if quiz is None:
        return Outcome.fail(Failure.TEST_NOT_FOUND)

    questions = quiz_codec.decode(quiz.content_json)
    score = score_submission(questions, submission.answers, quiz.max_score)

    db.add(
        QuizResult(
            test_id=test_id,
            student_id=student_id,
            score=score,
            attempted_at=datetime.now(timezone.utc),
        )
    )
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning(
            f"Concurrent submission of test {test_id} by student {student_id} rejected"
        )
        return Outcome.fail(Failure.DUPLICATE_ATTEMPT)

    logger.info(
        f"Student {student_id} scored {score}/{quiz.max_score} on test {test_id}"
    )
    return Outcome.success(score)
