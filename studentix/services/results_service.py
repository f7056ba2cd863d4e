"""Quiz result reports."""
from sqlalchemy import select
from sqlalchemy.orm import Session as DbSession

from studentix.models.db.content import CourseSection
from studentix.models.db.course import Course
from studentix.models.db.quiz import Quiz, QuizResult
from studentix.models.db.user import User
from studentix.models.results import QuizResultRow, StudentResultResponse


def percentage(score: int, max_score: int) -> int:
    """Whole-number percentage, 0 for a quiz worth nothing."""
    if max_score <= 0:
        return 0
    return score * 100 // max_score


def get_results_for_student(db: DbSession, student_id: int) -> list[StudentResultResponse]:
    """Results of one student: result -> test -> section -> course."""
    stmt = (
        select(
            QuizResult.test_id,
            QuizResult.score,
            QuizResult.attempted_at,
            Quiz.title,
            Quiz.max_score,
            Course.id,
            Course.title,
        )
        .join(Quiz, QuizResult.test_id == Quiz.id)
        .join(CourseSection, Quiz.section_id == CourseSection.id)
        .join(Course, CourseSection.course_id == Course.id)
        .where(QuizResult.student_id == student_id)
        .order_by(QuizResult.attempted_at, QuizResult.id)
    )
    return [
        StudentResultResponse(
            testId=test_id,
            testTitle=test_title,
            courseId=course_id,
            courseTitle=course_title,
            score=score,
            maxScore=max_score,
            attemptedAt=attempted_at,
        )
        for (
            test_id,
            score,
            attempted_at,
            test_title,
            max_score,
            course_id,
            course_title,
        ) in db.execute(stmt).all()
    ]


def _student_results_query():
    return (
        select(
            QuizResult.student_id,
            User.full_name,
            User.email,
            QuizResult.test_id,
            Quiz.title,
            QuizResult.score,
            Quiz.max_score,
            QuizResult.attempted_at,
        )
        .join(Quiz, QuizResult.test_id == Quiz.id)
        .join(User, QuizResult.student_id == User.id)
    )


def _to_rows(db: DbSession, stmt) -> list[QuizResultRow]:
    return [
        QuizResultRow(
            studentId=student_id,
            studentName=full_name,
            studentEmail=email,
            testId=test_id,
            testTitle=test_title,
            score=score,
            maxScore=max_score,
            percentage=percentage(score, max_score),
            attemptedAt=attempted_at,
        )
        for (
            student_id,
            full_name,
            email,
            test_id,
            test_title,
            score,
            max_score,
            attempted_at,
        ) in db.execute(stmt).all()
    ]


def get_results_for_course(db: DbSession, course_id: int) -> list[QuizResultRow]:
    """All results of all tests in a course."""
    stmt = (
        _student_results_query()
        .join(CourseSection, Quiz.section_id == CourseSection.id)
        .where(CourseSection.course_id == course_id)
        .order_by(QuizResult.test_id, QuizResult.student_id)
    )
    return _to_rows(db, stmt)


def get_results_for_test(db: DbSession, test_id: int) -> list[QuizResultRow]:
    """All results of one test."""
    stmt = (
        _student_results_query()
        .where(QuizResult.test_id == test_id)
        .order_by(QuizResult.student_id)
    )
    return _to_rows(db, stmt)
