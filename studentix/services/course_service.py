"""Service layer for courses and enrollments."""
import logging
from datetime import datetime, timezone

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session as DbSession, joinedload

from studentix.models.courses import (
    CourseParticipantsResponse,
    CourseRequest,
    CourseResponse,
    ParticipantResponse,
)
from studentix.models.db.course import Course, Enrollment
from studentix.models.db.user import User, UserRole
from studentix.services.outcomes import Failure, Outcome
from studentix.services.ownership_service import is_student_enrolled

logger = logging.getLogger(__name__)


def course_to_response(course: Course) -> CourseResponse:
    """Convert Course model (with teacher loaded) to CourseResponse."""
    return CourseResponse(
        id=course.id,
        title=course.title,
        description=course.description,
        teacherId=course.teacher_id,
        teacherName=course.teacher.full_name,
        isActive=course.is_active,
        startDate=course.start_date,
        durationWeeks=course.duration_weeks,
    )


def participant_to_response(user: User) -> ParticipantResponse:
    return ParticipantResponse(
        id=user.id,
        email=user.email,
        fullName=user.full_name,
        role=UserRole(user.role),
    )


def create_course(
    db: DbSession, request: CourseRequest, creator_id: int, teacher_id: int | None = None
) -> Outcome[int]:
    """Create a course taught by ``teacher_id`` (the creator if not given)."""
    teacher_id = teacher_id if teacher_id is not None else creator_id
    teacher = db.get(User, teacher_id)
    if teacher is None:
        return Outcome.fail(Failure.USER_NOT_FOUND)

    course = Course(
        title=request.title,
        description=request.description,
        teacher_id=teacher_id,
        created_by=creator_id,
        start_date=request.startDate,
        duration_weeks=request.durationWeeks,
        is_active=True,
    )
    db.add(course)
    db.commit()
    db.refresh(course)
    logger.info(f"Created course {course.id} for teacher {teacher_id}")
    return Outcome.success(course.id)


def get_course(db: DbSession, course_id: int) -> Course | None:
    """Get course with teacher relationship loaded."""
    stmt = (
        select(Course)
        .options(joinedload(Course.teacher))
        .where(Course.id == course_id)
    )
    return db.execute(stmt).scalar_one_or_none()


def list_courses(
    db: DbSession,
    teacher_id: int | None = None,
    student_id: int | None = None,
) -> list[Course]:
    """List courses, optionally filtered by teacher or enrolled student."""
    stmt = select(Course).options(joinedload(Course.teacher)).order_by(Course.id)
    if teacher_id is not None:
        stmt = stmt.where(Course.teacher_id == teacher_id)
    if student_id is not None:
        stmt = stmt.join(Enrollment, Enrollment.course_id == Course.id).where(
            Enrollment.student_id == student_id
        )
    return list(db.execute(stmt).scalars().all())


def delete_course(db: DbSession, course_id: int) -> Outcome[bool]:
    """Delete a course with all its content, enrollments and results."""
    course = db.get(Course, course_id)
    if course is None:
        return Outcome.fail(Failure.COURSE_NOT_FOUND)

    db.delete(course)
    db.commit()
    logger.info(f"Deleted course {course_id}")
    return Outcome.success(True)


def enroll_student(db: DbSession, course_id: int, student_id: int) -> Outcome[bool]:
    """Enroll a student in an active course."""
    course = db.get(Course, course_id)
    if course is None or not course.is_active:
        return Outcome.fail(Failure.COURSE_NOT_FOUND)

    if is_student_enrolled(db, course_id, student_id):
        return Outcome.fail(Failure.ALREADY_ENROLLED)

    db.add(
        Enrollment(
            student_id=student_id,
            course_id=course_id,
            enrolled_at=datetime.now(timezone.utc),
        )
    )
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        return Outcome.fail(Failure.ALREADY_ENROLLED)
    logger.info(f"Student {student_id} enrolled in course {course_id}")
    return Outcome.success(True)


def unenroll_student(db: DbSession, course_id: int, student_id: int) -> bool:
    """Remove a student from a course."""
    result = db.execute(
        delete(Enrollment).where(
            Enrollment.course_id == course_id,
            Enrollment.student_id == student_id,
        )
    )
    db.commit()
    if result.rowcount:
        logger.info(f"Student {student_id} removed from course {course_id}")
    return result.rowcount > 0


def move_student(
    db: DbSession, source_course_id: int, target_course_id: int, student_id: int
) -> Outcome[bool]:
    """Move a student from one course to another in one transaction."""
    if db.get(Course, target_course_id) is None:
        return Outcome.fail(Failure.COURSE_NOT_FOUND)

    db.execute(
        delete(Enrollment).where(
            Enrollment.course_id == source_course_id,
            Enrollment.student_id == student_id,
        )
    )
    if not is_student_enrolled(db, target_course_id, student_id):
        db.add(
            Enrollment(
                student_id=student_id,
                course_id=target_course_id,
                enrolled_at=datetime.now(timezone.utc),
            )
        )
    db.commit()
    logger.info(
        f"Student {student_id} moved from course {source_course_id} to {target_course_id}"
    )
    return Outcome.success(True)


def get_participants(db: DbSession, course_id: int) -> Outcome[CourseParticipantsResponse]:
    """Get the teacher and enrolled students of a course."""
    course = get_course(db, course_id)
    if course is None:
        return Outcome.fail(Failure.COURSE_NOT_FOUND)

    students = db.execute(
        select(User)
        .join(Enrollment, Enrollment.student_id == User.id)
        .where(Enrollment.course_id == course_id)
        .order_by(User.id)
    ).scalars().all()

    return Outcome.success(
        CourseParticipantsResponse(
            courseId=course_id,
            teacher=participant_to_response(course.teacher),
            students=[participant_to_response(student) for student in students],
        )
    )
