"""Ownership and enrollment checks along the content -> section -> course -> teacher chain."""

from sqlalchemy import exists, select
from sqlalchemy.orm import Session as DbSession

from studentix.models.db.content import CourseSection, Material, Task
from studentix.models.db.course import Course, Enrollment
from studentix.models.db.quiz import Quiz
from studentix.models.db.user import User, UserRole


def is_course_owner(db: DbSession, course_id: int, user_id: int) -> bool:
    """Check if user teaches the course."""
    stmt = select(
        exists().where(Course.id == course_id, Course.teacher_id == user_id)
    )
    return bool(db.execute(stmt).scalar())


def is_section_owner(db: DbSession, section_id: int, user_id: int) -> bool:
    """Check if user teaches the course the section belongs to."""
    stmt = (
        select(CourseSection.id)
        .join(Course, CourseSection.course_id == Course.id)
        .where(CourseSection.id == section_id, Course.teacher_id == user_id)
    )
    return db.execute(stmt).first() is not None


def is_test_owner(db: DbSession, test_id: int, user_id: int) -> bool:
    """Check if user owns the test via section -> course teacher."""
    stmt = (
        select(Quiz.id)
        .join(CourseSection, Quiz.section_id == CourseSection.id)
        .join(Course, CourseSection.course_id == Course.id)
        .where(Quiz.id == test_id, Course.teacher_id == user_id)
    )
    return db.execute(stmt).first() is not None


def is_task_owner(db: DbSession, task_id: int, user_id: int) -> bool:
    """Check if user owns the task via section -> course teacher."""
    stmt = (
        select(Task.id)
        .join(CourseSection, Task.section_id == CourseSection.id)
        .join(Course, CourseSection.course_id == Course.id)
        .where(Task.id == task_id, Course.teacher_id == user_id)
    )
    return db.execute(stmt).first() is not None


def is_material_owner(db: DbSession, material_id: int, user_id: int) -> bool:
    """Check if user owns the material via section -> course teacher."""
    stmt = (
        select(Material.id)
        .join(CourseSection, Material.section_id == CourseSection.id)
        .join(Course, CourseSection.course_id == Course.id)
        .where(Material.id == material_id, Course.teacher_id == user_id)
    )
    return db.execute(stmt).first() is not None


def is_student_enrolled(db: DbSession, course_id: int, student_id: int) -> bool:
    """Check enrollment using the (student_id, course_id) unique index."""
    stmt = select(
        exists().where(
            Enrollment.course_id == course_id,
            Enrollment.student_id == student_id,
        )
    )
    return bool(db.execute(stmt).scalar())


def find_course_id_for_test(db: DbSession, test_id: int) -> int | None:
    """Get the id of the course containing a test."""
    stmt = (
        select(CourseSection.course_id)
        .join(Quiz, Quiz.section_id == CourseSection.id)
        .where(Quiz.id == test_id)
    )
    return db.execute(stmt).scalar_one_or_none()


def is_admin(user: User) -> bool:
    return user.role == UserRole.ADMIN.value


def can_author(user: User, is_owner: bool) -> bool:
    """Authoring is allowed to admins and to the owning teacher.

    Students never author, even if an ownership row would say otherwise.
    """
    if is_admin(user):
        return True
    return user.role == UserRole.TEACHER.value and is_owner


def can_manage_course(db: DbSession, course_id: int, user: User) -> bool:
    return can_author(user, is_course_owner(db, course_id, user.id))


def can_manage_section(db: DbSession, section_id: int, user: User) -> bool:
    return can_author(user, is_section_owner(db, section_id, user.id))


def can_manage_test(db: DbSession, test_id: int, user: User) -> bool:
    return can_author(user, is_test_owner(db, test_id, user.id))


def can_manage_task(db: DbSession, task_id: int, user: User) -> bool:
    return can_author(user, is_task_owner(db, task_id, user.id))


def can_manage_material(db: DbSession, material_id: int, user: User) -> bool:
    return can_author(user, is_material_owner(db, material_id, user.id))


def can_view_course(db: DbSession, course_id: int, user: User) -> bool:
    """Admins see everything, teachers their courses, students their enrollments."""
    if is_admin(user):
        return True
    if user.role == UserRole.TEACHER.value:
        return is_course_owner(db, course_id, user.id)
    if user.role == UserRole.STUDENT.value:
        return is_student_enrolled(db, course_id, user.id)
    return False


def can_view_test_for_taking(db: DbSession, course_id: int, user: User) -> bool:
    """Enrolled students, the course owner and admins may open a test."""
    if is_admin(user):
        return True
    if is_student_enrolled(db, course_id, user.id):
        return True
    return is_course_owner(db, course_id, user.id)
