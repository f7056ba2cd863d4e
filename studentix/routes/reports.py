"""Results and admin reports."""
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session as DbSession

from studentix.database import get_db
from studentix.dependencies import AdminUser, CurrentUser, forbid
from studentix.models.auth import UserResponse
from studentix.models.courses import CourseParticipantsResponse, CourseResponse
from studentix.models.db.user import User, UserRole
from studentix.models.results import QuizResultRow, StudentResultResponse
from studentix.services import course_service, ownership_service, results_service, user_service
from studentix.services.outcomes import unwrap

router = APIRouter(prefix="/api", tags=["reports"])


@router.get("/me/results", response_model=list[StudentResultResponse])
def get_my_results(
    current_user: CurrentUser,
    db: Annotated[DbSession, Depends(get_db)],
) -> list[StudentResultResponse]:
    """The caller's own test results."""
    return results_service.get_results_for_student(db, current_user.id)


@router.get("/courses/{course_id}/results", response_model=list[QuizResultRow])
def get_course_results(
    course_id: int,
    current_user: CurrentUser,
    db: Annotated[DbSession, Depends(get_db)],
) -> list[QuizResultRow]:
    """Results of every test in a course."""
    if not ownership_service.can_manage_course(db, course_id, current_user):
        raise forbid("You do not have permission to view these results")
    return results_service.get_results_for_course(db, course_id)


# Admin reports


def _user_with_role_or_404(db: DbSession, user_id: int, role: UserRole) -> User:
    user = db.get(User, user_id)
    if user is None or user.role != role.value:
        raise HTTPException(status_code=404, detail=f"{role.value.capitalize()} not found")
    return user


@router.get("/reports/teachers", response_model=list[UserResponse])
def report_teachers(
    current_user: AdminUser,
    db: Annotated[DbSession, Depends(get_db)],
) -> list[UserResponse]:
    return [
        user_service.user_to_response(user)
        for user in user_service.list_users(db, role=UserRole.TEACHER)
    ]


@router.get("/reports/students", response_model=list[UserResponse])
def report_students(
    current_user: AdminUser,
    db: Annotated[DbSession, Depends(get_db)],
) -> list[UserResponse]:
    return [
        user_service.user_to_response(user)
        for user in user_service.list_users(db, role=UserRole.STUDENT)
    ]


@router.get("/reports/courses", response_model=list[CourseResponse])
def report_courses(
    current_user: AdminUser,
    db: Annotated[DbSession, Depends(get_db)],
) -> list[CourseResponse]:
    return [course_service.course_to_response(c) for c in course_service.list_courses(db)]


@router.get("/reports/teachers/{teacher_id}/courses", response_model=list[CourseResponse])
def report_teacher_courses(
    teacher_id: int,
    current_user: AdminUser,
    db: Annotated[DbSession, Depends(get_db)],
) -> list[CourseResponse]:
    """Courses taught by one teacher."""
    _user_with_role_or_404(db, teacher_id, UserRole.TEACHER)
    return [
        course_service.course_to_response(c)
        for c in course_service.list_courses(db, teacher_id=teacher_id)
    ]


@router.get("/reports/students/{student_id}/courses", response_model=list[CourseResponse])
def report_student_courses(
    student_id: int,
    current_user: AdminUser,
    db: Annotated[DbSession, Depends(get_db)],
) -> list[CourseResponse]:
    """Courses a student is enrolled in."""
    _user_with_role_or_404(db, student_id, UserRole.STUDENT)
    return [
        course_service.course_to_response(c)
        for c in course_service.list_courses(db, student_id=student_id)
    ]


@router.get(
    "/reports/courses/{course_id}/participants",
    response_model=CourseParticipantsResponse,
)
def report_course_participants(
    course_id: int,
    current_user: AdminUser,
    db: Annotated[DbSession, Depends(get_db)],
) -> CourseParticipantsResponse:
    return unwrap(course_service.get_participants(db, course_id))
