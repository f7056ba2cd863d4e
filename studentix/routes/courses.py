"""Course and enrollment endpoints."""
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session as DbSession

from studentix.database import get_db
from studentix.dependencies import AdminUser, CurrentUser, StaffUser, forbid
from studentix.models.auth import MessageResponse
from studentix.models.courses import (
    CourseRequest,
    CourseResponse,
    CourseWithContentResponse,
    CreatedResponse,
    MoveStudentRequest,
)
from studentix.models.db.user import UserRole
from studentix.services import course_service, ownership_service
from studentix.services.content_service import get_course_content
from studentix.services.outcomes import unwrap

router = APIRouter(prefix="/api/courses", tags=["courses"])


@router.post("", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
def create_course(
    payload: CourseRequest,
    current_user: StaffUser,
    db: Annotated[DbSession, Depends(get_db)],
) -> CreatedResponse:
    """Create a new course. Admins may assign it to another teacher."""
    teacher_id = payload.teacherId if ownership_service.is_admin(current_user) else None
    course_id = unwrap(
        course_service.create_course(db, payload, current_user.id, teacher_id)
    )
    return CreatedResponse(id=course_id)


@router.get("", response_model=list[CourseResponse])
def list_courses(
    current_user: CurrentUser,
    db: Annotated[DbSession, Depends(get_db)],
) -> list[CourseResponse]:
    """List the courses relevant to the caller's role."""
    if current_user.role == UserRole.ADMIN.value:
        courses = course_service.list_courses(db)
    elif current_user.role == UserRole.TEACHER.value:
        courses = course_service.list_courses(db, teacher_id=current_user.id)
    elif current_user.role == UserRole.STUDENT.value:
        courses = course_service.list_courses(db, student_id=current_user.id)
    else:
        courses = []
    return [course_service.course_to_response(course) for course in courses]


@router.get("/{course_id}", response_model=CourseWithContentResponse)
def get_course(
    course_id: int,
    current_user: CurrentUser,
    db: Annotated[DbSession, Depends(get_db)],
) -> CourseWithContentResponse:
    """Get a course with its sections and their content."""
    course = course_service.get_course(db, course_id)
    if course is None:
        raise HTTPException(status_code=404, detail="Course not found")

    if not ownership_service.can_view_course(db, course_id, current_user):
        raise forbid("Access denied to this course detail")

    return CourseWithContentResponse(
        **course_service.course_to_response(course).model_dump(),
        sections=get_course_content(db, course_id),
    )


@router.delete("/{course_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_course(
    course_id: int,
    current_user: CurrentUser,
    db: Annotated[DbSession, Depends(get_db)],
) -> Response:
    """Delete a course (owner or admin)."""
    if not ownership_service.can_manage_course(db, course_id, current_user):
        raise forbid("You do not have permission to delete this course")

    unwrap(course_service.delete_course(db, course_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{course_id}/enroll", response_model=MessageResponse)
def enroll(
    course_id: int,
    current_user: CurrentUser,
    db: Annotated[DbSession, Depends(get_db)],
) -> MessageResponse:
    """Enroll the calling student in a course."""
    if current_user.role != UserRole.STUDENT.value:
        raise forbid("Only students can enroll in courses")

    unwrap(course_service.enroll_student(db, course_id, current_user.id))
    return MessageResponse(message="Enrolled successfully")


@router.delete("/{course_id}/students/{student_id}", status_code=status.HTTP_204_NO_CONTENT)
def unenroll(
    course_id: int,
    student_id: int,
    current_user: CurrentUser,
    db: Annotated[DbSession, Depends(get_db)],
) -> Response:
    """Remove a student from a course (owner or admin)."""
    if not ownership_service.can_manage_course(db, course_id, current_user):
        raise forbid()

    if not course_service.unenroll_student(db, course_id, student_id):
        raise HTTPException(status_code=404, detail="Enrollment not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{course_id}/students/{student_id}/move", response_model=MessageResponse)
def move_student(
    course_id: int,
    student_id: int,
    payload: MoveStudentRequest,
    current_user: AdminUser,
    db: Annotated[DbSession, Depends(get_db)],
) -> MessageResponse:
    """Move a student to another course."""
    if not ownership_service.is_student_enrolled(db, course_id, student_id):
        raise HTTPException(status_code=404, detail="Enrollment not found")

    unwrap(course_service.move_student(db, course_id, payload.targetCourseId, student_id))
    return MessageResponse(message=f"Student {student_id} moved to course {payload.targetCourseId}")
