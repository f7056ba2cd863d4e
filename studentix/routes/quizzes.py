"""Quiz authoring, taking and submission endpoints."""
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session as DbSession

from studentix.database import get_db
from studentix.dependencies import CurrentUser, forbid
from studentix.models.auth import MessageResponse
from studentix.models.courses import CreatedResponse
from studentix.models.quizzes import (
    QuizForEditing,
    QuizForTaking,
    QuizRequest,
    SubmissionRequest,
    SubmissionResponse,
)
from studentix.models.results import QuizResultRow
from studentix.services import ownership_service, quiz_service, results_service
from studentix.services.outcomes import Failure, unwrap

router = APIRouter(prefix="/api", tags=["tests"])


def _course_id_or_404(db: DbSession, test_id: int) -> int:
    course_id = ownership_service.find_course_id_for_test(db, test_id)
    if course_id is None:
        raise HTTPException(status_code=404, detail=Failure.TEST_NOT_FOUND.value)
    return course_id


@router.post(
    "/sections/{section_id}/tests",
    response_model=CreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_test(
    section_id: int,
    payload: QuizRequest,
    current_user: CurrentUser,
    db: Annotated[DbSession, Depends(get_db)],
) -> CreatedResponse:
    """Create a test in a section."""
    if not ownership_service.can_manage_section(db, section_id, current_user):
        raise forbid("You do not have permission to add tests to this section")

    test_id = unwrap(quiz_service.create_quiz(db, section_id, payload))
    return CreatedResponse(id=test_id)


@router.get("/tests/{test_id}/edit", response_model=QuizForEditing)
def get_test_for_editing(
    test_id: int,
    current_user: CurrentUser,
    db: Annotated[DbSession, Depends(get_db)],
) -> QuizForEditing:
    """Get a test including the correct answers."""
    if not ownership_service.can_manage_test(db, test_id, current_user):
        raise forbid("You do not have permission to edit this test")
    return unwrap(quiz_service.get_quiz_for_editing(db, test_id))


@router.put("/tests/{test_id}", response_model=MessageResponse)
def update_test(
    test_id: int,
    payload: QuizRequest,
    current_user: CurrentUser,
    db: Annotated[DbSession, Depends(get_db)],
) -> MessageResponse:
    """Replace the title, max score and questions of a test."""
    if not ownership_service.can_manage_test(db, test_id, current_user):
        raise forbid("You do not have permission to edit this test")

    unwrap(quiz_service.update_quiz(db, test_id, payload))
    return MessageResponse(message="Test updated")


@router.delete("/tests/{test_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_test(
    test_id: int,
    current_user: CurrentUser,
    db: Annotated[DbSession, Depends(get_db)],
) -> Response:
    """Delete a test and its results."""
    if not ownership_service.can_manage_test(db, test_id, current_user):
        raise forbid("You do not have permission to delete this test")

    unwrap(quiz_service.delete_quiz(db, test_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/tests/{test_id}", response_model=QuizForTaking)
def get_test_for_taking(
    test_id: int,
    current_user: CurrentUser,
    db: Annotated[DbSession, Depends(get_db)],
) -> QuizForTaking:
    """Get a test without its correct answers."""
    course_id = _course_id_or_404(db, test_id)
    if not ownership_service.can_view_test_for_taking(db, course_id, current_user):
        raise forbid("You are not enrolled in this course")
    return unwrap(quiz_service.get_quiz_for_taking(db, test_id))


@router.post("/tests/{test_id}/submit", response_model=SubmissionResponse)
def submit_test(
    test_id: int,
    payload: SubmissionRequest,
    current_user: CurrentUser,
    db: Annotated[DbSession, Depends(get_db)],
) -> SubmissionResponse:
    """Grade and record the caller's only attempt at a test."""
    course_id = _course_id_or_404(db, test_id)
    if not ownership_service.is_student_enrolled(db, course_id, current_user.id):
        raise forbid("You are not enrolled in this course")

    score = unwrap(quiz_service.submit_quiz(db, test_id, current_user.id, payload))
    return SubmissionResponse(message="Test submitted successfully", score=score)


@router.get("/tests/{test_id}/results", response_model=list[QuizResultRow])
def get_test_results(
    test_id: int,
    current_user: CurrentUser,
    db: Annotated[DbSession, Depends(get_db)],
) -> list[QuizResultRow]:
    """Results of all students for one test."""
    if not ownership_service.can_manage_test(db, test_id, current_user):
        raise forbid("You do not have permission to view these results")
    return results_service.get_results_for_test(db, test_id)
