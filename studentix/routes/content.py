"""Course sections, tasks and materials."""
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session as DbSession

from studentix.database import get_db
from studentix.dependencies import CurrentUser, forbid
from studentix.models.auth import MessageResponse
from studentix.models.content import (
    MaterialRequest,
    MaterialResponse,
    SectionRequest,
    TaskRequest,
    TaskResponse,
)
from studentix.models.courses import CreatedResponse
from studentix.services import content_service, ownership_service
from studentix.services.outcomes import unwrap

router = APIRouter(prefix="/api", tags=["content"])


@router.post(
    "/courses/{course_id}/sections",
    response_model=CreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_section(
    course_id: int,
    payload: SectionRequest,
    current_user: CurrentUser,
    db: Annotated[DbSession, Depends(get_db)],
) -> CreatedResponse:
    if not ownership_service.can_manage_course(db, course_id, current_user):
        raise forbid("You do not have permission to edit this course")

    section_id = unwrap(content_service.create_section(db, course_id, payload))
    return CreatedResponse(id=section_id)


# Tasks


@router.post(
    "/sections/{section_id}/tasks",
    response_model=CreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_task(
    section_id: int,
    payload: TaskRequest,
    current_user: CurrentUser,
    db: Annotated[DbSession, Depends(get_db)],
) -> CreatedResponse:
    if not ownership_service.can_manage_section(db, section_id, current_user):
        raise forbid("You do not have permission to edit this section")

    task_id = unwrap(content_service.create_task(db, section_id, payload))
    return CreatedResponse(id=task_id)


@router.get("/tasks/{task_id}", response_model=TaskResponse)
def get_task(
    task_id: int,
    current_user: CurrentUser,
    db: Annotated[DbSession, Depends(get_db)],
) -> TaskResponse:
    if not ownership_service.can_manage_task(db, task_id, current_user):
        raise forbid()
    return unwrap(content_service.get_task(db, task_id))


@router.put("/tasks/{task_id}", response_model=MessageResponse)
def update_task(
    task_id: int,
    payload: TaskRequest,
    current_user: CurrentUser,
    db: Annotated[DbSession, Depends(get_db)],
) -> MessageResponse:
    if not ownership_service.can_manage_task(db, task_id, current_user):
        raise forbid()

    unwrap(content_service.update_task(db, task_id, payload))
    return MessageResponse(message="Task updated")


@router.delete("/tasks/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: int,
    current_user: CurrentUser,
    db: Annotated[DbSession, Depends(get_db)],
) -> Response:
    if not ownership_service.can_manage_task(db, task_id, current_user):
        raise forbid()

    unwrap(content_service.delete_task(db, task_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Materials


@router.post(
    "/sections/{section_id}/materials",
    response_model=CreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_material(
    section_id: int,
    payload: MaterialRequest,
    current_user: CurrentUser,
    db: Annotated[DbSession, Depends(get_db)],
) -> CreatedResponse:
    if not ownership_service.can_manage_section(db, section_id, current_user):
        raise forbid("You do not have permission to edit this section")

    material_id = unwrap(content_service.create_material(db, section_id, payload))
    return CreatedResponse(id=material_id)


@router.get("/materials/{material_id}", response_model=MaterialResponse)
def get_material(
    material_id: int,
    current_user: CurrentUser,
    db: Annotated[DbSession, Depends(get_db)],
) -> MaterialResponse:
    if not ownership_service.can_manage_material(db, material_id, current_user):
        raise forbid()
    return unwrap(content_service.get_material(db, material_id))


@router.put("/materials/{material_id}", response_model=MessageResponse)
def update_material(
    material_id: int,
    payload: MaterialRequest,
    current_user: CurrentUser,
    db: Annotated[DbSession, Depends(get_db)],
) -> MessageResponse:
    if not ownership_service.can_manage_material(db, material_id, current_user):
        raise forbid()

    unwrap(content_service.update_material(db, material_id, payload))
    return MessageResponse(message="Material updated")


@router.delete("/materials/{material_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_material(
    material_id: int,
    current_user: CurrentUser,
    db: Annotated[DbSession, Depends(get_db)],
) -> Response:
    if not ownership_service.can_manage_material(db, material_id, current_user):
        raise forbid()

    unwrap(content_service.delete_material(db, material_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
