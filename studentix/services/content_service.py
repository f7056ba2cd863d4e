"""Service layer for course sections, tasks and materials."""
import logging
from collections import defaultdict

from sqlalchemy import select
from sqlalchemy.orm import Session as DbSession

from studentix.models.content import (
    MaterialRequest,
    MaterialResponse,
    SectionRequest,
    SectionResponse,
    SectionWithContentResponse,
    TaskRequest,
    TaskResponse,
)
from studentix.models.db.content import CourseSection, Material, MaterialType, Task
from studentix.models.db.course import Course
from studentix.models.db.quiz import Quiz
from studentix.services.outcomes import Failure, Outcome
from studentix.services.quiz_projection import project_summary

logger = logging.getLogger(__name__)


def section_to_response(section: CourseSection) -> SectionResponse:
    return SectionResponse(
        id=section.id,
        courseId=section.course_id,
        weekNumber=section.week_number,
        title=section.title,
        description=section.description,
        url=section.url,
        sortOrder=section.sort_order,
    )


def task_to_response(task: Task) -> TaskResponse:
    return TaskResponse(
        id=task.id,
        sectionId=task.section_id,
        title=task.title,
        description=task.description,
        dueDate=task.due_date,
    )


def material_to_response(material: Material) -> MaterialResponse:
    return MaterialResponse(
        id=material.id,
        sectionId=material.section_id,
        title=material.title,
        url=material.url,
        type=MaterialType(material.type),
        isVisible=material.is_visible,
    )


# Sections


def create_section(db: DbSession, course_id: int, request: SectionRequest) -> Outcome[int]:
    """Add a section to a course."""
    if db.get(Course, course_id) is None:
        return Outcome.fail(Failure.COURSE_NOT_FOUND)

    section = CourseSection(
        course_id=course_id,
        week_number=request.weekNumber,
        title=request.title,
        description=request.description,
        url=request.url,
        sort_order=request.sortOrder,
    )
    db.add(section)
    db.commit()
    db.refresh(section)
    return Outcome.success(section.id)


def get_course_content(db: DbSession, course_id: int) -> list[SectionWithContentResponse]:
    """
    Get all sections of a course with their tasks, materials and tests.

    Children are fetched with one query per kind over all section ids.
    """
    sections = db.execute(
        select(CourseSection)
        .where(CourseSection.course_id == course_id)
        .order_by(CourseSection.sort_order, CourseSection.id)
    ).scalars().all()

    if not sections:
        return []

    section_ids = [section.id for section in sections]

    tasks_by_section: dict[int, list[TaskResponse]] = defaultdict(list)
    for task in db.execute(
        select(Task).where(Task.section_id.in_(section_ids)).order_by(Task.id)
    ).scalars():
        tasks_by_section[task.section_id].append(task_to_response(task))

    materials_by_section: dict[int, list[MaterialResponse]] = defaultdict(list)
    for material in db.execute(
        select(Material).where(Material.section_id.in_(section_ids)).order_by(Material.id)
    ).scalars():
        materials_by_section[material.section_id].append(material_to_response(material))

    tests_by_section = defaultdict(list)
    for quiz in db.execute(
        select(Quiz).where(Quiz.section_id.in_(section_ids)).order_by(Quiz.id)
    ).scalars():
        tests_by_section[quiz.section_id].append(project_summary(quiz))

    return [
        SectionWithContentResponse(
            **section_to_response(section).model_dump(),
            tasks=tasks_by_section[section.id],
            materials=materials_by_section[section.id],
            tests=tests_by_section[section.id],
        )
        for section in sections
    ]


# Tasks


def create_task(db: DbSession, section_id: int, request: TaskRequest) -> Outcome[int]:
    if db.get(CourseSection, section_id) is None:
        return Outcome.fail(Failure.SECTION_NOT_FOUND)

    task = Task(
        section_id=section_id,
        title=request.title,
        description=request.description,
        due_date=request.dueDate,
    )
    db.add(task)
    db.commit()
    db.refresh(task)
    return Outcome.success(task.id)


def get_task(db: DbSession, task_id: int) -> Outcome[TaskResponse]:
    task = db.get(Task, task_id)
    if task is None:
        return Outcome.fail(Failure.TASK_NOT_FOUND)
    return Outcome.success(task_to_response(task))


def update_task(db: DbSession, task_id: int, request: TaskRequest) -> Outcome[bool]:
    task = db.get(Task, task_id)
    if task is None:
        return Outcome.fail(Failure.TASK_NOT_FOUND)

    task.title = request.title
    task.description = request.description
    task.due_date = request.dueDate
    db.commit()
    return Outcome.success(True)


def delete_task(db: DbSession, task_id: int) -> Outcome[bool]:
    task = db.get(Task, task_id)
    if task is None:
        return Outcome.fail(Failure.TASK_NOT_FOUND)

    db.delete(task)
    db.commit()
    logger.info(f"Deleted task {task_id}")
    return Outcome.success(True)


# Materials


def create_material(db: DbSession, section_id: int, request: MaterialRequest) -> Outcome[int]:
    if db.get(CourseSection, section_id) is None:
        return Outcome.fail(Failure.SECTION_NOT_FOUND)

    material = Material(
        section_id=section_id,
        title=request.title,
        url=request.url,
        type=request.type.value,
        is_visible=request.isVisible,
    )
    db.add(material)
    db.commit()
    db.refresh(material)
    return Outcome.success(material.id)


def get_material(db: DbSession, material_id: int) -> Outcome[MaterialResponse]:
    material = db.get(Material, material_id)
    if material is None:
        return Outcome.fail(Failure.MATERIAL_NOT_FOUND)
    return Outcome.success(material_to_response(material))


def update_material(db: DbSession, material_id: int, request: MaterialRequest) -> Outcome[bool]:
    material = db.get(Material, material_id)
    if material is None:
        return Outcome.fail(Failure.MATERIAL_NOT_FOUND)

    material.title = request.title
    material.url = request.url
    material.type = request.type.value
    material.is_visible = request.isVisible
    db.commit()
    return Outcome.success(True)


def delete_material(db: DbSession, material_id: int) -> Outcome[bool]:
    material = db.get(Material, material_id)
    if material is None:
        return Outcome.fail(Failure.MATERIAL_NOT_FOUND)

    db.delete(material)
    db.commit()
    logger.info(f"Deleted material {material_id}")
    return Outcome.success(True)
