"""
Course section, task and material database models.
"""

from __future__ import annotations

import enum
from datetime import datetime
from typing import TYPE_CHECKING

import sqlalchemy as sa
from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from studentix.database import Base

if TYPE_CHECKING:
    from studentix.models.db.course import Course
    from studentix.models.db.quiz import Quiz


class MaterialType(str, enum.Enum):
    """Kind of learning material attached to a section."""

    VIDEO = "VIDEO"
    PDF = "PDF"
    LINK = "LINK"
    DOCUMENT = "DOCUMENT"
    OTHER = "OTHER"


class CourseSection(Base):
    """
    One block of a course (usually a week).
    Sections are listed by ``sort_order``.
    """

    __tablename__ = "course_sections"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    course_id: Mapped[int] = mapped_column(
        ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True
    )
    week_number: Mapped[int] = mapped_column(nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(String(1000), nullable=False, default="")
    url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    sort_order: Mapped[int] = mapped_column(default=0, nullable=False)

    # Relationships
    course: Mapped["Course"] = relationship("Course", back_populates="sections")
    tasks: Mapped[list["Task"]] = relationship(
        "Task", back_populates="section", cascade="all, delete-orphan"
    )
    materials: Mapped[list["Material"]] = relationship(
        "Material", back_populates="section", cascade="all, delete-orphan"
    )
    quizzes: Mapped[list["Quiz"]] = relationship(
        "Quiz", back_populates="section", cascade="all, delete-orphan"
    )


class Task(Base):
    """Assignment with a due date."""

    __tablename__ = "tasks"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    section_id: Mapped[int] = mapped_column(
        ForeignKey("course_sections.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    due_date: Mapped[datetime] = mapped_column(sa.DateTime(timezone=True), nullable=False)

    section: Mapped["CourseSection"] = relationship("CourseSection", back_populates="tasks")


class Material(Base):
    """Link to a video, document or other resource."""

    __tablename__ = "materials"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    section_id: Mapped[int] = mapped_column(
        ForeignKey("course_sections.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    url: Mapped[str] = mapped_column(String(500), nullable=False)
    type: Mapped[str] = mapped_column(
        String(50), default=MaterialType.OTHER.value, nullable=False
    )
    is_visible: Mapped[bool] = mapped_column(default=True, nullable=False)

    section: Mapped["CourseSection"] = relationship("CourseSection", back_populates="materials")
