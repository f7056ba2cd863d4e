"""
Course and Enrollment database models.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING

import sqlalchemy as sa
from sqlalchemy import ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from studentix.database import Base

if TYPE_CHECKING:
    from studentix.models.db.content import CourseSection
    from studentix.models.db.user import User


class Course(Base):
    """
    A course taught by one teacher.
    Everything authored inside it is owned through ``teacher_id``.
    """

    __tablename__ = "courses"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    teacher_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    created_by: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="RESTRICT"), nullable=False
    )
    is_active: Mapped[bool] = mapped_column(default=True, nullable=False)
    start_date: Mapped[datetime] = mapped_column(sa.DateTime(timezone=True), nullable=False)
    duration_weeks: Mapped[int] = mapped_column(nullable=False)

    # Relationships
    teacher: Mapped["User"] = relationship(
        "User", back_populates="taught_courses", foreign_keys=[teacher_id]
    )
    creator: Mapped["User"] = relationship("User", foreign_keys=[created_by])
    sections: Mapped[list["CourseSection"]] = relationship(
        "CourseSection", back_populates="course", cascade="all, delete-orphan"
    )
    enrollments: Mapped[list["Enrollment"]] = relationship(
        "Enrollment", back_populates="course", cascade="all, delete-orphan"
    )


class Enrollment(Base):
    """
    Membership of a student in a course.
    Governs who may view and take the course's tests.
    """

    __tablename__ = "enrollments"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    student_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    course_id: Mapped[int] = mapped_column(
        ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True
    )
    enrolled_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint("student_id", "course_id", name="uq_enrollment_student_course"),
    )

    # Relationships
    student: Mapped["User"] = relationship("User", back_populates="enrollments")
    course: Mapped["Course"] = relationship("Course", back_populates="enrollments")
