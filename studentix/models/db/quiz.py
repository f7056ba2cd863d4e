"""
Quiz and QuizResult database models.
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


class Quiz(Base):
    """
    Multiple-choice test attached to a course section.
    Questions are stored as encoded text, see ``services.quiz_codec``.
    """

    __tablename__ = "tests"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    section_id: Mapped[int] = mapped_column(
        ForeignKey("course_sections.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content_json: Mapped[str] = mapped_column(Text, nullable=False)
    max_score: Mapped[int] = mapped_column(nullable=False)

    # Relationships
    section: Mapped["CourseSection"] = relationship("CourseSection", back_populates="quizzes")
    results: Mapped[list["QuizResult"]] = relationship(
        "QuizResult", back_populates="quiz", cascade="all, delete-orphan"
    )


class QuizResult(Base):
    """
    The single graded attempt of one student at one quiz.
    Written once on submission and never updated.
    """

    __tablename__ = "test_results"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    test_id: Mapped[int] = mapped_column(
        ForeignKey("tests.id", ondelete="CASCADE"), nullable=False, index=True
    )
    student_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    score: Mapped[int] = mapped_column(nullable=False)
    attempted_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint("test_id", "student_id", name="uq_test_result_student"),
    )

    # Relationships
    quiz: Mapped["Quiz"] = relationship("Quiz", back_populates="results")
    student: Mapped["User"] = relationship("User")
