"""Quiz result report models."""
from datetime import datetime

from pydantic import BaseModel


class StudentResultResponse(BaseModel):
    """One of the caller's own results."""

    testId: int
    testTitle: str
    courseId: int
    courseTitle: str
    score: int
    maxScore: int
    attemptedAt: datetime


class QuizResultRow(BaseModel):
    """One student's result, as seen by the course owner."""

    studentId: int
    studentName: str
    studentEmail: str
    testId: int
    testTitle: str
    score: int
    maxScore: int
    percentage: int
    attemptedAt: datetime
