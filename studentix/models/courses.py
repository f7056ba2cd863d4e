"""Course, enrollment and report Pydantic models."""
from datetime import datetime

from pydantic import BaseModel, Field

from studentix.models.content import SectionWithContentResponse
from studentix.models.db.user import UserRole


class CourseRequest(BaseModel):
    """Model for creating a new course."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    startDate: datetime
    durationWeeks: int = Field(..., ge=1)
    # Only honoured for admins; teachers always own what they create
    teacherId: int | None = None


class CourseResponse(BaseModel):
    id: int
    title: str
    description: str
    teacherId: int
    teacherName: str
    isActive: bool
    startDate: datetime
    durationWeeks: int


class CourseWithContentResponse(CourseResponse):
    sections: list[SectionWithContentResponse] = Field(default_factory=list)


class CreatedResponse(BaseModel):
    id: int


class MoveStudentRequest(BaseModel):
    targetCourseId: int


class ParticipantResponse(BaseModel):
    id: int
    email: str
    fullName: str
    role: UserRole


class CourseParticipantsResponse(BaseModel):
    courseId: int
    teacher: ParticipantResponse
    students: list[ParticipantResponse]
