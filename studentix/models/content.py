"""Course content Pydantic models."""
from datetime import datetime

from pydantic import BaseModel, Field

from studentix.models.db.content import MaterialType
from studentix.models.quizzes import QuizSummary


class SectionRequest(BaseModel):
    weekNumber: int = Field(..., ge=0)
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field("", max_length=1000)
    url: str | None = Field(None, max_length=500)
    sortOrder: int = 0


class SectionResponse(BaseModel):
    id: int
    courseId: int
    weekNumber: int
    title: str
    description: str
    url: str | None = None
    sortOrder: int


class TaskRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    dueDate: datetime


class TaskResponse(BaseModel):
    id: int
    sectionId: int
    title: str
    description: str
    dueDate: datetime


class MaterialRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    url: str = Field(..., min_length=1, max_length=500)
    type: MaterialType
    isVisible: bool = True


class MaterialResponse(BaseModel):
    id: int
    sectionId: int
    title: str
    url: str
    type: MaterialType
    isVisible: bool


class SectionWithContentResponse(SectionResponse):
    """Section with everything attached to it."""

    tasks: list[TaskResponse] = Field(default_factory=list)
    materials: list[MaterialResponse] = Field(default_factory=list)
    tests: list[QuizSummary] = Field(default_factory=list)
