"""Database models."""
from studentix.models.db.user import User, Session, UserRole
from studentix.models.db.course import Course, Enrollment
from studentix.models.db.content import CourseSection, Material, MaterialType, Task
from studentix.models.db.quiz import Quiz, QuizResult

__all__ = [
    "User",
    "Session",
    "UserRole",
    "Course",
    "Enrollment",
    "CourseSection",
    "Material",
    "MaterialType",
    "Task",
    "Quiz",
    "QuizResult",
]
