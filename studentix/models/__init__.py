"""Pydantic models."""
from studentix.models.auth import (
    AdminUserUpdateRequest,
    AuthResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    UserResponse,
)
from studentix.models.content import (
    MaterialRequest,
    MaterialResponse,
    SectionRequest,
    SectionResponse,
    SectionWithContentResponse,
    TaskRequest,
    TaskResponse,
)
from studentix.models.courses import (
    CourseParticipantsResponse,
    CourseRequest,
    CourseResponse,
    CourseWithContentResponse,
    CreatedResponse,
    MoveStudentRequest,
    ParticipantResponse,
)
from studentix.models.quizzes import (
    AnswerOption,
    AnswerSubmission,
    Question,
    QuestionForTaking,
    QuizForEditing,
    QuizForTaking,
    QuizRequest,
    QuizSummary,
    SubmissionRequest,
    SubmissionResponse,
)
from studentix.models.results import QuizResultRow, StudentResultResponse

__all__ = [
    "AdminUserUpdateRequest",
    "AuthResponse",
    "LoginRequest",
    "MessageResponse",
    "RegisterRequest",
    "UserResponse",
    "MaterialRequest",
    "MaterialResponse",
    "SectionRequest",
    "SectionResponse",
    "SectionWithContentResponse",
    "TaskRequest",
    "TaskResponse",
    "CourseParticipantsResponse",
    "CourseRequest",
    "CourseResponse",
    "CourseWithContentResponse",
    "CreatedResponse",
    "MoveStudentRequest",
    "ParticipantResponse",
    "AnswerOption",
    "AnswerSubmission",
    "Question",
    "QuestionForTaking",
    "QuizForEditing",
    "QuizForTaking",
    "QuizRequest",
    "QuizSummary",
    "SubmissionRequest",
    "SubmissionResponse",
    "QuizResultRow",
    "StudentResultResponse",
]
