"""Quiz-related Pydantic models.

``Question`` is the canonical quiz document type: it is what the codec
stores and what editors see. The ``*ForTaking`` models have no
``correctOptionIndex`` field at all, so it cannot leak to a test-taker.
"""
from pydantic import BaseModel, Field, model_validator


class AnswerOption(BaseModel):
    """One option of a question, identified by its position."""

    text: str


class Question(BaseModel):
    """Multiple-choice question with its correct answer."""

    text: str
    options: list[AnswerOption] = Field(..., min_length=1)
    correctOptionIndex: int

    @model_validator(mode="after")
    def check_correct_option_index(self) -> "Question":
        if not 0 <= self.correctOptionIndex < len(self.options):
            raise ValueError(
                f"correctOptionIndex {self.correctOptionIndex} is out of range "
                f"for {len(self.options)} options"
            )
        return self


class QuizRequest(BaseModel):
    """Create or fully replace a quiz."""

    title: str = Field(..., min_length=1, max_length=255)
    maxScore: int = Field(..., ge=0)
    questions: list[Question]


class QuestionForTaking(BaseModel):
    """Question as shown to a test-taker."""

    text: str
    options: list[AnswerOption]


class QuizForTaking(BaseModel):
    id: int
    title: str
    maxScore: int
    questions: list[QuestionForTaking]


class QuizForEditing(BaseModel):
    id: int
    sectionId: int
    title: str
    maxScore: int
    questions: list[Question]


class QuizSummary(BaseModel):
    id: int
    sectionId: int
    title: str
    maxScore: int


class AnswerSubmission(BaseModel):
    """Chosen option for the question at ``questionIndex``."""

    questionIndex: int
    chosenOptionIndex: int


class SubmissionRequest(BaseModel):
    """Answers of one attempt. Unanswered questions are simply left out."""

    answers: list[AnswerSubmission] = Field(default_factory=list)


class SubmissionResponse(BaseModel):
    message: str
    score: int
