"""Audience-specific views of a stored quiz."""
from studentix.models.db.quiz import Quiz
from studentix.models.quizzes import (
    QuestionForTaking,
    QuizForEditing,
    QuizForTaking,
    QuizSummary,
)
from studentix.services import quiz_codec


def project_for_taking(quiz: Quiz) -> QuizForTaking:
    """Questions and options only; the correct answers are dropped."""
    questions = quiz_codec.decode(quiz.content_json)
    return QuizForTaking(
        id=quiz.id,
        title=quiz.title,
        maxScore=quiz.max_score,
        questions=[
            QuestionForTaking(text=question.text, options=question.options)
            for question in questions
        ],
    )


def project_for_editing(quiz: Quiz) -> QuizForEditing:
    """Full quiz, including correct answers. Owners and admins only."""
    return QuizForEditing(
        id=quiz.id,
        sectionId=quiz.section_id,
        title=quiz.title,
        maxScore=quiz.max_score,
        questions=quiz_codec.decode(quiz.content_json),
    )


def project_summary(quiz: Quiz) -> QuizSummary:
    """Metadata used in section listings; never decodes the questions."""
    return QuizSummary(
        id=quiz.id,
        sectionId=quiz.section_id,
        title=quiz.title,
        maxScore=quiz.max_score,
    )
