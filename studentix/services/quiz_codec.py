"""At-rest encoding of quiz questions.

Questions are stored as JSON text::

    {"version": 1, "questions": [{"text": ..., "options": [{"text": ...}],
                                  "correctOptionIndex": 0}, ...]}

Blobs written before the envelope existed are a bare JSON list and are
read as version 0.
"""
import json

from pydantic import TypeAdapter, ValidationError

from studentix.models.quizzes import Question

FORMAT_VERSION = 1

_questions_adapter = TypeAdapter(list[Question])


class MalformedQuizData(Exception):
    """Stored quiz content could not be decoded."""


class InvalidQuizContent(ValueError):
    """Questions that must not be stored (empty options, bad correct index)."""


def encode(questions: list[Question]) -> str:
    """Serialize questions to the stored text format."""
    for position, question in enumerate(questions):
        if not question.options:
            raise InvalidQuizContent(f"Question {position} has no options")
        if not 0 <= question.correctOptionIndex < len(question.options):
            raise InvalidQuizContent(
                f"Question {position} has correctOptionIndex "
                f"{question.correctOptionIndex} outside 0..{len(question.options) - 1}"
            )
    payload = {
        "version": FORMAT_VERSION,
        "questions": [question.model_dump() for question in questions],
    }
    return json.dumps(payload, ensure_ascii=False)


def decode(text: str) -> list[Question]:
    """Parse the stored text format back into questions."""
    try:
        payload = json.loads(text)
    except (json.JSONDecodeError, TypeError) as exc:
        raise MalformedQuizData(f"Quiz content is not valid JSON: {exc}") from exc

    if isinstance(payload, list):
        raw_questions = payload
    elif isinstance(payload, dict):
        version = payload.get("version")
        if version != FORMAT_VERSION:
            raise MalformedQuizData(f"Unsupported quiz format version: {version!r}")
        raw_questions = payload.get("questions")
    else:
        raise MalformedQuizData("Quiz content must be an object or a list")

    try:
        return _questions_adapter.validate_python(raw_questions)
    except ValidationError as exc:
        raise MalformedQuizData(f"Quiz content failed validation: {exc}") from exc
