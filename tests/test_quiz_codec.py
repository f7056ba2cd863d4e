import json

import pytest

from studentix.models.quizzes import AnswerOption, Question
from studentix.services import quiz_codec
from studentix.services.quiz_codec import InvalidQuizContent, MalformedQuizData


def _questions() -> list[Question]:
    return [
        Question(
            text="Какой цвет у неба?",
            options=[AnswerOption(text="синий"), AnswerOption(text="зелёный")],
            correctOptionIndex=0,
        ),
        Question(
            text="2 + 3 = ?",
            options=[AnswerOption(text="4"), AnswerOption(text="5"), AnswerOption(text="6")],
            correctOptionIndex=1,
        ),
    ]


def test_encode_decode_preserves_questions() -> None:
    questions = _questions()
    assert quiz_codec.decode(quiz_codec.encode(questions)) == questions


def test_encode_writes_versioned_envelope() -> None:
    payload = json.loads(quiz_codec.encode(_questions()))
    assert payload["version"] == quiz_codec.FORMAT_VERSION
    assert len(payload["questions"]) == 2
    assert payload["questions"][1]["correctOptionIndex"] == 1


def test_encode_keeps_non_ascii_text_readable() -> None:
    assert "зелёный" in quiz_codec.encode(_questions())


def test_empty_question_list_round_trips() -> None:
    assert quiz_codec.decode(quiz_codec.encode([])) == []


def test_decode_accepts_legacy_bare_list() -> None:
    legacy = json.dumps(
        [{"text": "Q", "options": [{"text": "a"}, {"text": "b"}], "correctOptionIndex": 1}]
    )
    questions = quiz_codec.decode(legacy)
    assert len(questions) == 1
    assert questions[0].correctOptionIndex == 1


def test_encode_rejects_out_of_range_correct_index() -> None:
    bad = Question.model_construct(
        text="Q", options=[AnswerOption(text="a")], correctOptionIndex=3
    )
    with pytest.raises(InvalidQuizContent):
        quiz_codec.encode([bad])


def test_encode_rejects_question_without_options() -> None:
    bad = Question.model_construct(text="Q", options=[], correctOptionIndex=0)
    with pytest.raises(InvalidQuizContent):
        quiz_codec.encode([bad])


@pytest.mark.parametrize(
    "stored",
    [
        "{not json",
        "42",
        json.dumps({"version": 99, "questions": []}),
        json.dumps({"questions": []}),
        json.dumps({"version": 1, "questions": [{"text": "Q"}]}),
        json.dumps(
            {
                "version": 1,
                "questions": [
                    {"text": "Q", "options": [{"text": "a"}], "correctOptionIndex": 5}
                ],
            }
        ),
    ],
)
def test_decode_rejects_malformed_content(stored: str) -> None:
    with pytest.raises(MalformedQuizData):
        quiz_codec.decode(stored)
