from sqlalchemy import func, select

from conftest import SAMPLE_QUESTIONS, create_course, create_section, create_test, enroll
from studentix.models.db.quiz import Quiz, QuizResult
from studentix.models.db.user import UserRole
from studentix.models.quizzes import AnswerSubmission, SubmissionRequest
from studentix.services import quiz_service
from studentix.services.outcomes import Failure


def _submit(client, account, quiz_id: int, *chosen: int):
    answers = [
        {"questionIndex": index, "chosenOptionIndex": option}
        for index, option in enumerate(chosen)
    ]
    return client.post(
        f"/api/tests/{quiz_id}/submit", json={"answers": answers}, headers=account.headers
    )


# Authoring


def test_owner_creates_test(client, teacher, section_id) -> None:
    response = client.post(
        f"/api/sections/{section_id}/tests",
        json={"title": "Quiz", "maxScore": 10, "questions": SAMPLE_QUESTIONS},
        headers=teacher.headers,
    )
    assert response.status_code == 201
    assert isinstance(response.json()["id"], int)


def test_other_teacher_cannot_create_test(client, other_teacher, section_id) -> None:
    response = client.post(
        f"/api/sections/{section_id}/tests",
        json={"title": "Quiz", "maxScore": 10, "questions": SAMPLE_QUESTIONS},
        headers=other_teacher.headers,
    )
    assert response.status_code == 403


def test_student_cannot_create_test(client, student, course_id, section_id) -> None:
    enroll(client, student, course_id)
    response = client.post(
        f"/api/sections/{section_id}/tests",
        json={"title": "Quiz", "maxScore": 10, "questions": SAMPLE_QUESTIONS},
        headers=student.headers,
    )
    assert response.status_code == 403


def test_admin_creates_test_in_any_section(client, admin, section_id) -> None:
    assert create_test(client, admin, section_id) > 0


def test_admin_gets_404_for_unknown_section(client, admin) -> None:
    response = client.post(
        "/api/sections/999/tests",
        json={"title": "Quiz", "maxScore": 10, "questions": SAMPLE_QUESTIONS},
        headers=admin.headers,
    )
    assert response.status_code == 404
    assert response.json()["detail"] == "Section not found"


def test_out_of_range_correct_index_is_rejected(client, teacher, section_id) -> None:
    question = {"text": "Q", "options": [{"text": "a"}, {"text": "b"}], "correctOptionIndex": 2}
    response = client.post(
        f"/api/sections/{section_id}/tests",
        json={"title": "Quiz", "maxScore": 10, "questions": [question]},
        headers=teacher.headers,
    )
    assert response.status_code == 400


def test_question_without_options_is_rejected(client, teacher, section_id) -> None:
    question = {"text": "Q", "options": [], "correctOptionIndex": 0}
    response = client.post(
        f"/api/sections/{section_id}/tests",
        json={"title": "Quiz", "maxScore": 10, "questions": [question]},
        headers=teacher.headers,
    )
    assert response.status_code == 400


def test_editing_view_includes_answers(client, teacher, quiz_id) -> None:
    response = client.get(f"/api/tests/{quiz_id}/edit", headers=teacher.headers)
    assert response.status_code == 200
    body = response.json()
    assert body["title"] == "Warm-up"
    assert [q["correctOptionIndex"] for q in body["questions"]] == [1, 0]


def test_editing_view_denied_to_other_teacher(client, other_teacher, quiz_id) -> None:
    response = client.get(f"/api/tests/{quiz_id}/edit", headers=other_teacher.headers)
    assert response.status_code == 403


def test_update_replaces_questions(client, teacher, quiz_id) -> None:
    new_questions = [{"text": "Only one", "options": [{"text": "yes"}], "correctOptionIndex": 0}]
    response = client.put(
        f"/api/tests/{quiz_id}",
        json={"title": "Renamed", "maxScore": 5, "questions": new_questions},
        headers=teacher.headers,
    )
    assert response.status_code == 200

    body = client.get(f"/api/tests/{quiz_id}/edit", headers=teacher.headers).json()
    assert body["title"] == "Renamed"
    assert body["maxScore"] == 5
    assert body["questions"] == new_questions


def test_admin_can_update_any_test(client, admin, quiz_id) -> None:
    response = client.put(
        f"/api/tests/{quiz_id}",
        json={"title": "Admin edit", "maxScore": 10, "questions": SAMPLE_QUESTIONS},
        headers=admin.headers,
    )
    assert response.status_code == 200


def test_admin_can_delete_any_test(client, admin, quiz_id) -> None:
    response = client.delete(f"/api/tests/{quiz_id}", headers=admin.headers)
    assert response.status_code == 204
    assert client.get(f"/api/tests/{quiz_id}/edit", headers=admin.headers).status_code == 404


def test_other_teacher_cannot_delete_test(client, other_teacher, quiz_id) -> None:
    response = client.delete(f"/api/tests/{quiz_id}", headers=other_teacher.headers)
    assert response.status_code == 403


def test_delete_removes_test_and_results(client, db, teacher, student, course_id, quiz_id) -> None:
    enroll(client, student, course_id)
    assert _submit(client, student, quiz_id, 1, 0).status_code == 200

    response = client.delete(f"/api/tests/{quiz_id}", headers=teacher.headers)
    assert response.status_code == 204

    assert client.get(f"/api/tests/{quiz_id}", headers=student.headers).status_code == 404
    remaining = db.execute(select(func.count()).select_from(QuizResult)).scalar_one()
    assert remaining == 0


# Taking


def test_enrolled_student_sees_test_without_answers(client, student, course_id, quiz_id) -> None:
    enroll(client, student, course_id)
    response = client.get(f"/api/tests/{quiz_id}", headers=student.headers)

    assert response.status_code == 200
    assert len(response.json()["questions"]) == 2
    assert "correctOptionIndex" not in response.text


def test_unenrolled_student_cannot_see_test(client, student, quiz_id) -> None:
    response = client.get(f"/api/tests/{quiz_id}", headers=student.headers)
    assert response.status_code == 403


def test_owner_can_preview_taking_view(client, teacher, quiz_id) -> None:
    response = client.get(f"/api/tests/{quiz_id}", headers=teacher.headers)
    assert response.status_code == 200
    assert "correctOptionIndex" not in response.text


def test_unknown_test_is_404(client, student) -> None:
    assert client.get("/api/tests/12345", headers=student.headers).status_code == 404


# Submitting


def test_scores_for_full_partial_and_no_credit(
    client, make_account, teacher, course_id, quiz_id
) -> None:
    expected = {(1, 0): 10, (0, 1): 0, (1, 1): 5}
    for number, (chosen, score) in enumerate(expected.items()):
        account = make_account(UserRole.STUDENT, f"taker{number}@example.com")
        enroll(client, account, course_id)
        response = _submit(client, account, quiz_id, *chosen)
        assert response.status_code == 200
        assert response.json()["score"] == score


def test_second_submission_is_rejected(client, db, student, course_id, quiz_id) -> None:
    enroll(client, student, course_id)
    first = _submit(client, student, quiz_id, 1, 0)
    assert first.status_code == 200
    assert first.json() == {"message": "Test submitted successfully", "score": 10}

    second = _submit(client, student, quiz_id, 0, 1)
    assert second.status_code == 409
    assert second.json()["detail"] == "You have already submitted this test."

    rows = db.execute(
        select(QuizResult).where(QuizResult.test_id == quiz_id, QuizResult.student_id == student.id)
    ).scalars().all()
    assert len(rows) == 1
    assert rows[0].score == 10


def test_unenrolled_student_cannot_submit(client, student, quiz_id) -> None:
    response = _submit(client, student, quiz_id, 1, 0)
    assert response.status_code == 403


def test_submit_to_unknown_test_is_404(client, student) -> None:
    assert _submit(client, student, 999, 0).status_code == 404


def test_empty_test_scores_zero(client, teacher, student, course_id, section_id) -> None:
    response = client.post(
        f"/api/sections/{section_id}/tests",
        json={"title": "Empty", "maxScore": 10, "questions": []},
        headers=teacher.headers,
    )
    empty_id = response.json()["id"]
    enroll(client, student, course_id)

    result = client.post(f"/api/tests/{empty_id}/submit", json={}, headers=student.headers)
    assert result.status_code == 200
    assert result.json()["score"] == 0


def test_malformed_stored_content_is_a_server_error(client, db, student, course_id, quiz_id) -> None:
    enroll(client, student, course_id)
    quiz = db.get(Quiz, quiz_id)
    quiz.content_json = "{broken"
    db.commit()

    response = client.get(f"/api/tests/{quiz_id}", headers=student.headers)
    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}

    response = _submit(client, student, quiz_id, 1, 0)
    assert response.status_code == 500


def test_tests_are_isolated_between_courses(client, teacher, other_teacher, student) -> None:
    own_course = create_course(client, other_teacher, title="Biology")
    other_quiz = create_test(client, other_teacher, create_section(client, other_teacher, own_course))

    course = create_course(client, teacher, title="Physics")
    enroll(client, student, course)

    assert client.get(f"/api/tests/{other_quiz}", headers=student.headers).status_code == 403
    assert client.get(f"/api/tests/{other_quiz}/edit", headers=teacher.headers).status_code == 403


def test_unique_constraint_rejects_racing_submission(
    monkeypatch, db, student, course_id, quiz_id
) -> None:
    db.add(QuizResult(test_id=quiz_id, student_id=student.id, score=10))
    db.commit()
    # A concurrent request that passed the pre-check before the first insert landed
    monkeypatch.setattr(quiz_service, "has_submitted", lambda *args: False)

    outcome = quiz_service.submit_quiz(
        db,
        quiz_id,
        student.id,
        SubmissionRequest(answers=[AnswerSubmission(questionIndex=0, chosenOptionIndex=0)]),
    )

    assert outcome.failure is Failure.DUPLICATE_ATTEMPT
    rows = db.execute(
        select(QuizResult).where(QuizResult.test_id == quiz_id, QuizResult.student_id == student.id)
    ).scalars().all()
    assert len(rows) == 1
    assert rows[0].score == 10
