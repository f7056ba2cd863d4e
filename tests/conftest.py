import os
from dataclasses import dataclass

os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient

from studentix.app import create_app
from studentix.models.db.user import UserRole
from studentix.services.auth_service import create_user

PASSWORD = "secret123"

SAMPLE_QUESTIONS = [
    {
        "text": "2 + 2 = ?",
        "options": [{"text": "3"}, {"text": "4"}, {"text": "5"}],
        "correctOptionIndex": 1,
    },
    {
        "text": "Capital of France?",
        "options": [{"text": "Paris"}, {"text": "Rome"}],
        "correctOptionIndex": 0,
    },
]


@dataclass
class Account:
    id: int
    email: str
    headers: dict[str, str]


@pytest.fixture
def app():
    return create_app("sqlite://")


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db(app, client):
    session = app.state.database.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_account(app, client):
    def _make(role: UserRole, email: str) -> Account:
        session = app.state.database.session()
        try:
            outcome = create_user(session, email, PASSWORD, email.split("@")[0], role, is_active=True)
            assert outcome.ok
            user_id = outcome.value.id
        finally:
            session.close()

        response = client.post("/api/auth/login", json={"email": email, "password": PASSWORD})
        assert response.status_code == 200, response.text
        token = response.json()["token"]
        return Account(id=user_id, email=email, headers={"Authorization": f"Bearer {token}"})

    return _make


@pytest.fixture
def admin(make_account) -> Account:
    return make_account(UserRole.ADMIN, "admin@example.com")


@pytest.fixture
def teacher(make_account) -> Account:
    return make_account(UserRole.TEACHER, "teacher@example.com")


@pytest.fixture
def other_teacher(make_account) -> Account:
    return make_account(UserRole.TEACHER, "other.teacher@example.com")


@pytest.fixture
def student(make_account) -> Account:
    return make_account(UserRole.STUDENT, "student@example.com")


@pytest.fixture
def other_student(make_account) -> Account:
    return make_account(UserRole.STUDENT, "other.student@example.com")


def create_course(client: TestClient, account: Account, title: str = "Algebra", **extra) -> int:
    payload = {
        "title": title,
        "description": "Linear equations and more",
        "startDate": "2026-09-01T00:00:00Z",
        "durationWeeks": 12,
        **extra,
    }
    response = client.post("/api/courses", json=payload, headers=account.headers)
    assert response.status_code == 201, response.text
    return response.json()["id"]


def create_section(
    client: TestClient, account: Account, course_id: int, title: str = "Week 1", sort_order: int = 0
) -> int:
    response = client.post(
        f"/api/courses/{course_id}/sections",
        json={"weekNumber": 1, "title": title, "sortOrder": sort_order},
        headers=account.headers,
    )
    assert response.status_code == 201, response.text
    return response.json()["id"]


def create_test(client: TestClient, account: Account, section_id: int, max_score: int = 10) -> int:
    response = client.post(
        f"/api/sections/{section_id}/tests",
        json={"title": "Warm-up", "maxScore": max_score, "questions": SAMPLE_QUESTIONS},
        headers=account.headers,
    )
    assert response.status_code == 201, response.text
    return response.json()["id"]


def enroll(client: TestClient, account: Account, course_id: int) -> None:
    response = client.post(f"/api/courses/{course_id}/enroll", headers=account.headers)
    assert response.status_code == 200, response.text


@pytest.fixture
def course_id(client, teacher) -> int:
    return create_course(client, teacher)


@pytest.fixture
def section_id(client, teacher, course_id) -> int:
    return create_section(client, teacher, course_id)


@pytest.fixture
def quiz_id(client, teacher, section_id) -> int:
    return create_test(client, teacher, section_id)
