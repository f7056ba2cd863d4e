from conftest import create_course, enroll


def test_teacher_creates_and_owns_course(client, teacher) -> None:
    course_id = create_course(client, teacher, title="Chemistry")

    response = client.get(f"/api/courses/{course_id}", headers=teacher.headers)
    assert response.status_code == 200
    body = response.json()
    assert body["title"] == "Chemistry"
    assert body["teacherId"] == teacher.id
    assert body["isActive"] is True
    assert body["sections"] == []


def test_teacher_id_is_ignored_for_teachers(client, teacher, other_teacher) -> None:
    course_id = create_course(client, teacher, teacherId=other_teacher.id)
    body = client.get(f"/api/courses/{course_id}", headers=teacher.headers).json()
    assert body["teacherId"] == teacher.id


def test_admin_assigns_course_to_teacher(client, admin, teacher) -> None:
    course_id = create_course(client, admin, teacherId=teacher.id)
    body = client.get(f"/api/courses/{course_id}", headers=teacher.headers).json()
    assert body["teacherId"] == teacher.id


def test_admin_assigning_unknown_teacher_is_404(client, admin) -> None:
    response = client.post(
        "/api/courses",
        json={
            "title": "Ghost course",
            "startDate": "2026-09-01T00:00:00Z",
            "durationWeeks": 4,
            "teacherId": 999,
        },
        headers=admin.headers,
    )
    assert response.status_code == 404


def test_student_cannot_create_course(client, student) -> None:
    response = client.post(
        "/api/courses",
        json={"title": "Mine", "startDate": "2026-09-01T00:00:00Z", "durationWeeks": 4},
        headers=student.headers,
    )
    assert response.status_code == 403


def test_course_list_depends_on_role(client, admin, teacher, other_teacher, student) -> None:
    mine = create_course(client, teacher, title="Mine")
    theirs = create_course(client, other_teacher, title="Theirs")
    enroll(client, student, theirs)

    def ids(account) -> set[int]:
        response = client.get("/api/courses", headers=account.headers)
        assert response.status_code == 200
        return {course["id"] for course in response.json()}

    assert ids(admin) == {mine, theirs}
    assert ids(teacher) == {mine}
    assert ids(student) == {theirs}


def test_student_sees_course_only_when_enrolled(client, student, course_id) -> None:
    assert client.get(f"/api/courses/{course_id}", headers=student.headers).status_code == 403
    enroll(client, student, course_id)
    assert client.get(f"/api/courses/{course_id}", headers=student.headers).status_code == 200


def test_other_teacher_cannot_view_course(client, other_teacher, course_id) -> None:
    assert client.get(f"/api/courses/{course_id}", headers=other_teacher.headers).status_code == 403


def test_unknown_course_is_404(client, admin) -> None:
    assert client.get("/api/courses/999", headers=admin.headers).status_code == 404


def test_enroll_twice_conflicts(client, student, course_id) -> None:
    enroll(client, student, course_id)
    response = client.post(f"/api/courses/{course_id}/enroll", headers=student.headers)
    assert response.status_code == 409


def test_enroll_in_unknown_course_is_404(client, student) -> None:
    assert client.post("/api/courses/999/enroll", headers=student.headers).status_code == 404


def test_teacher_cannot_enroll(client, teacher, course_id) -> None:
    assert client.post(f"/api/courses/{course_id}/enroll", headers=teacher.headers).status_code == 403


def test_owner_unenrolls_student(client, teacher, student, course_id) -> None:
    enroll(client, student, course_id)
    response = client.delete(
        f"/api/courses/{course_id}/students/{student.id}", headers=teacher.headers
    )
    assert response.status_code == 204
    assert client.get(f"/api/courses/{course_id}", headers=student.headers).status_code == 403

    again = client.delete(f"/api/courses/{course_id}/students/{student.id}", headers=teacher.headers)
    assert again.status_code == 404


def test_other_teacher_cannot_unenroll(client, other_teacher, student, course_id) -> None:
    enroll(client, student, course_id)
    response = client.delete(
        f"/api/courses/{course_id}/students/{student.id}", headers=other_teacher.headers
    )
    assert response.status_code == 403


def test_admin_moves_student(client, admin, teacher, student, course_id) -> None:
    target = create_course(client, teacher, title="Advanced Algebra")
    enroll(client, student, course_id)

    response = client.post(
        f"/api/courses/{course_id}/students/{student.id}/move",
        json={"targetCourseId": target},
        headers=admin.headers,
    )
    assert response.status_code == 200

    courses = {c["id"] for c in client.get("/api/courses", headers=student.headers).json()}
    assert courses == {target}


def test_move_requires_enrollment(client, admin, teacher, student, course_id) -> None:
    target = create_course(client, teacher, title="Other")
    response = client.post(
        f"/api/courses/{course_id}/students/{student.id}/move",
        json={"targetCourseId": target},
        headers=admin.headers,
    )
    assert response.status_code == 404


def test_move_to_unknown_course_is_404(client, admin, student, course_id) -> None:
    enroll(client, student, course_id)
    response = client.post(
        f"/api/courses/{course_id}/students/{student.id}/move",
        json={"targetCourseId": 999},
        headers=admin.headers,
    )
    assert response.status_code == 404


def test_teacher_cannot_move_students(client, teacher, student, course_id) -> None:
    enroll(client, student, course_id)
    response = client.post(
        f"/api/courses/{course_id}/students/{student.id}/move",
        json={"targetCourseId": course_id},
        headers=teacher.headers,
    )
    assert response.status_code == 403


def test_delete_course_permissions(client, admin, other_teacher, student, course_id) -> None:
    enroll(client, student, course_id)
    assert client.delete(f"/api/courses/{course_id}", headers=other_teacher.headers).status_code == 403
    assert client.delete(f"/api/courses/{course_id}", headers=admin.headers).status_code == 204
    assert client.get(f"/api/courses/{course_id}", headers=admin.headers).status_code == 404
    assert client.get("/api/courses", headers=student.headers).json() == []
