import logging

import pytest
from flask import Flask

from edutest.api.templates import templates_blueprint
from edutest.models import Option, Question, Student
from edutest.service.core import build_service
from edutest.storage.storage import open_storage

DAY = "2024-05-01"


@pytest.fixture
def storage():
    with open_storage() as st:
        yield st


@pytest.fixture
def client(storage, tmp_path):
    app = Flask(__name__)
    service = build_service(storage, logging.getLogger("test"), tmp_path)
    app.register_blueprint(templates_blueprint(service, logging.getLogger("test")))
    return app.test_client()


@pytest.fixture
def student(storage):
    math_id = storage.subjects.create("Math")
    physics_id = storage.subjects.create("Physics")
    storage.students.create(
        Student(
            student_id="200001",
            name="Ali",
            lastname="Valiyev",
            phone_number="100",
            subject1=math_id,
            subject2=physics_id,
        )
    )
    for subject in (math_id, physics_id):
        for i in range(2):
            storage.questions.create(
                Question(
                    subject_id=subject,
                    question_text=f"Question {i}",
                    options=Option(a=f"right{i}", b="w1", c="w2", d="w3"),
                    answer=f"right{i}",
                )
            )
    return storage.students.list()[0]


def test_create_and_download(client, student, storage, tmp_path):
    response = client.post("/templates/create", json={"student_id": student.id, "day": DAY})
    assert response.get_json() == {"message": "Success!"}
    [template_id] = storage.templates.list_ids(student.id, DAY)

    response = client.get(f"/templates/get?student_id={student.id}&day={DAY}")
    assert response.status_code == 200
    assert response.data == (tmp_path / f"{template_id}.pdf").read_bytes()
    assert response.headers["Content-Disposition"] == (
        f"attachment; filename=template_{student.id}_{DAY}.pdf"
    )
    assert response.headers["Content-Type"] == "application/octet-stream"
    assert response.headers["Content-Length"] == str(len(response.data))


def test_create_bad_body(client):
    response = client.post("/templates/create", data="[1, 2]")
    assert response.status_code == 400
    assert response.get_json()["message"] == "Noto'g'ri ma'lumot kiritildi"


def test_create_unknown_student(client, student):
    response = client.post("/templates/create", json={"student_id": "missing", "day": DAY})
    assert response.status_code == 500


def test_get_requires_parameters(client):
    response = client.get("/templates/get?student_id=x")
    assert response.status_code == 400
    assert response.get_json()["message"] == "student_id va day parametrlari kerak"


def test_get_without_template(client):
    response = client.get(f"/templates/get?student_id=nobody&day={DAY}")
    assert response.status_code == 500
    assert response.get_json()["message"] == "Serverda xatolik"


def test_check_scores_answers(client, student, storage):
    client.post("/templates/create", json={"student_id": student.id, "day": DAY})
    [template_id] = storage.templates.list_ids(student.id, DAY)
    key = storage.templates.get_answers(template_id)
    body = {
        "student_id": student.id,
        "day": DAY,
        "answers": [{"number": n, "answer": letter} for n, letter in key.items()],
    }
    response = client.post("/templates/check", json=body)
    assert response.status_code == 200
    assert response.get_json() == {"correct": len(key), "incorrect": 0, "percent": 100.0}


def test_check_rejects_non_integer_number(client, student):
    body = {"student_id": student.id, "day": DAY, "answers": [{"number": "1", "answer": "A"}]}
    response = client.post("/templates/check", json=body)
    assert response.status_code == 400


def test_check_without_template(client, student):
    response = client.post(
        "/templates/check", json={"student_id": student.id, "day": DAY, "answers": []}
    )
    assert response.status_code == 500
    assert response.get_json()["message"] == "Serverda xatolik"
    assert student.id in response.get_json()["error"]