import logging

import pytest
from flask import Flask

from edutest.api.subjects import subjects_blueprint
from edutest.service.core import build_service
from edutest.storage.storage import open_storage


@pytest.fixture
def storage():
    with open_storage() as st:
        yield st


@pytest.fixture
def client(storage, tmp_path):
    app = Flask(__name__)
    service = build_service(storage, logging.getLogger("test"), tmp_path)
    app.register_blueprint(subjects_blueprint(service, logging.getLogger("test")))
    return app.test_client()


def test_create_then_list(client):
    response = client.post("/subjects/create", json={"name": "Math"})
    assert response.status_code == 200
    assert response.get_json() == {"message": "Success!"}
    subjects = client.get("/subjects/get").get_json()["subjects"]
    assert [s["name"] for s in subjects] == ["Math"]


def test_create_bad_body(client, storage):
    response = client.post("/subjects/create", data="not json")
    assert response.status_code == 400
    assert response.get_json()["message"] == "Noto'g'ri ma'lumot kiritildi"
    assert storage.subjects.list() == []


def test_create_name_must_be_text(client):
    response = client.post("/subjects/create", json={"name": 5})
    assert response.status_code == 400


def test_update_renames(client, storage):
    subject_id = storage.subjects.create("Math")
    response = client.delete(f"/subjects/update/{subject_id}?name=Algebra")
    assert response.status_code == 200
    subjects = client.get(f"/subjects/get?id={subject_id}").get_json()["subjects"]
    assert subjects == [{"id": subject_id, "name": "Algebra"}]


def test_get_filters_by_id(client, storage):
    storage.subjects.create("Math")
    physics_id = storage.subjects.create("Physics")
    subjects = client.get(f"/subjects/get?id={physics_id}").get_json()["subjects"]
    assert [s["id"] for s in subjects] == [physics_id]


def test_get_server_error(client, storage):
    storage.close()
    response = client.get("/subjects/get")
    assert response.status_code == 500
    assert response.get_json()["message"] == "Serverda xatolik"