import logging
import sqlite3

import pytest

from edutest.service.subjects import SubjectService
from edutest.storage.storage import open_storage


@pytest.fixture
def storage():
    with open_storage(":memory:") as opened:
        yield opened


@pytest.fixture
def service(storage):
    return SubjectService(storage, logging.getLogger("test.subjects"))


def test_create_and_list(service):
    first = service.create("Matematika")
    second = service.create("Fizika")
    listed = service.list()
    assert [(s.id, s.name) for s in listed] == [(first, "Matematika"), (second, "Fizika")]


def test_list_by_id(service):
    service.create("Matematika")
    wanted = service.create("Fizika")
    assert [s.name for s in service.list(wanted)] == ["Fizika"]


def test_list_unknown_id_is_empty(service):
    service.create("Matematika")
    assert service.list("missing") == []


def test_update_renames(service):
    subject_id = service.create("Matematika")
    service.update(subject_id, "Algebra")
    assert [s.name for s in service.list(subject_id)] == ["Algebra"]


def test_failure_is_logged_and_raised(storage, service, caplog):
    storage.close()
    with caplog.at_level(logging.ERROR, logger="test.subjects"):
        with pytest.raises(sqlite3.ProgrammingError):
            service.create("Kimyo")
    assert any("Error is save data of subject" in m for m in caplog.messages)