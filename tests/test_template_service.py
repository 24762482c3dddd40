import logging
import random

import pytest

from edutest.models import Option, Question, QuestionAnswer, Student
from edutest.service.templates import TemplateService
from edutest.storage.db import NotFoundError
from edutest.storage.storage import open_storage

DAY = "2024-05-01"


@pytest.fixture
def storage():
    with open_storage() as st:
        yield st


def _seed(storage, per_subject=2):
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
        for i in range(per_subject):
            storage.questions.create(
                Question(
                    subject_id=subject,
                    type="single",
                    question_text=f"Question {i}",
                    options=Option(a=f"right{i}", b="w1", c="w2", d="w3"),
                    answer=f"right{i}",
                )
            )
    return storage.students.list()[0]


def _service(storage, tmp_path):
    return TemplateService(storage, logging.getLogger("test"), tmp_path, random.Random(3))


def test_create_stores_key_template_and_pdf(storage, tmp_path):
    student = _seed(storage)
    svc = _service(storage, tmp_path)
    template_id = svc.create(student.id, DAY)
    key = storage.templates.get_answers(template_id)
    assert sorted(key) == [1, 2, 3, 4]
    assert set(key.values()) <= set("ABCD")
    assert storage.templates.list_ids(student.id, DAY) == [template_id]
    assert (tmp_path / f"{template_id}.pdf").read_bytes().startswith(b"%PDF")


def test_create_takes_at_most_thirty_per_subject(storage, tmp_path):
    student = _seed(storage, per_subject=31)
    template_id = _service(storage, tmp_path).create(student.id, DAY)
    assert len(storage.templates.get_answers(template_id)) == 60


def test_create_unknown_student(storage, tmp_path):
    _seed(storage)
    with pytest.raises(NotFoundError):
        _service(storage, tmp_path).create("missing", DAY)


def test_check_all_correct(storage, tmp_path):
    student = _seed(storage)
    svc = _service(storage, tmp_path)
    template_id = svc.create(student.id, DAY)
    key = storage.templates.get_answers(template_id)
    answers = [QuestionAnswer(number=n, answer=letter) for n, letter in key.items()]
    result = svc.check(student.id, DAY, answers)
    assert result.correct == len(key)
    assert result.incorrect == 0
    assert result.percent == 100.0
    stored = storage.students.get_results(student.id, template_id)
    assert stored[0].ball == pytest.approx(4 * 3.1)


def test_check_all_wrong_stores_every_number(storage, tmp_path):
    student = _seed(storage)
    svc = _service(storage, tmp_path)
    template_id = svc.create(student.id, DAY)
    key = storage.templates.get_answers(template_id)
    answers = [QuestionAnswer(number=n, answer="Z") for n in key]
    result = svc.check(student.id, DAY, answers)
    assert (result.correct, result.incorrect, result.percent) == (0, len(key), 0.0)
    stored = storage.students.get_results(student.id, template_id)[0]
    assert len(stored.result) == len(answers) + len(key)
    assert not any(r.status for r in stored.result)
    assert stored.ball == 0.0


def test_check_second_subject_points(storage, tmp_path):
    student = _seed(storage, per_subject=31)
    svc = _service(storage, tmp_path)
    template_id = svc.create(student.id, DAY)
    key = storage.templates.get_answers(template_id)
    result = svc.check(student.id, DAY, [QuestionAnswer(number=31, answer=key[31])])
    assert result.correct == 1
    assert result.percent == 1.67
    assert storage.students.get_results(student.id)[0].ball == pytest.approx(2.1)


def test_check_number_outside_key_with_empty_answer_counts(storage, tmp_path):
    student = _seed(storage)
    svc = _service(storage, tmp_path)
    svc.create(student.id, DAY)
    result = svc.check(student.id, DAY, [QuestionAnswer(number=99, answer="")])
    assert result.correct == 1
    assert storage.students.get_results(student.id)[0].ball == 0.0


def test_check_without_template(storage, tmp_path):
    student = _seed(storage)
    with pytest.raises(NotFoundError):
        _service(storage, tmp_path).check(student.id, DAY, [])


def test_check_empty_key_raises_after_storing(storage, tmp_path):
    student = _seed(storage)
    template_id = storage.templates.create(student.id, DAY)
    storage.templates.save_answers(template_id, {})
    with pytest.raises(ValueError):
        _service(storage, tmp_path).check(student.id, DAY, [])
    assert len(storage.students.get_results(student.id, template_id)) == 1


def test_get_pdf_returns_file(storage, tmp_path):
    student = _seed(storage)
    svc = _service(storage, tmp_path)
    template_id = svc.create(student.id, DAY)
    assert svc.get_pdf(student.id, DAY) == (tmp_path / f"{template_id}.pdf").read_bytes()


def test_get_pdf_without_template(storage, tmp_path):
    with pytest.raises(NotFoundError):
        _service(storage, tmp_path).get_pdf("nobody", DAY)


def test_student_result(storage, tmp_path):
    student = _seed(storage)
    svc = _service(storage, tmp_path)
    template_id = svc.create(student.id, DAY)
    svc.check(student.id, DAY, [])
    results = svc.student_result(student.id, "")
    assert [r.template_id for r in results] == [template_id]