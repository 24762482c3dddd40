import pytest

from edutest.models import (
    Claim,
    Incorrect,
    Option,
    Question,
    QuestionResult,
    QuestionsStatus,
    Student,
    StudentResult,
    to_dict,
)


def test_student_from_dict_fills_missing_fields_with_empty_strings():
    student = Student.from_dict({"name": "Ali", "subject1": "s1"})
    assert student.name == "Ali"
    assert student.subject1 == "s1"
    assert student.lastname == ""
    assert student.student_id == ""


def test_student_round_trip_through_dict():
    student = Student(
        id="u1",
        student_id="200001",
        name="Ali",
        lastname="Valiyev",
        phone_number="998000",
        subject1="s1",
        subject2="s2",
    )
    data = to_dict(student)
    assert data["phone_number"] == "998000"
    assert Student.from_dict(data) == student


def test_student_from_dict_rejects_non_string():
    with pytest.raises(TypeError):
        Student.from_dict({"name": 5})


def test_question_from_dict_parses_nested_options():
    question = Question.from_dict(
        {
            "subject_id": "math",
            "question_text": "2+2?",
            "options": {"a": "3", "b": "4", "c": "5", "d": "6"},
            "answer": "4",
            "option_image_url": {"a": "img-a"},
        }
    )
    assert question.options == Option(a="3", b="4", c="5", d="6")
    assert question.option_image_url.a == "img-a"
    assert question.option_image_url.d == ""
    assert question.answer == "4"


def test_question_round_trip_through_dict():
    question = Question(
        id="q1",
        subject_id="math",
        type="easy",
        question_text="2+2?",
        options=Option("3", "4", "5", "6"),
        answer="4",
    )
    assert Question.from_dict(to_dict(question)) == question


def test_option_from_dict_rejects_non_mapping():
    with pytest.raises(TypeError):
        Option.from_dict(["a", "b"])


def test_option_from_none_is_empty():
    assert Option.from_dict(None) == Option()


def test_to_dict_nested_status():
    status = QuestionsStatus(
        correct=2, incorrect=1, incorrect_questions=[Incorrect(nomer=3, name="x")]
    )
    assert to_dict(status) == {
        "correct": 2,
        "incorrect": 1,
        "incorrect_questions": [{"nomer": 3, "name": "x"}],
    }


def test_to_dict_handles_lists_and_results():
    results = [StudentResult(template_id="t", result=[QuestionResult(1, True)], ball=3.1)]
    data = to_dict(results)
    assert data[0]["result"] == [{"number": 1, "status": True}]
    assert data[0]["ball"] == 3.1


def test_to_dict_converts_dict_keys_to_strings():
    assert to_dict({1: "A", 2: "B"}) == {"1": "A", "2": "B"}


def test_claim_to_dict_keeps_items():
    claim = Claim(items={"user_id": "u1"})
    assert to_dict(claim)["items"] == {"user_id": "u1"}