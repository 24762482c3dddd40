"""Data records exchanged between the storage, service and web layers."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Mapping


def _text(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key, "")
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError(f"field {key!r} must be a string, got {type(value).__name__}")
    return value


def _mapping(data: Any, what: str) -> Mapping[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise TypeError(f"{what} must be an object, got {type(data).__name__}")
    return data


@dataclass
class Option:
    """The four answer variants of a question (or their image URLs)."""

    a: str = ""
    b: str = ""
    c: str = ""
    d: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> Option:
        data = _mapping(data, "options")
        return cls(**{name: _text(data, name) for name in ("a", "b", "c", "d")})


@dataclass
class Student:
    id: str = ""
    student_id: str = ""
    name: str = ""
    lastname: str = ""
    phone_number: str = ""
    subject1: str = ""
    subject2: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> Student:
        data = _mapping(data, "student")
        return cls(**{f.name: _text(data, f.name) for f in dataclasses.fields(cls)})


@dataclass
class Subject:
    id: str = ""
    name: str = ""


@dataclass
class Question:
    id: str = ""
    subject_id: str = ""
    type: str = ""
    question_text: str = ""
    options: Option = field(default_factory=Option)
    answer: str = ""
    question_image_url: str = ""
    option_image_url: Option = field(default_factory=Option)
    answer_image_url: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> Question:
        data = _mapping(data, "question")
        return cls(
            id=_text(data, "id"),
            subject_id=_text(data, "subject_id"),
            type=_text(data, "type"),
            question_text=_text(data, "question_text"),
            options=Option.from_dict(data.get("options")),
            answer=_text(data, "answer"),
            question_image_url=_text(data, "question_image_url"),
            option_image_url=Option.from_dict(data.get("option_image_url")),
            answer_image_url=_text(data, "answer_image_url"),
        )


@dataclass
class QuestionAnswer:
    number: int = 0
    answer: str = ""


@dataclass
class QuestionResult:
    number: int = 0
    status: bool = False


@dataclass
class Result:
    correct: int = 0
    incorrect: int = 0
    percent: float = 0.0


@dataclass
class StudentResult:
    template_id: str = ""
    result: list[QuestionResult] = field(default_factory=list)
    ball: float = 0.0


@dataclass
class StudentDayResult:
    student_id: str = ""
    name: str = ""
    lastname: str = ""
    subject1: str = ""
    subject2: str = ""
    day: str = ""
    result: list[QuestionResult] = field(default_factory=list)
    ball: float = 0.0


@dataclass
class Incorrect:
    nomer: int = 0
    name: str = ""


@dataclass
class StudentsStatus:
    correct: int = 0
    incorrect: int = 0
    incorrect_students: list[Student] = field(default_factory=list)


@dataclass
class QuestionsStatus:
    correct: int = 0
    incorrect: int = 0
    incorrect_questions: list[Incorrect] = field(default_factory=list)


@dataclass
class PdfTemplate:
    student_id: str = ""
    name: str = ""
    lastname: str = ""
    template_id: str = ""
    subject1: str = ""
    subject2: str = ""
    questions: list[Question] = field(default_factory=list)


@dataclass
class Claim:
    """Claims carried by an access token."""

    items: dict[str, Any] = field(default_factory=dict)
    expires_at: int | None = None
    issued_at: int | None = None


def to_dict(obj: Any) -> Any:
    """Turn records (and lists or dicts of them) into JSON-ready values."""
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    if isinstance(obj, (list, tuple)):
        return [to_dict(item) for item in obj]
    if isinstance(obj, dict):
        return {str(key): to_dict(value) for key, value in obj.items()}
    return obj