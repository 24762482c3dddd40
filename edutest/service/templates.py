"""Building test templates for students and scoring their answer sheets."""

from __future__ import annotations

import logging
import math
import random
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator

from edutest.functions import random_options, read_pdf_file
from edutest.models import (
    PdfTemplate,
    Question,
    QuestionAnswer,
    QuestionResult,
    Result,
    StudentResult,
)
from edutest.pdf import DEFAULT_PDF_DIR, create_test_template
from edutest.storage.db import NotFoundError
from edutest.storage.storage import Storage

QUESTIONS_PER_SUBJECT = 30
FIRST_SUBJECT_POINT = 3.1
SECOND_SUBJECT_POINT = 2.1


@contextmanager
def _log_failure(logger: logging.Logger, message: str) -> Iterator[None]:
    try:
        yield
    except Exception as exc:
        logger.error(f"{message}: {exc}")
        raise


def _points(number: int) -> float:
    """Points earned by a correct answer to question ``number``."""
    if number <= QUESTIONS_PER_SUBJECT:
        return FIRST_SUBJECT_POINT
    if number <= 2 * QUESTIONS_PER_SUBJECT:
        return SECOND_SUBJECT_POINT
    return 0.0


class TemplateService:
    """Creating test templates, checking answers and serving their PDFs."""

    def __init__(
        self,
        storage: Storage,
        logger: logging.Logger | None = None,
        pdf_dir: str | Path = DEFAULT_PDF_DIR,
        rng: random.Random | None = None,
    ) -> None:
        self._storage = storage
        self._log = logger or logging.getLogger("edutest")
        self._pdf_dir = Path(pdf_dir)
        self._rng = rng

    def create(self, student_id: str, day: str) -> str | None:
        """Build a template for the student on ``day`` and render its PDF.

        Returns the template id, or None when the template or one of its
        question links could not be stored.
        """
        try:
            template_id = self._storage.templates.create(student_id, day)
        except Exception as exc:
            self._log.error(f"Error is save data of template at database: {exc}")
            return None

        with _log_failure(self._log, "Error is student's data"):
            students = self._storage.students.list(student_id)
            if not students:
                raise NotFoundError(f"no student {student_id}")
        student = students[0]

        questions: list[Question] = []
        for subject in (student.subject1, student.subject2):
            with _log_failure(self._log, "Error is get questions of student's subject"):
                questions.extend(
                    self._storage.questions.random_for_subject(subject, QUESTIONS_PER_SUBJECT)
                )

        for number, question in enumerate(questions, start=1):
            try:
                self._storage.templates.add_question(template_id, question.id, number)
            except Exception as exc:
                self._log.error(f"Error is create question of template: {exc}")
                return None

        shuffled, key = random_options(questions, self._rng)

        with _log_failure(self._log, "Error is save answers of tamplate to database"):
            self._storage.templates.save_answers(template_id, key)

        with _log_failure(self._log, "Error is create pdf file"):
            create_test_template(
                PdfTemplate(
                    student_id=student.id,
                    name=student.name,
                    lastname=student.lastname,
                    template_id=template_id,
                    subject1=student.subject1,
                    subject2=student.subject2,
                    questions=shuffled,
                ),
                self._pdf_dir,
            )
        return template_id

    def check(self, student_id: str, day: str, answers: Iterable[QuestionAnswer]) -> Result:
        """Score the student's answers for ``day`` and store the outcome."""
        with _log_failure(self._log, "Error is get student's template"):
            template_id = self._storage.templates.get_id(student_id, day)
        with _log_failure(self._log, "Error is get answers"):
            key = self._storage.templates.get_answers(template_id)

        result = Result()
        results: list[QuestionResult] = []
        point = 0.0
        for item in answers:
            correct = key.get(item.number, "") == item.answer
            if correct:
                result.correct += 1
                point += _points(item.number)
            else:
                result.incorrect += 1
            results.append(QuestionResult(number=item.number, status=correct))
        results.extend(QuestionResult(number=n, status=False) for n in range(1, len(key) + 1))

        try:
            self._storage.students.create_result(student_id, template_id, results, point)
        except Exception as exc:
            self._log.error(f"Error is save student's result: {exc}")

        if not key:
            raise ValueError(f"template {template_id} has no answers to score against")
        result.percent = math.ceil(result.correct / len(key) * 10000) / 100
        return result

    def get_pdf(self, student_id: str, day: str) -> bytes:
        """Return the PDF of the student's first template for ``day``."""
        with _log_failure(self._log, "Error is get templates"):
            ids = self._storage.templates.list_ids(student_id, day)
            if not ids:
                raise NotFoundError(f"no template for student {student_id} on {day}")
        with _log_failure(self._log, "Error is get pdf of template"):
            return read_pdf_file(ids[0], self._pdf_dir)

    def student_result(self, student_id: str, template_id: str = "") -> list[StudentResult]:
        """Return the stored results of a student, optionally of one template."""
        with _log_failure(self._log, "Error is get student's result"):
            return self._storage.students.get_results(student_id, template_id)