"""Business operations on questions, including import from a workbook."""

from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from edutest.models import Incorrect, Option, Question, QuestionsStatus
from edutest.service.workbook import read_rows
from edutest.storage.storage import Storage

_MIN_COLUMNS = 8
_QUESTION_COLUMNS = 14
_INTEGER = re.compile(r"[+-]?[0-9]+")
_INCOMPLETE = "Questionning ma'lumoti to'liq emas"


@contextmanager
def _log_failure(logger: logging.Logger, message: str) -> Iterator[None]:
    try:
        yield
    except Exception as exc:
        logger.error(f"{message}: {exc}")
        raise


def _problem(row: list[str], cells: list[str], known: set[str]) -> str | None:
    """Return why the row cannot be imported, or None if it can."""
    if len(row) < _MIN_COLUMNS:
        return "Question ma'lumoti to'liq emas"
    (_, subject_id, text, _, a, _, b, _, c, _, d, _, answer, type_) = cells
    if not subject_id:
        return _INCOMPLETE
    if subject_id not in known:
        return "Question subjecti noto'g'ri kiritilgan"
    if not all((text, a, b, c, d, answer, type_)):
        return _INCOMPLETE
    return None


class QuestionService:
    """Creating, editing and listing questions."""

    def __init__(self, storage: Storage, logger: logging.Logger | None = None) -> None:
        self._storage = storage
        self._log = logger or logging.getLogger("edutest")

    def create(self, question: Question) -> str:
        """Store a question and return its id."""
        with _log_failure(self._log, "Error is save data of question"):
            return self._storage.questions.create(question)

    def update(self, question: Question) -> None:
        """Replace the content of the question ``question.id``."""
        with _log_failure(self._log, "Error is update data of question"):
            self._storage.questions.update(question)

    def delete(self, question_id: str) -> None:
        """Delete the question ``question_id``."""
        with _log_failure(self._log, "Error is delete data of question"):
            self._storage.questions.delete(question_id)

    def list(
        self, question_id: str = "", subject_id: str = "", type_: str = ""
    ) -> list[Question]:
        """Return questions filtered by id, subject and type."""
        with _log_failure(self._log, "Error is get data of question"):
            return self._storage.questions.list(question_id, subject_id, type_)

    def _known_subjects(self) -> set[str]:
        with _log_failure(self._log, "Error is get subjects"):
            known = {subject.id for subject in self._storage.subjects.list()}
        self._log.info(f"{sorted(known)}")
        return known

    def _add_incorrect(self, row: list[str], incorrect: list[Incorrect]) -> list[Incorrect]:
        """Append the row to the list; an unreadable number clears the list."""
        number = row[0] if row else ""
        if not _INTEGER.fullmatch(number):
            self._log.info(f"Savol raqami noto'g'ri kiritilgan: {number!r}")
            return []
        name = row[2] if len(row) > 2 else ""
        return [*incorrect, Incorrect(nomer=int(number), name=name)]

    def import_workbook(self, path: str | Path) -> QuestionsStatus:
        """Store the questions listed in a workbook, skipping invalid rows.

        The first row is a header. Columns are: number, subject id, text,
        text image, then each of options A to D followed by its image, then
        the answer and the question type.
        """
        self._log.info(f"Faylni ochish uchun ishlatiladigan fayl: {path}")
        with _log_failure(self._log, "Faylni ochishda xatolik"):
            rows = read_rows(path)
        known = self._known_subjects()

        status = QuestionsStatus()
        for row in rows[1:]:
            cells = (row + [""] * _QUESTION_COLUMNS)[:_QUESTION_COLUMNS]
            problem = _problem(row, cells, known)
            if problem is not None:
                status.incorrect_questions = self._add_incorrect(row, status.incorrect_questions)
                self._log.info(f"{problem}: {row}")
                continue

            (_, subject_id, text, image, a, a_img, b, b_img, c, c_img, d, d_img,
             answer, type_) = cells
            question = Question(
                subject_id=subject_id,
                type=type_,
                question_text=text,
                options=Option(a=a, b=b, c=c, d=d),
                answer=answer,
                question_image_url=image,
                option_image_url=Option(a=a_img, b=b_img, c=c_img, d=d_img),
            )
            try:
                self._storage.questions.create(question)
            except Exception as exc:
                status.incorrect_questions = self._add_incorrect(row, status.incorrect_questions)
                status.incorrect = len(status.incorrect_questions)
                self._log.error(f"Error is save data to database: {exc}")
                raise
            status.correct += 1

        status.incorrect = len(status.incorrect_questions)
        return status