"""Business operations on students, including import from a workbook."""

from __future__ import annotations

import dataclasses
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from edutest.models import Student, StudentDayResult, StudentsStatus
from edutest.service.workbook import read_rows
from edutest.storage.storage import Storage

STUDENT_NUMBER_BASE = 200001
_STUDENT_COLUMNS = 6
_INCOMPLETE = "Studentning ma'lumoti to'liq emas"


@contextmanager
def _log_failure(logger: logging.Logger, message: str) -> Iterator[None]:
    try:
        yield
    except Exception as exc:
        logger.error(f"{message}: {exc}")
        raise


def _pad(row: list[str], width: int) -> list[str]:
    return row + [""] * (width - len(row))


def _incorrect_student(cells: list[str]) -> Student:
    _, name, lastname, phone, subject1, subject2 = cells[:_STUDENT_COLUMNS]
    return Student(
        name=name, lastname=lastname, phone_number=phone, subject1=subject1, subject2=subject2
    )


def _problem(row: list[str], cells: list[str], known: set[str]) -> str | None:
    """Return why the row cannot be imported, or None if it can."""
    if len(row) < _STUDENT_COLUMNS:
        return _INCOMPLETE
    _, name, lastname, phone, subject1, subject2 = cells[:_STUDENT_COLUMNS]
    if not name or not lastname or not phone or not subject1:
        return _INCOMPLETE
    if subject1 not in known:
        return "Studentning subject1 noto'g'ri kiritilgan"
    if not subject2:
        return _INCOMPLETE
    return None


class StudentService:
    """Registering students, editing them and reading their results."""

    def __init__(self, storage: Storage, logger: logging.Logger | None = None) -> None:
        self._storage = storage
        self._log = logger or logging.getLogger("edutest")

    def _next_number(self) -> str:
        return str(self._storage.students.count() + STUDENT_NUMBER_BASE)

    def create(self, student: Student) -> str:
        """Register a student under the next student number and return it."""
        student = dataclasses.replace(student, student_id=self._next_number())
        with _log_failure(self._log, "Error is save data to database"):
            return self._storage.students.create(student)

    def update(self, student: Student) -> None:
        """Replace the data of the student ``student.id``."""
        with _log_failure(self._log, "Error is update student's data at database"):
            self._storage.students.update(student)

    def delete(self, student_id: str) -> None:
        """Delete the student ``student_id``."""
        with _log_failure(self._log, "Error is delete student's data at database"):
            self._storage.students.delete(student_id)

    def list(self, student_id: str = "") -> list[Student]:
        """Return every student, or only the one with ``student_id``."""
        with _log_failure(self._log, "Error is get student's data from database"):
            return self._storage.students.list(student_id)

    def results(
        self, day: str = "", subject1: str = "", subject2: str = ""
    ) -> list[StudentDayResult]:
        """Return test results filtered by day and subjects."""
        with _log_failure(self._log, "Error is get student's results from database"):
            return self._storage.students.get_students_results(day, subject1, subject2)

    def _known_subjects(self) -> set[str]:
        with _log_failure(self._log, "Error is get subjects"):
            known = {subject.id for subject in self._storage.subjects.list()}
        self._log.info(f"{sorted(known)}")
        return known

    def import_workbook(self, path: str | Path) -> StudentsStatus:
        """Register the students listed in a workbook, skipping invalid rows.

        The first row is a header. Columns are: number, name, lastname,
        phone number, subject1 id, subject2 id.
        """
        self._log.info(f"Faylni ochish uchun ishlatiladigan fayl: {path}")
        with _log_failure(self._log, "Faylni ochishda xatolik"):
            rows = read_rows(path)
        known = self._known_subjects()

        status = StudentsStatus()
        for row in rows[1:]:
            cells = _pad(row, _STUDENT_COLUMNS)
            problem = _problem(row, cells, known)
            if problem is not None:
                status.incorrect_students.append(_incorrect_student(cells))
                self._log.info(f"{problem}: {row}")
                continue

            _, name, lastname, phone, subject1, subject2 = cells[:_STUDENT_COLUMNS]
            student = Student(
                student_id=self._next_number(),
                name=name,
                lastname=lastname,
                phone_number=phone,
                subject1=subject1,
                subject2=subject2,
            )
            try:
                self._storage.students.create(student)
            except Exception as exc:
                status.incorrect_students.append(_incorrect_student(cells))
                status.incorrect = len(status.incorrect_students)
                self._log.error(f"Error is save data to database: {exc}")
                raise
            status.correct += 1

        status.incorrect = len(status.incorrect_students)
        return status