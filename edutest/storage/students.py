"""Persistence of students, their subjects and their test results."""

from __future__ import annotations

import json
import logging
import random
import sqlite3
import uuid

from edutest.models import QuestionResult, Student, StudentDayResult, StudentResult
from edutest.storage.db import NotFoundError, _log_errors


def _encode_results(results: list[QuestionResult]) -> str:
    return json.dumps([{"number": r.number, "status": r.status} for r in results])


def _decode_results(text: str | bytes | None) -> list[QuestionResult]:
    if text is None:
        return []
    items = json.loads(text)
    if items is None:
        return []
    return [
        QuestionResult(number=int(item.get("number", 0)), status=bool(item.get("status", False)))
        for item in items
    ]


class StudentRepository:
    """Student records backed by the application database."""

    def __init__(self, db: sqlite3.Connection, logger: logging.Logger | None = None) -> None:
        self._db = db
        self._log = logger or logging.getLogger("edutest")

    def create(self, student: Student) -> str:
        """Insert the student and its subjects; return the student number."""
        row_id = str(uuid.uuid4())
        with _log_errors(self._log, "Error is insert student's data to database"), self._db:
            self._db.execute(
                "INSERT INTO students(id, student_id, name, lastname, phone_number)"
                " VALUES (?, ?, ?, ?, ?)",
                (row_id, student.student_id, student.name, student.lastname, student.phone_number),
            )
            self._db.execute(
                "INSERT INTO student_subjects(student_id, subject1, subject2) VALUES (?, ?, ?)",
                (row_id, student.subject1, student.subject2),
            )
        return student.student_id

    def update(self, student: Student) -> None:
        """Replace the personal data and subjects of the student ``student.id``."""
        with _log_errors(self._log, "Error is update student's data"), self._db:
            self._db.execute(
                "UPDATE students SET name = ?, lastname = ?, phone_number = ? WHERE id = ?",
                (student.name, student.lastname, student.phone_number, student.id),
            )
            self._db.execute(
                "UPDATE student_subjects SET subject1 = ?, subject2 = ? WHERE student_id = ?",
                (student.subject1, student.subject2, student.id),
            )

    def delete(self, student_id: str) -> None:
        """Mark the student deleted and drop its subject assignment."""
        with _log_errors(self._log, "Error is delete student"), self._db:
            self._db.execute(
                "UPDATE students SET deleted_at = CURRENT_TIMESTAMP WHERE id = ?",
                (student_id,),
            )
            self._db.execute("DELETE FROM student_subjects WHERE student_id = ?", (student_id,))

    def list(self, student_id: str = "") -> list[Student]:
        """Return every student, or only the one with ``student_id``."""
        query = "SELECT id, student_id, name, lastname, phone_number FROM students"
        params: tuple[str, ...] = ()
        if student_id:
            query += " WHERE id = ?"
            params = (student_id,)
        query += " ORDER BY rowid"
        students = []
        with _log_errors(self._log, "Error is get student's data"):
            rows = self._db.execute(query, params).fetchall()
            for row in rows:
                subjects = self._db.execute(
                    "SELECT subject1, subject2 FROM student_subjects WHERE student_id = ?",
                    (row["id"],),
                ).fetchone()
                if subjects is None:
                    self._log.error(f"Error is scan student's subjects: no rows for {row['id']}")
                    raise NotFoundError(f"no subjects for student {row['id']}")
                students.append(
                    Student(
                        id=row["id"],
                        student_id=row["student_id"],
                        name=row["name"],
                        lastname=row["lastname"],
                        phone_number=row["phone_number"],
                        subject1=subjects["subject1"],
                        subject2=subjects["subject2"],
                    )
                )
        return students

    def get_by_student_number(self, number: str) -> Student:
        """Return the student whose student number is ``number``."""
        with _log_errors(self._log, "Error is get student by studentId"):
            row = self._db.execute(
                "SELECT id, name, lastname, phone_number FROM students WHERE student_id = ?",
                (number,),
            ).fetchone()
        if row is None:
            self._log.error(f"Error is get student by studentId: no rows for {number}")
            raise NotFoundError(f"no student with number {number}")
        return Student(
            id=row["id"],
            name=row["name"],
            lastname=row["lastname"],
            phone_number=row["phone_number"],
        )

    def create_result(
        self,
        student_id: str,
        template_id: str,
        results: list[QuestionResult],
        point: float,
    ) -> None:
        """Store the checked answers of one test."""
        with _log_errors(self._log, "Error is insert student's result"), self._db:
            self._db.execute(
                "INSERT INTO students_result(student_id, template_id, result, ball)"
                " VALUES (?, ?, ?, ?)",
                (student_id, template_id, _encode_results(results), point),
            )

    def get_results(self, student_id: str, template_id: str = "") -> list[StudentResult]:
        """Return the stored results of a student, optionally of one template."""
        query = "SELECT template_id, result, ball FROM students_result WHERE student_id = ?"
        params: tuple[str, ...] = (student_id,)
        if template_id:
            query += " AND template_id = ?"
            params += (template_id,)
        query += " ORDER BY rowid"
        with _log_errors(self._log, "Error is get student's results"):
            rows = self._db.execute(query, params).fetchall()
        return [
            StudentResult(
                template_id=row["template_id"],
                result=_decode_results(row["result"]),
                ball=row["ball"] if row["ball"] is not None else 0.0,
            )
            for row in rows
        ]

    def count(self) -> int:
        """Return the number of student rows, or a random number if that fails."""
        try:
            row = self._db.execute("SELECT count(1) FROM students").fetchone()
        except sqlite3.Error as exc:
            self._log.error(f"Error is get count of students: {exc}")
            return random.randrange(100000)
        return int(row[0])

    def get_students_results(
        self, day: str = "", subject1: str = "", subject2: str = ""
    ) -> list[StudentDayResult]:
        """Return results of non-deleted students, filtered by day and subjects."""
        query = (
            "SELECT S.student_id, S.name, S.lastname, Sb1.name AS subject1,"
            " Sb2.name AS subject2, T.day, Sr.result, Sr.ball"
            " FROM students AS S"
            " JOIN student_subjects AS SS ON S.id = SS.student_id"
            " JOIN subjects AS Sb1 ON SS.subject1 = Sb1.id"
            " JOIN subjects AS Sb2 ON SS.subject2 = Sb2.id"
            " JOIN templates AS T ON S.id = T.student_id"
            " JOIN students_result AS Sr ON S.id = T.student_id AND T.id = Sr.template_id"
            " WHERE S.deleted_at IS NULL"
        )
        params: list[str] = []
        if day:
            query += " AND T.day = ?"
            params.append(day)
        if subject1:
            query += " AND SS.subject1 = ?"
            params.append(subject1)
        if subject2:
            query += " AND SS.subject2 = ?"
            params.append(subject2)
        query += " ORDER BY Sr.rowid"
        with _log_errors(self._log, "Error is get students' results"):
            rows = self._db.execute(query, params).fetchall()
        return [
            StudentDayResult(
                student_id=row["student_id"],
                name=row["name"],
                lastname=row["lastname"],
                subject1=row["subject1"],
                subject2=row["subject2"],
                day=row["day"],
                result=_decode_results(row["result"]),
                ball=row["ball"] if row["ball"] is not None else 0.0,
            )
            for row in rows
        ]