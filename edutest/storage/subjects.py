"""Persistence of subjects and of the subjects chosen by students."""

from __future__ import annotations

import logging
import sqlite3
import uuid

from edutest.models import Subject
from edutest.storage.db import _log_errors


class SubjectRepository:
    """Subject records backed by the application database."""

    def __init__(self, db: sqlite3.Connection, logger: logging.Logger | None = None) -> None:
        self._db = db
        self._log = logger or logging.getLogger("edutest")

    def create(self, name: str) -> str:
        """Insert a subject and return its new id."""
        subject_id = str(uuid.uuid4())
        with _log_errors(self._log, "Error is insert data of subject"), self._db:
            self._db.execute(
                "INSERT INTO subjects(id, name) VALUES (?, ?)", (subject_id, name)
            )
        return subject_id

    def update(self, subject_id: str, name: str) -> None:
        """Rename the subject ``subject_id``."""
        with _log_errors(self._log, "Error is update subject"), self._db:
            self._db.execute("UPDATE subjects SET name = ? WHERE id = ?", (name, subject_id))

    def list(self, subject_id: str = "") -> list[Subject]:
        """Return every subject, or only the one with ``subject_id``."""
        query = "SELECT id, name FROM subjects"
        params: tuple[str, ...] = ()
        if subject_id:
            query += " WHERE id = ?"
            params = (subject_id,)
        query += " ORDER BY rowid"
        with _log_errors(self._log, "Error is get subjects"):
            rows = self._db.execute(query, params).fetchall()
        return [Subject(id=row["id"], name=row["name"]) for row in rows]

    def create_student_subject(self, student_id: str, subject1: str, subject2: str) -> None:
        """Assign two subjects to a student."""
        with _log_errors(
            self._log, "Error is insert student's subject data to database"
        ), self._db:
            self._db.execute(
                "INSERT INTO student_subjects(student_id, subject1, subject2) VALUES (?, ?, ?)",
                (student_id, subject1, subject2),
            )

    def update_student_subject(self, student_id: str, subject1: str, subject2: str) -> None:
        """Replace the two subjects of a student."""
        with _log_errors(self._log, "Error is update student's subject data"), self._db:
            self._db.execute(
                "UPDATE student_subjects SET subject1 = ?, subject2 = ? WHERE student_id = ?",
                (subject1, subject2, student_id),
            )

    def delete_student_subject(self, student_id: str) -> None:
        """Remove the subject assignment of a student."""
        with _log_errors(self._log, "Error is delete student's subjects"), self._db:
            self._db.execute(
                "DELETE FROM student_subjects WHERE student_id = ?", (student_id,)
            )