"""Persistence of test templates, their questions and their answer keys."""

from __future__ import annotations

import json
import logging
import sqlite3
import uuid

from edutest.storage.db import NotFoundError, _log_errors


class TemplateRepository:
    """Template records backed by the application database."""

    def __init__(self, db: sqlite3.Connection, logger: logging.Logger | None = None) -> None:
        self._db = db
        self._log = logger or logging.getLogger("edutest")

    def create(self, student_id: str, day: str) -> str:
        """Insert a template for a student on ``day`` and return its id."""
        template_id = str(uuid.uuid4())
        with _log_errors(self._log, "Error is insert data of template"), self._db:
            self._db.execute(
                "INSERT INTO templates(id, student_id, day) VALUES (?, ?, ?)",
                (template_id, student_id, day),
            )
        return template_id

    def delete(self, template_id: str) -> None:
        """Remove the template ``template_id``."""
        with _log_errors(self._log, "Error is delete template"), self._db:
            self._db.execute("DELETE FROM templates WHERE id = ?", (template_id,))

    def list_ids(self, student_id: str = "", day: str = "") -> list[str]:
        """Return ids of templates, filtered by student and day when given."""
        query = "SELECT id FROM templates WHERE TRUE"
        params: list[str] = []
        if student_id:
            query += " AND student_id = ?"
            params.append(student_id)
        if day:
            query += " AND day = ?"
            params.append(day)
        query += " ORDER BY rowid"
        with _log_errors(self._log, "Error is get data of template"):
            rows = self._db.execute(query, params).fetchall()
        return [row["id"] for row in rows]

    def add_question(self, template_id: str, question_id: str, number: int) -> None:
        """Attach a question to a template under the given number."""
        with _log_errors(self._log, "Error is insert question of template"), self._db:
            self._db.execute(
                "INSERT INTO template_questions(template_id, question_id, question_number)"
                " VALUES (?, ?, ?)",
                (template_id, question_id, number),
            )

    def save_answers(self, template_id: str, answers: dict[int, str]) -> None:
        """Store the answer key (question number to letter) of a template."""
        encoded = json.dumps({str(number): letter for number, letter in answers.items()})
        with _log_errors(self._log, "Error is insert answers"), self._db:
            self._db.execute(
                "INSERT INTO template_answers(template_id, answer) VALUES (?, ?)",
                (template_id, encoded),
            )

    def get_answers(self, template_id: str) -> dict[int, str]:
        """Return the answer key of a template."""
        with _log_errors(self._log, "Error is get answers of template"):
            row = self._db.execute(
                "SELECT answer FROM template_answers WHERE template_id = ? ORDER BY rowid",
                (template_id,),
            ).fetchone()
        if row is None:
            self._log.error(f"Error is get answers of template: no rows for {template_id}")
            raise NotFoundError(f"no answers for template {template_id}")
        try:
            decoded = json.loads(row["answer"]) or {}
            return {int(number): str(letter) for number, letter in decoded.items()}
        except (ValueError, TypeError, AttributeError) as exc:
            self._log.error(f"Error is unmarshal answer: {exc}")
            raise ValueError(f"malformed answers for template {template_id}") from exc

    def get_id(self, student_id: str, day: str) -> str:
        """Return the id of the student's template for ``day``."""
        with _log_errors(self._log, "Error is get template"):
            row = self._db.execute(
                "SELECT id FROM templates WHERE student_id = ? AND day = ? ORDER BY rowid",
                (student_id, day),
            ).fetchone()
        if row is None:
            self._log.error(f"Error is get template: no rows for {student_id} on {day}")
            raise NotFoundError(f"no template for student {student_id} on {day}")
        return row["id"]