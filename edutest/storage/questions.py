"""Persistence of test questions."""

from __future__ import annotations

import dataclasses
import json
import logging
import sqlite3
import uuid

from edutest.models import Option, Question
from edutest.storage.db import _log_errors

_COLUMNS = (
    "id, subject_id, type, question_text, options, answer,"
    " question_image, options_image, answer_image"
)


def _encode_option(option: Option) -> str:
    return json.dumps(dataclasses.asdict(option), ensure_ascii=False)


class QuestionRepository:
    """Question records backed by the application database."""

    def __init__(self, db: sqlite3.Connection, logger: logging.Logger | None = None) -> None:
        self._db = db
        self._log = logger or logging.getLogger("edutest")

    def _decode_option(self, text: str | bytes | None, what: str) -> Option:
        try:
            return Option.from_dict(json.loads(text) if text else None)
        except (ValueError, TypeError) as exc:
            self._log.error(f"Error is unmarshal {what}: {exc}")
            raise

    def _to_question(self, row: sqlite3.Row) -> Question:
        return Question(
            id=row["id"],
            subject_id=row["subject_id"],
            type=row["type"],
            question_text=row["question_text"],
            options=self._decode_option(row["options"], "options"),
            answer=row["answer"],
            question_image_url=row["question_image"],
            option_image_url=self._decode_option(row["options_image"], "optionsUrl"),
            answer_image_url=row["answer_image"],
        )

    def create(self, question: Question) -> str:
        """Insert a question and return its new id."""
        question_id = str(uuid.uuid4())
        with _log_errors(self._log, "Error is insert data of question"), self._db:
            self._db.execute(
                "INSERT INTO questions(id, subject_id, question_text, options, answer,"
                " question_image, options_image, answer_image, type)"
                " VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    question_id,
                    question.subject_id,
                    question.question_text,
                    _encode_option(question.options),
                    question.answer,
                    question.question_image_url,
                    _encode_option(question.option_image_url),
                    question.answer_image_url,
                    question.type,
                ),
            )
        return question_id

    def update(self, question: Question) -> None:
        """Replace the content of the question ``question.id``."""
        with _log_errors(self._log, "Error is update data of question"), self._db:
            self._db.execute(
                "UPDATE questions SET question_text = ?, options = ?, answer = ?,"
                " question_image = ?, options_image = ?, answer_image = ?, type = ?"
                " WHERE id = ?",
                (
                    question.question_text,
                    _encode_option(question.options),
                    question.answer,
                    question.question_image_url,
                    _encode_option(question.option_image_url),
                    question.answer_image_url,
                    question.type,
                    question.id,
                ),
            )

    def delete(self, question_id: str) -> None:
        """Mark the question deleted."""
        with _log_errors(self._log, "Error is delete question"), self._db:
            self._db.execute(
                "UPDATE questions SET deleted_at = CURRENT_TIMESTAMP WHERE id = ?",
                (question_id,),
            )

    def list(
        self, question_id: str = "", subject_id: str = "", type_: str = ""
    ) -> list[Question]:
        """Return non-deleted questions, filtered by any of the given fields."""
        query = f"SELECT {_COLUMNS} FROM questions WHERE deleted_at IS NULL"
        params: list[str] = []
        for column, value in (("id", question_id), ("subject_id", subject_id), ("type", type_)):
            if value:
                query += f" AND {column} = ?"
                params.append(value)
        query += " ORDER BY rowid"
        with _log_errors(self._log, "Error is get questions"):
            rows = self._db.execute(query, params).fetchall()
        return [self._to_question(row) for row in rows]

    def random_for_subject(self, subject_id: str, count: int) -> list[Question]:
        """Return up to ``count`` random non-deleted questions of a subject."""
        query = (
            f"SELECT {_COLUMNS} FROM questions"
            " WHERE deleted_at IS NULL AND subject_id = ?"
            " ORDER BY RANDOM() LIMIT ?"
        )
        with _log_errors(self._log, "Error is get questions"):
            rows = self._db.execute(query, (subject_id, count)).fetchall()
        return [self._to_question(row) for row in rows]