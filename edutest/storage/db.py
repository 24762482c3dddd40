"""Opening the application database and creating its schema."""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

SCHEMA = """
CREATE TABLE IF NOT EXISTS subjects (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS students (
    id TEXT PRIMARY KEY,
    student_id TEXT NOT NULL,
    name TEXT NOT NULL,
    lastname TEXT NOT NULL,
    phone_number TEXT NOT NULL,
    created_at TEXT DEFAULT CURRENT_TIMESTAMP,
    deleted_at TEXT
);
CREATE TABLE IF NOT EXISTS student_subjects (
    student_id TEXT NOT NULL,
    subject1 TEXT NOT NULL,
    subject2 TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS questions (
    id TEXT PRIMARY KEY,
    subject_id TEXT NOT NULL,
    question_text TEXT NOT NULL,
    options TEXT NOT NULL,
    answer TEXT NOT NULL,
    question_image TEXT NOT NULL DEFAULT '',
    options_image TEXT NOT NULL,
    answer_image TEXT NOT NULL DEFAULT '',
    type TEXT NOT NULL DEFAULT '',
    deleted_at TEXT
);
CREATE TABLE IF NOT EXISTS templates (
    id TEXT PRIMARY KEY,
    student_id TEXT NOT NULL,
    day TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS template_questions (
    template_id TEXT NOT NULL,
    question_id TEXT NOT NULL,
    question_number INTEGER NOT NULL
);
CREATE TABLE IF NOT EXISTS template_answers (
    template_id TEXT NOT NULL,
    answer TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS students_result (
    student_id TEXT NOT NULL,
    template_id TEXT NOT NULL,
    result TEXT NOT NULL,
    ball REAL
);
"""


class NotFoundError(LookupError):
    """A query that must return a row returned none."""


def connect(path: str | Path = ":memory:") -> sqlite3.Connection:
    """Open the database at ``path`` and make sure every table exists."""
    conn = sqlite3.connect(str(path), check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.executescript(SCHEMA)
    return conn


@contextmanager
def _log_errors(logger: logging.Logger, message: str) -> Iterator[None]:
    """Log database errors with ``message`` and let them propagate."""
    try:
        yield
    except sqlite3.Error as exc:
        logger.error(f"{message}: {exc}")
        raise