"""Access to every repository through one database connection."""

from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass, field
from pathlib import Path

from edutest.storage.db import connect
from edutest.storage.questions import QuestionRepository
from edutest.storage.students import StudentRepository
from edutest.storage.subjects import SubjectRepository
from edutest.storage.templates import TemplateRepository


@dataclass
class Storage:
    """The repositories of the application, sharing one connection."""

    db: sqlite3.Connection
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("edutest"))
    students: StudentRepository = field(init=False)
    subjects: SubjectRepository = field(init=False)
    questions: QuestionRepository = field(init=False)
    templates: TemplateRepository = field(init=False)

    def __post_init__(self) -> None:
        self.students = StudentRepository(self.db, self.logger)
        self.subjects = SubjectRepository(self.db, self.logger)
        self.questions = QuestionRepository(self.db, self.logger)
        self.templates = TemplateRepository(self.db, self.logger)

    def close(self) -> None:
        """Close the underlying connection."""
        self.db.close()

    def __enter__(self) -> Storage:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def open_storage(
    path: str | Path = ":memory:", logger: logging.Logger | None = None
) -> Storage:
    """Open the database at ``path`` and return its repositories."""
    return Storage(connect(path), logger or logging.getLogger("edutest"))