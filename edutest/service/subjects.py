"""Business operations on subjects."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from edutest.models import Subject
from edutest.storage.storage import Storage


@contextmanager
def _log_failure(logger: logging.Logger, message: str) -> Iterator[None]:
    try:
        yield
    except Exception as exc:
        logger.error(f"{message}: {exc}")
        raise


class SubjectService:
    """Creating, renaming and listing subjects."""

    def __init__(self, storage: Storage, logger: logging.Logger | None = None) -> None:
        self._storage = storage
        self._log = logger or logging.getLogger("edutest")

    def create(self, name: str) -> str:
        """Create a subject and return its id."""
        with _log_failure(self._log, "Error is save data of subject ad database"):
            return self._storage.subjects.create(name)

    def update(self, subject_id: str, name: str) -> None:
        """Rename a subject."""
        with _log_failure(self._log, "Error is update subject"):
            self._storage.subjects.update(subject_id, name)

    def list(self, subject_id: str = "") -> list[Subject]:
        """Return every subject, or only the one with ``subject_id``."""
        with _log_failure(self._log, "Error is get subjects from database"):
            return self._storage.subjects.list(subject_id)