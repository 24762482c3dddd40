"""The application service: every business operation over one storage."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from edutest.pdf import DEFAULT_PDF_DIR
from edutest.service.questions import QuestionService
from edutest.service.students import StudentService
from edutest.service.subjects import SubjectService
from edutest.service.templates import TemplateService
from edutest.storage.storage import Storage


@dataclass
class Service:
    """Groups the services for subjects, students, questions and templates."""

    storage: Storage
    logger: logging.Logger
    subjects: SubjectService
    students: StudentService
    questions: QuestionService
    templates: TemplateService


def build_service(
    storage: Storage,
    logger: logging.Logger | None = None,
    pdf_dir: str | Path = DEFAULT_PDF_DIR,
) -> Service:
    """Create every service over ``storage``, writing PDFs to ``pdf_dir``."""
    logger = logger or logging.getLogger("edutest")
    return Service(
        storage=storage,
        logger=logger,
        subjects=SubjectService(storage, logger),
        students=StudentService(storage, logger),
        questions=QuestionService(storage, logger),
        templates=TemplateService(storage, logger, pdf_dir),
    )