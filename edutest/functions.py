"""Helpers for shuffling answer options and reading generated PDFs."""

from __future__ import annotations

import dataclasses
import random
from pathlib import Path

from edutest.models import Option, Question

LETTERS = "ABCD"
DEFAULT_PDF_DIR = "storage/pdfs"


def random_options(
    questions: list[Question], rng: random.Random | None = None
) -> tuple[list[Question], dict[int, str]]:
    """Shuffle each question's options.

    Returns the shuffled questions and a map from question number (1-based)
    to the letter of the correct option.
    """
    if rng is None:
        rng = random.Random()
    shuffled: list[Question] = []
    answers: dict[int, str] = {}
    for number, question in enumerate(questions, start=1):
        opts = question.options
        variants = [opts.a, opts.b, opts.c, opts.d]
        rng.shuffle(variants)
        shuffled.append(dataclasses.replace(question, options=Option(*variants)))
        for letter, text in zip(LETTERS, variants):
            if text == question.answer:
                answers[number] = letter
                break
    return shuffled, answers


def read_pdf_file(file_id: str, base_dir: str | Path = DEFAULT_PDF_DIR) -> bytes:
    """Return the bytes of the PDF stored under ``base_dir`` for ``file_id``."""
    path = Path(base_dir).resolve() / f"{file_id}.pdf"
    return path.read_bytes()