"""Test administration service: students, subjects, questions, templates and grading."""

__version__ = "0.1.0"