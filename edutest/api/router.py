"""The web application: every endpoint group behind one Flask app."""

from __future__ import annotations

import logging
from pathlib import Path

from flask import Flask

from edutest.api.middleware import add_cors_headers
from edutest.api.questions import questions_blueprint
from edutest.api.students import students_blueprint
from edutest.api.subjects import subjects_blueprint
from edutest.api.templates import templates_blueprint
from edutest.service.core import Service


def create_app(
    service: Service,
    logger: logging.Logger | None = None,
    upload_dir: str | Path = ".",
) -> Flask:
    """Return the application serving students, subjects, questions and templates."""
    log = logger or logging.getLogger("edutest")
    app = Flask("edutest")
    app.after_request(add_cors_headers)
    app.register_blueprint(students_blueprint(service, log, upload_dir))
    app.register_blueprint(subjects_blueprint(service, log))
    app.register_blueprint(questions_blueprint(service, log, upload_dir))
    app.register_blueprint(templates_blueprint(service, log))
    return app