"""HTTP endpoints for subjects."""

from __future__ import annotations

import logging
from typing import Any

from flask import Blueprint, jsonify, request

from edutest.models import to_dict
from edutest.service.core import Service

BAD_INPUT = "Noto'g'ri ma'lumot kiritildi"
SERVER_ERROR = "Serverda xatolik"


def _error(message: str, error: str = "") -> dict[str, str]:
    return {"message": message, "error": error}


def _string_field(body: Any, key: str) -> str:
    if not isinstance(body, dict):
        raise ValueError("request body must be a JSON object")
    value = body.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"field {key!r} must be a string")
    return value


def subjects_blueprint(service: Service, logger: logging.Logger | None = None) -> Blueprint:
    """Return the /subjects endpoints backed by ``service``."""
    log = logger or logging.getLogger("edutest")
    bp = Blueprint("subjects", __name__, url_prefix="/subjects")

    @bp.post("/create")
    def create_subject():
        try:
            name = _string_field(request.get_json(force=True, silent=True), "name")
        except ValueError as exc:
            log.error(f"Error is get data: {exc}")
            return jsonify(_error(BAD_INPUT)), 400
        try:
            service.subjects.create(name)
        except Exception as exc:
            log.error(f"Error is service function CreateSubject: {exc}")
            return jsonify(_error(SERVER_ERROR)), 500
        return jsonify({"message": "Success!"})

    @bp.delete("/update/<subject_id>")
    def update_subject(subject_id: str):
        try:
            service.subjects.update(subject_id, request.args.get("name", ""))
        except Exception as exc:
            log.error(f"Error is service function UpdateSubject: {exc}")
            return jsonify(_error(SERVER_ERROR, str(exc))), 500
        return jsonify({"message": "Success!"})

    @bp.get("/get")
    def get_subjects():
        try:
            subjects = service.subjects.list(request.args.get("id", ""))
        except Exception as exc:
            log.error(f"Error is service function GetSubjects: {exc}")
            return jsonify(_error(SERVER_ERROR)), 500
        return jsonify({"subjects": to_dict(subjects)})

    return bp