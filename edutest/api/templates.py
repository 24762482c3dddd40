"""HTTP endpoints for test templates."""

from __future__ import annotations

import logging
from typing import Any

from flask import Blueprint, Response, jsonify, request

from edutest.models import QuestionAnswer, to_dict
from edutest.service.core import Service

BAD_INPUT = "Noto'g'ri ma'lumot kiritildi"
SERVER_ERROR = "Serverda xatolik"


def _error(message: str, error: str = "") -> dict[str, str]:
    return {"message": message, "error": error}


def _object(body: Any) -> dict[str, Any]:
    if not isinstance(body, dict):
        raise ValueError("request body must be a JSON object")
    return body


def _string_field(body: dict[str, Any], key: str) -> str:
    value = body.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"field {key!r} must be a string")
    return value


def _answers(value: Any) -> list[QuestionAnswer]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError("answers must be a list")
    answers = []
    for item in value:
        item = _object(item)
        number = item.get("number")
        if number is None:
            number = 0
        if isinstance(number, bool) or not isinstance(number, int):
            raise ValueError("answer number must be an integer")
        answers.append(QuestionAnswer(number=number, answer=_string_field(item, "answer")))
    return answers


def templates_blueprint(service: Service, logger: logging.Logger | None = None) -> Blueprint:
    """Return the /templates endpoints backed by ``service``."""
    log = logger or logging.getLogger("edutest")
    bp = Blueprint("templates", __name__, url_prefix="/templates")

    @bp.post("/create")
    def create_template():
        try:
            body = _object(request.get_json(force=True, silent=True))
            student_id = _string_field(body, "student_id")
            day = _string_field(body, "day")
        except ValueError as exc:
            log.error(f"Error is get data: {exc}")
            return jsonify(_error(BAD_INPUT)), 400
        try:
            service.templates.create(student_id, day)
        except Exception as exc:
            log.error(f"Error is service function CreateTemplate: {exc}")
            return jsonify(_error(SERVER_ERROR)), 500
        return jsonify({"message": "Success!"})

    @bp.post("/check")
    def check_student_test():
        try:
            body = _object(request.get_json(force=True, silent=True))
            student_id = _string_field(body, "student_id")
            day = _string_field(body, "day")
            answers = _answers(body.get("answers"))
        except ValueError as exc:
            log.error(f"Error is get data: {exc}")
            return jsonify(_error(BAD_INPUT)), 400
        try:
            result = service.templates.check(student_id, day, answers)
        except Exception as exc:
            log.error(f"Error is service function CheckStudentTest: {exc}")
            return jsonify(_error(SERVER_ERROR, str(exc))), 500
        return jsonify(to_dict(result))

    @bp.get("/get")
    def get_student_template():
        student_id = request.args.get("student_id", "")
        day = request.args.get("day", "")
        if not student_id or not day:
            return jsonify(_error("student_id va day parametrlari kerak")), 400
        try:
            data = service.templates.get_pdf(student_id, day)
        except Exception as exc:
            log.error(f"Xatolik GetStudentTemplates: {exc}")
            return jsonify(_error(SERVER_ERROR)), 500
        if not data:
            return jsonify(_error("Fayl topilmadi")), 404
        filename = f"template_{student_id}_{day}.pdf"
        return Response(
            data,
            content_type="application/octet-stream",
            headers={
                "Content-Disposition": f"attachment; filename={filename}",
                "Content-Length": str(len(data)),
            },
        )

    return bp