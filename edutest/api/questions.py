"""HTTP endpoints for questions, workbook imports and image uploads."""

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path
from typing import Any

from flask import Blueprint, jsonify, request

from edutest.api.students import _error, _save_upload, _UploadError
from edutest.models import Question, to_dict
from edutest.service.core import Service

BAD_INPUT = "Noto'g'ri ma'lumot kiritildi"
SERVER_ERROR = "Serverda xatolik"
IMAGE_DIR = "images"


def _parse_question(body: Any) -> Question:
    if not isinstance(body, dict):
        raise ValueError("request body must be a JSON object")
    try:
        return Question.from_dict(body)
    except (TypeError, KeyError, AttributeError) as exc:
        raise ValueError(str(exc)) from exc


def questions_blueprint(
    service: Service,
    logger: logging.Logger | None = None,
    upload_dir: str | Path = ".",
) -> Blueprint:
    """Return the /questions endpoints backed by ``service``."""
    log = logger or logging.getLogger("edutest")
    bp = Blueprint("questions", __name__, url_prefix="/questions")

    @bp.post("/create")
    def create_question():
        try:
            question = _parse_question(request.get_json(force=True, silent=True))
        except ValueError as exc:
            log.error(f"Error is get data: {exc}")
            return jsonify(_error(BAD_INPUT)), 400
        try:
            service.questions.create(question)
        except Exception as exc:
            log.error(f"Error is service function CreateQuestion: {exc}")
            return jsonify(_error(SERVER_ERROR)), 500
        return jsonify({"message": "Success!"})

    @bp.put("/update/<question_id>")
    def update_question(question_id: str):
        try:
            question = _parse_question(request.get_json(force=True, silent=True))
        except ValueError as exc:
            log.error(f"Error is get data: {exc}")
            return jsonify(_error(BAD_INPUT)), 400
        try:
            service.questions.update(dataclasses.replace(question, id=question_id))
        except Exception as exc:
            log.error(f"Error is service function UpdateQuestion: {exc}")
            return jsonify(_error(SERVER_ERROR)), 500
        return jsonify({"message": "Success!"})

    @bp.delete("/delete/<question_id>")
    def delete_question(question_id: str):
        try:
            service.questions.delete(question_id)
        except Exception as exc:
            log.error(f"Error is service function DeleteQuestion: {exc}")
            return jsonify(_error(SERVER_ERROR)), 500
        return jsonify({"message": "Success!"})

    @bp.get("")
    def get_questions():
        try:
            questions = service.questions.list(
                request.args.get("id", ""),
                request.args.get("subject_id", ""),
                request.args.get("type", ""),
            )
        except Exception as exc:
            log.error(f"Error is service function GetQuestions: {exc}")
            return jsonify(_error(SERVER_ERROR)), 500
        return jsonify({"questions": to_dict(questions)})

    @bp.post("/upload")
    def upload_questions():
        try:
            path = _save_upload(request.files, "file", upload_dir)
        except _UploadError as exc:
            log.error(f"Error is upload file: {exc.error}")
            return jsonify(_error(exc.message, exc.error)), 400
        try:
            status = service.questions.import_workbook(path)
        except Exception as exc:
            log.error(f"Error is service function OpenQuestionsExelFile: {exc}")
            return jsonify(_error(SERVER_ERROR, str(exc))), 500
        return jsonify(to_dict(status))

    @bp.post("/image/upload")
    def upload_image():
        try:
            path = _save_upload(request.files, "image", Path(upload_dir) / IMAGE_DIR)
        except _UploadError as exc:
            log.error(f"Error is upload file: {exc.error}")
            status = 400 if exc.message != "Faylni saqlashda xatolik" else 500
            return jsonify(_error(exc.message, exc.error)), status
        return jsonify(str(path))

    return bp