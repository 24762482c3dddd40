"""HTTP endpoints for students, their results and workbook imports."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from flask import Blueprint, jsonify, request

from edutest.models import Student, to_dict
from edutest.service.core import Service

BAD_INPUT = "Noto'g'ri ma'lumot kiritildi"
SERVER_ERROR = "Serverda xatolik"
UPLOAD_FAILED = "Faylni yuklab olishda xatolik"
SAVE_FAILED = "Faylni saqlashda xatolik"


class _UploadError(Exception):
    """An uploaded file is missing or cannot be stored."""

    def __init__(self, message: str, error: str) -> None:
        super().__init__(error)
        self.message = message
        self.error = error


def _error(message: str, error: str = "") -> dict[str, str]:
    return {"message": message, "error": error}


def _save_upload(files: Mapping[str, Any], field: str, directory: str | Path) -> Path:
    """Store the uploaded file of form field ``field`` in ``directory``."""
    upload = files.get(field)
    if upload is None or not upload.filename:
        raise _UploadError(UPLOAD_FAILED, f"no file in form field {field!r}")
    name = Path(upload.filename.replace("\\", "/")).name
    if name in ("", ".", ".."):
        raise _UploadError(UPLOAD_FAILED, f"invalid file name {upload.filename!r}")
    target = Path(directory) / name
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        upload.save(str(target))
    except OSError as exc:
        raise _UploadError(SAVE_FAILED, str(exc)) from exc
    return target


def _parse_student(body: Any) -> Student:
    if not isinstance(body, dict):
        raise ValueError("request body must be a JSON object")
    try:
        return Student.from_dict(body)
    except (TypeError, KeyError, AttributeError) as exc:
        raise ValueError(str(exc)) from exc


def students_blueprint(
    service: Service,
    logger: logging.Logger | None = None,
    upload_dir: str | Path = ".",
) -> Blueprint:
    """Return the /students endpoints backed by ``service``."""
    log = logger or logging.getLogger("edutest")
    bp = Blueprint("students", __name__, url_prefix="/students")

    @bp.post("/create")
    def create_student():
        try:
            student = _parse_student(request.get_json(force=True, silent=True))
        except ValueError as exc:
            log.error(f"Error is get data: {exc}")
            return jsonify(_error(BAD_INPUT)), 400
        try:
            number = service.students.create(student)
        except Exception as exc:
            log.error(f"Error is service function CreateStudent: {exc}")
            return jsonify(_error(SERVER_ERROR)), 500
        return jsonify({"student_id": number})

    @bp.put("/update/<student_id>")
    def update_student(student_id: str):
        try:
            student = _parse_student(request.get_json(force=True, silent=True))
        except ValueError as exc:
            log.error(f"Error is get data: {exc}")
            return jsonify(_error(BAD_INPUT)), 400
        try:
            service.students.update(dataclasses.replace(student, id=student_id))
        except Exception as exc:
            log.error(f"Error is service function UpdateStudent: {exc}")
            return jsonify(_error(SERVER_ERROR)), 500
        return jsonify({"message": "Success!"})

    @bp.delete("/delete/<student_id>")
    def delete_student(student_id: str):
        try:
            service.students.delete(student_id)
        except Exception as exc:
            log.error(f"Error is service function DeleteStudent: {exc}")
            return jsonify(_error(SERVER_ERROR)), 500
        return jsonify({"message": "Success!"})

    @bp.get("")
    def get_students():
        try:
            students = service.students.list(request.args.get("id", ""))
        except Exception as exc:
            log.error(f"Error is service function GetStudents: {exc}")
            return jsonify(_error(SERVER_ERROR)), 500
        return jsonify({"students": to_dict(students)})

    @bp.get("/<student_id>/result")
    def get_student_result(student_id: str):
        try:
            results = service.templates.student_result(
                student_id, request.args.get("template_id", "")
            )
        except Exception as exc:
            log.error(f"Error is service function GetStudentResult: {exc}")
            return jsonify(_error(SERVER_ERROR, str(exc))), 500
        return jsonify({"results": to_dict(results)})

    @bp.get("/results")
    def get_students_results():
        try:
            results = service.students.results(
                request.args.get("day", ""),
                request.args.get("subject1_id", ""),
                request.args.get("subject2_id", ""),
            )
        except Exception as exc:
            log.error(f"Error is service function GetStudentsResult: {exc}")
            return jsonify(_error(SERVER_ERROR, str(exc))), 500
        return jsonify({"students_results": to_dict(results), "count": len(results)})

    @bp.post("/upload")
    def upload_students():
        try:
            path = _save_upload(request.files, "file", upload_dir)
        except _UploadError as exc:
            log.error(f"Error is upload file: {exc.error}")
            return jsonify(_error(exc.message, exc.error)), 400
        try:
            status = service.students.import_workbook(path)
        except Exception as exc:
            log.error(f"Error is service function OpenStudentsExelFile: {exc}")
            return jsonify(_error(SERVER_ERROR, str(exc))), 500
        return jsonify(to_dict(status))

    return bp