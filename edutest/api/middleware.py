"""Request hooks: CORS headers and bearer-token authentication."""

from __future__ import annotations

from typing import Callable

import jwt
from flask import Response, g, jsonify, request

_ALGORITHMS = ["HS256", "HS384", "HS512"]


def add_cors_headers(response: Response) -> Response:
    """Allow cross-origin calls from any origin."""
    response.headers["Access-Control-Allow-Origin"] = "*"
    response.headers["Access-Control-Allow-Methods"] = "GET, POST, PUT, DELETE, OPTIONS"
    response.headers["Access-Control-Allow-Headers"] = "Content-Type, Authorization"
    return response


def extract_token(header: str) -> str:
    """Return the token of an Authorization value, with or without its scheme."""
    if header.lower().startswith("bearer "):
        if header.startswith("Bearer"):
            header = header[len("Bearer"):]
    return header.strip()


def _unauthorized(message: str, error: str):
    return jsonify({"message": message, "error": error}), 401


def auth_required(jwt_key: str) -> Callable[[], object]:
    """Return a before-request hook that rejects calls without a valid token.

    On success the token's ``user_id`` item is stored in ``flask.g.user_id``.
    """

    def check_token():
        header = request.headers.get("Authorization", "")
        if not header:
            return _unauthorized("Authorization header is missing", "unauthorized")
        try:
            claims = jwt.decode(extract_token(header), jwt_key, algorithms=_ALGORITHMS)
            items = claims.get("items") or {}
            if not isinstance(items, dict):
                raise jwt.InvalidTokenError("claim items must be an object")
        except jwt.PyJWTError as exc:
            return _unauthorized("Invalid or expired token", str(exc))
        g.user_id = items.get("user_id")
        return None

    return check_token