from __future__ import annotations

from typing import Any, Mapping, Optional

from flask import current_app, jsonify


def success(data: Any = None, *, message: Optional[str] = None, status: int = 200):
    body: dict[str, Any] = {"success": True}
    if message is not None:
        body["message"] = message
    if data is not None:
        body["data"] = data
    return jsonify(body), status


def failure(
    message: str,
    status: int,
    *,
    errors: Optional[Mapping[str, str]] = None,
    exc: Optional[BaseException] = None,
):
    """Error envelope. Exception detail is only exposed when DEBUG is on."""
    body: dict[str, Any] = {"success": False, "message": message}
    if errors:
        body["errors"] = dict(errors)
    if exc is not None and bool(current_app.config.get("DEBUG", False)):
        body["error"] = str(exc)
    return jsonify(body), status
