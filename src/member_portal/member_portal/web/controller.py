from __future__ import annotations

import logging

from flask import Flask, render_template, request, send_from_directory
from werkzeug.exceptions import HTTPException

from ..common.responses import failure
from ..container import Container
from ..core.constants import API_NOT_FOUND_MESSAGE, API_PREFIX

logger = logging.getLogger(__name__)

_ANY_METHOD = ["GET", "POST", "PUT", "PATCH", "DELETE"]


def _is_api_request() -> bool:
    return request.path == API_PREFIX or request.path.startswith(f"{API_PREFIX}/")


def register(app: Flask, container: Container) -> None:
    @app.route("/sw.js", endpoint="pwa_service_worker")
    def service_worker():
        response = send_from_directory(app.static_folder, "sw.js", mimetype="application/javascript")
        response.headers["Service-Worker-Allowed"] = "/"
        response.headers["Cache-Control"] = "no-cache, no-store, must-revalidate"
        return response

    @app.route("/manifest.json", endpoint="pwa_manifest")
    def manifest():
        response = send_from_directory(app.static_folder, "manifest.json", mimetype="application/manifest+json")
        response.headers["Cache-Control"] = "public, max-age=604800"
        return response

    @app.route(API_PREFIX, methods=_ANY_METHOD, endpoint="api_root_fallback")
    @app.route(f"{API_PREFIX}/<path:path>", methods=_ANY_METHOD, endpoint="api_fallback")
    def api_fallback(path: str = ""):
        return failure(API_NOT_FOUND_MESSAGE, 404)

    @app.route("/", defaults={"path": ""}, endpoint="spa")
    @app.route("/<path:path>", endpoint="spa_any")
    def spa(path: str):
        return render_template("app.html")

    @app.errorhandler(HTTPException)
    def http_error(e: HTTPException):
        if not _is_api_request():
            return e
        if e.code == 404:
            return failure(API_NOT_FOUND_MESSAGE, 404)
        return failure(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def unhandled_error(e: Exception):
        logger.exception("Unhandled error path=%s", request.path)
        return failure("Server Error", 500, exc=e)
