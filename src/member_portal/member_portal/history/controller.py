from __future__ import annotations

import logging

from flask import Flask

from ..auth.guard import bearer_required, current_token
from ..common.responses import failure, success
from ..container import Container
from ..core.constants import API_PREFIX

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route(f"{API_PREFIX}/history", methods=["GET"], endpoint="api_history")
    @bearer_required(container)
    def show():
        person_id = current_token().person_id
        try:
            return success(container.history_service.get_history(person_id))
        except Exception as e:
            logger.exception("Fetching history failed person_id=%s", person_id)
            return failure("An error occurred while fetching history.", 500, exc=e)
