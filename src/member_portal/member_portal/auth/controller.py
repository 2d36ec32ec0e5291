from __future__ import annotations

import logging

from flask import Flask, request

from ..common.responses import failure, success
from ..common.validators import optional_bool, require_non_empty, validate
from ..container import Container
from ..core.constants import API_PREFIX, INVALID_CREDENTIALS_MESSAGE
from ..core.exceptions import AuthenticationError, NotFoundError, ValidationError
from .guard import bearer_required, current_token

logger = logging.getLogger(__name__)

LOGIN_RULES = {
    "username": require_non_empty,
    "password": require_non_empty,
    "remember": optional_bool,
}


def register(app: Flask, container: Container) -> None:
    @app.route(f"{API_PREFIX}/login", methods=["POST"], endpoint="api_login")
    def login():
        try:
            payload = validate(request.get_json(silent=True) or {}, LOGIN_RULES)
            result = container.auth_service.login(
                payload["username"],
                payload["password"],
                payload.get("remember", False),
            )
            return success(result, message="Login successful")
        except ValidationError as e:
            return failure(e.args[0], 422, errors=e.errors)
        except AuthenticationError:
            return failure(
                INVALID_CREDENTIALS_MESSAGE,
                422,
                errors={"username": INVALID_CREDENTIALS_MESSAGE},
            )
        except Exception as e:
            logger.exception("Login failed with server error")
            return failure("An error occurred during login.", 500, exc=e)

    @app.route(f"{API_PREFIX}/user", methods=["GET"], endpoint="api_user")
    @bearer_required(container)
    def user():
        token = current_token()
        try:
            return success(container.auth_service.get_authenticated_user(token.person_id))
        except NotFoundError as e:
            return failure(str(e), 404)
        except Exception as e:
            logger.exception("Fetching user failed person_id=%s", token.person_id)
            return failure("An error occurred while fetching user data.", 500, exc=e)

    @app.route(f"{API_PREFIX}/logout", methods=["POST"], endpoint="api_logout")
    @bearer_required(container)
    def logout():
        token = current_token()
        try:
            container.auth_service.logout(token)
            return success(message="Logout successful")
        except Exception as e:
            logger.exception("Logout failed person_id=%s", token.person_id)
            return failure("An error occurred during logout.", 500, exc=e)
