from __future__ import annotations

import logging
from functools import wraps

from flask import g, request

from ..common.responses import failure
from ..container import Container
from ..core.constants import UNAUTHENTICATED_MESSAGE, UNAUTHORIZED_MESSAGE
from ..core.enums import Capability
from ..core.exceptions import AuthenticationError, AuthorizationError
from .model import AccessToken

logger = logging.getLogger(__name__)


def _bearer_token() -> str:
    header = request.headers.get("Authorization", "")
    scheme, _, value = header.partition(" ")
    if scheme.lower() != "bearer":
        return ""
    return value.strip()


def bearer_required(container: Container, *abilities: Capability):
    """Require a valid bearer token (and every listed capability)."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            raw = _bearer_token()
            if not raw:
                return failure(UNAUTHENTICATED_MESSAGE, 401)
            try:
                token = container.auth_service.authenticate_token(raw)
                container.auth_service.authorize(token, *abilities)
            except AuthenticationError:
                return failure(UNAUTHENTICATED_MESSAGE, 401)
            except AuthorizationError:
                return failure(UNAUTHORIZED_MESSAGE, 403)
            except Exception as e:
                logger.exception("Token check failed path=%s", request.path)
                return failure("An error occurred while authenticating.", 500, exc=e)

            g.access_token = token
            return view(*args, **kwargs)

        return wrapper

    return decorator


def current_token() -> AccessToken:
    return g.access_token
