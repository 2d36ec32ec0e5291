from __future__ import annotations

import io
import logging

from flask import Flask, request, send_file

from ..auth.guard import bearer_required, current_token
from ..common.responses import failure, success
from ..common.validators import optional_email, optional_string, validate
from ..container import Container
from ..core.constants import API_PREFIX
from ..core.enums import Capability
from ..core.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def _max(n: int):
    return lambda value, name: optional_string(value, name, max_len=n)


PROFILE_UPDATE_RULES = {
    "per_Address1": _max(255),
    "per_Address2": _max(255),
    "per_City": _max(100),
    "per_State": _max(100),
    "per_Zip": _max(20),
    "per_HomePhone": _max(30),
    "per_CellPhone": _max(30),
    "per_Email": lambda value, name: optional_email(value, name, max_len=100),
}


def register(app: Flask, container: Container) -> None:
    profiles = container.profile_service

    @app.route(f"{API_PREFIX}/profile", methods=["GET"], endpoint="api_profile_show")
    @bearer_required(container, Capability.PROFILE_READ)
    def show():
        person_id = current_token().person_id
        try:
            return success(profiles.get_profile(person_id))
        except NotFoundError:
            return failure("Profile not found.", 404)
        except Exception as e:
            logger.exception("Fetching profile failed person_id=%s", person_id)
            return failure("An error occurred while fetching profile.", 500, exc=e)

    @app.route(f"{API_PREFIX}/profile", methods=["PUT"], endpoint="api_profile_update")
    @bearer_required(container, Capability.PROFILE_UPDATE)
    def update():
        # The editor is always the caller; nobody edits someone else's record here.
        person_id = current_token().person_id
        try:
            payload = validate(request.get_json(silent=True) or {}, PROFILE_UPDATE_RULES)
            profile = profiles.update_profile(person_id, payload, editor_id=person_id)
            return success(profile, message="Profile updated successfully")
        except ValidationError as e:
            return failure("Validation failed", 422, errors=e.errors)
        except NotFoundError:
            return failure("Profile not found.", 404)
        except Exception as e:
            logger.exception("Updating profile failed person_id=%s", person_id)
            return failure("An error occurred while updating profile.", 500, exc=e)

    @app.route(f"{API_PREFIX}/profile/qr", methods=["GET"], endpoint="api_profile_qr")
    @bearer_required(container, Capability.QR_READ)
    def qr():
        person_id = current_token().person_id
        try:
            return success(profiles.get_qr_identity(person_id))
        except NotFoundError:
            return failure("Profile not found.", 404)
        except Exception as e:
            logger.exception("Generating QR data failed person_id=%s", person_id)
            return failure("An error occurred while generating QR data.", 500, exc=e)

    @app.route(f"{API_PREFIX}/profile/qr.png", methods=["GET"], endpoint="api_profile_qr_png")
    @bearer_required(container, Capability.QR_READ)
    def qr_png():
        person_id = current_token().person_id
        try:
            png = profiles.render_qr_png(person_id)
        except NotFoundError:
            return failure("Profile not found.", 404)
        except Exception as e:
            logger.exception("Rendering QR image failed person_id=%s", person_id)
            return failure("An error occurred while generating QR data.", 500, exc=e)
        return send_file(io.BytesIO(png), mimetype="image/png")

    @app.route(f"{API_PREFIX}/custom-fields", methods=["GET"], endpoint="api_custom_fields")
    @bearer_required(container)
    def custom_fields():
        try:
            return success(profiles.get_custom_field_definitions())
        except Exception as e:
            logger.exception("Fetching custom field definitions failed")
            return failure("An error occurred while fetching custom field definitions.", 500, exc=e)
