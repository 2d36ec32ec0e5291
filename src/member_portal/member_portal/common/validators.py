from __future__ import annotations

import re
from typing import Any, Callable, Mapping, Optional

from ..core.exceptions import ValidationError

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def require_non_empty(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(
            f"The {field_name} field is required.",
            {field_name: f"The {field_name} field is required."},
        )
    return value


def optional_string(value: Any, field_name: str, *, max_len: int) -> Optional[str]:
    """Accept None/'' as "not provided"; otherwise a string up to max_len."""
    if value is None or value == "":
        return value
    if not isinstance(value, str):
        raise ValidationError(
            f"The {field_name} field must be a string.",
            {field_name: f"The {field_name} field must be a string."},
        )
    if len(value) > max_len:
        raise ValidationError(
            f"The {field_name} field must not be greater than {max_len} characters.",
            {field_name: f"The {field_name} field must not be greater than {max_len} characters."},
        )
    return value


def optional_email(value: Any, field_name: str, *, max_len: int) -> Optional[str]:
    value = optional_string(value, field_name, max_len=max_len)
    if value and not _EMAIL_RE.match(value):
        raise ValidationError(
            f"The {field_name} field must be a valid email address.",
            {field_name: f"The {field_name} field must be a valid email address."},
        )
    return value


def optional_bool(value: Any, field_name: str) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if value in (0, 1, "0", "1"):
        return bool(int(value))
    raise ValidationError(
        f"The {field_name} field must be true or false.",
        {field_name: f"The {field_name} field must be true or false."},
    )


def validate(
    data: Mapping[str, Any],
    rules: Mapping[str, Callable[[Any, str], Any]],
    *,
    message: str = "Validation failed",
) -> dict[str, Any]:
    """Run one rule per field; return only the ruled fields that were supplied.

    Keys without a rule are dropped. All failing fields are reported together,
    one (first) message each.
    """
    if not isinstance(data, Mapping):
        raise ValidationError(message, {"body": "The request body must be a JSON object."})

    validated: dict[str, Any] = {}
    errors: dict[str, str] = {}
    for field_name, rule in rules.items():
        try:
            value = rule(data.get(field_name), field_name)
        except ValidationError as e:
            for key, msg in e.errors.items():
                errors.setdefault(key, msg)
            continue
        if field_name in data:
            validated[field_name] = value
    if errors:
        raise ValidationError(message, errors)
    return validated
