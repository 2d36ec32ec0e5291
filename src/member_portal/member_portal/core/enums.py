from __future__ import annotations

from enum import Enum


class Capability(str, Enum):
    """Capability tags carried by an access token."""

    PROFILE_READ = "profile:read"
    PROFILE_UPDATE = "profile:update"
    QR_READ = "qr:read"
    ADMIN_ACCESS = "admin:access"


class Gender(int, Enum):
    UNKNOWN = 0
    MALE = 1
    FEMALE = 2


class CustomFieldType(str, Enum):
    """Value type of a custom-field slot, fixed by schema."""

    TEXT = "text"
    DATE = "date"
    DROPDOWN = "dropdown"
