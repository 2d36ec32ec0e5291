"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

API_PREFIX = "/api"

TOKEN_NAME = "portal-member-token"
DEFAULT_TOKEN_TTL_HOURS = 24
DEFAULT_REMEMBER_TTL_DAYS = 14

INVALID_CREDENTIALS_MESSAGE = "The provided credentials are incorrect."
UNAUTHENTICATED_MESSAGE = "Unauthenticated."
UNAUTHORIZED_MESSAGE = "This action is unauthorized."
API_NOT_FOUND_MESSAGE = "API endpoint not found"

DATE_FORMAT = "%Y-%m-%d"
DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"
