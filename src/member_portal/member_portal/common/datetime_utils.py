from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from ..core.constants import DATE_FORMAT, DATETIME_FORMAT


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def format_date(value: Any) -> Optional[str]:
    """Render a DATE/DATETIME column as YYYY-MM-DD (None stays None)."""
    if value is None:
        return None
    if isinstance(value, (date, datetime)):
        return value.strftime(DATE_FORMAT)
    text = str(value).strip()
    # Zero dates come back as strings from legacy ChurchCRM rows.
    if not text or text.startswith("0000-00-00"):
        return None
    return text[:10]


def format_datetime(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.strftime(DATETIME_FORMAT)
    return str(value)


def isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None
