from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class HistoryRow:
    """Read-model: one check-in joined with its event and event type."""

    attend_id: int
    event_title: Optional[str]
    type_name: Optional[str]
    checkin_date: Optional[datetime]
