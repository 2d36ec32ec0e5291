from __future__ import annotations

import logging

from ..common.datetime_utils import format_datetime
from .repository import HistoryRepository

logger = logging.getLogger(__name__)


class HistoryService:
    def __init__(self, history: HistoryRepository):
        self._history = history

    def get_history(self, person_id: int) -> list[dict]:
        try:
            rows = self._history.list_for_person(int(person_id))
        except Exception as e:
            logger.error("Failed to fetch history data person_id=%s error=%s", person_id, e)
            raise

        return [
            {
                "attend_id": r.attend_id,
                "event_title": r.event_title,
                "type_name": r.type_name,
                "checkin_date": format_datetime(r.checkin_date),
            }
            for r in rows
        ]
