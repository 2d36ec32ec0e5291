from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import HistoryRow
from .repository import HistoryRepository


class MySQLHistoryRepository(HistoryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_person(self, person_id: int) -> Sequence[HistoryRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT a.attend_id, e.event_title, t.type_name, a.checkin_date
                FROM event_attend a
                JOIN events_event e ON a.event_id = e.event_id
                JOIN event_types t ON e.event_type = t.type_id
                JOIN person_per p ON a.person_id = p.per_ID
                WHERE a.person_id=%s
                ORDER BY e.event_start DESC
                """,
                (person_id,),
            )
            return [
                HistoryRow(
                    attend_id=int(r["attend_id"]),
                    event_title=r.get("event_title"),
                    type_name=r.get("type_name"),
                    checkin_date=r.get("checkin_date"),
                )
                for r in fetchall(cur)
            ]
