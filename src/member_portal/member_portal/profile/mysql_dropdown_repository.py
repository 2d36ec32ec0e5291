from __future__ import annotations

from typing import Iterable, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import DropdownOption
from .repository import DropdownOptionRepository


def _to_option(r: dict) -> DropdownOption:
    return DropdownOption(
        list_id=int(r["lst_ID"]),
        option_id=int(r["lst_OptionID"]),
        sequence=int(r.get("lst_OptionSequence") or 0),
        label=r["lst_OptionName"],
    )


class MySQLDropdownOptionRepository(DropdownOptionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[DropdownOption]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT lst_ID, lst_OptionID, lst_OptionSequence, lst_OptionName
                FROM list_lst
                ORDER BY lst_ID ASC, lst_OptionSequence ASC
                """
            )
            return [_to_option(r) for r in fetchall(cur)]

    def list_for_lists(self, list_ids: Iterable[int]) -> Sequence[DropdownOption]:
        ids = sorted({int(i) for i in list_ids})
        if not ids:
            return []
        placeholders = ", ".join(["%s"] * len(ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT lst_ID, lst_OptionID, lst_OptionSequence, lst_OptionName
                FROM list_lst
                WHERE lst_ID IN ({placeholders})
                ORDER BY lst_ID ASC, lst_OptionSequence ASC
                """,
                tuple(ids),
            )
            return [_to_option(r) for r in fetchall(cur)]
