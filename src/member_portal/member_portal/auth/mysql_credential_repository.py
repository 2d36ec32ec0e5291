from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Credential
from .repository import CredentialRepository


def _to_credential(row: dict) -> Credential:
    return Credential(
        person_id=int(row["usr_per_ID"]),
        username=row["usr_UserName"],
        password_hash=row.get("usr_Password") or "",
        is_admin=int(row.get("usr_Admin") or 0) == 1,
        last_login=row.get("usr_LastLogin"),
        login_count=int(row.get("usr_LoginCount") or 0),
        needs_password_change=bool(row.get("usr_NeedPasswordChange")),
    )


class MySQLCredentialRepository(CredentialRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_username(self, username: str) -> Optional[Credential]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT usr_per_ID, usr_UserName, usr_Password, usr_Admin,
                       usr_LastLogin, usr_LoginCount, usr_NeedPasswordChange
                FROM user_usr
                WHERE usr_UserName=%s
                """,
                (username,),
            )
            row = fetchone(cur)
            return _to_credential(row) if row else None

    def get_by_person_id(self, person_id: int) -> Optional[Credential]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT usr_per_ID, usr_UserName, usr_Password, usr_Admin,
                       usr_LastLogin, usr_LoginCount, usr_NeedPasswordChange
                FROM user_usr
                WHERE usr_per_ID=%s
                """,
                (person_id,),
            )
            row = fetchone(cur)
            return _to_credential(row) if row else None

    def record_login(self, person_id: int, *, at: datetime) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE user_usr
                SET usr_LoginCount=COALESCE(usr_LoginCount, 0) + 1, usr_LastLogin=%s
                WHERE usr_per_ID=%s
                """,
                (at, person_id),
            )
