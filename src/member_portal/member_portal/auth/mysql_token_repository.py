from __future__ import annotations

import json
from datetime import datetime
from typing import Iterable, Optional

from ..core.enums import Capability
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import AccessToken
from .repository import TokenRepository


def _parse_abilities(raw) -> frozenset[Capability]:
    out = set()
    for value in json.loads(raw or "[]"):
        try:
            out.add(Capability(value))
        except ValueError:
            continue
    return frozenset(out)


class MySQLTokenRepository(TokenRepository):
    """Portal-owned ``portal_access_tokens`` table."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        person_id: int,
        name: str,
        token_hash: str,
        abilities: Iterable[Capability],
        expires_at: datetime,
        created_at: datetime,
    ) -> AccessToken:
        abilities = frozenset(abilities)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO portal_access_tokens(person_id, name, token_hash, abilities, expires_at, created_at)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    person_id,
                    name,
                    token_hash,
                    json.dumps(sorted(a.value for a in abilities)),
                    expires_at,
                    created_at,
                ),
            )
            token_id = int(cur.lastrowid)
        return AccessToken(
            token_id=token_id,
            person_id=int(person_id),
            name=name,
            token_hash=token_hash,
            abilities=abilities,
            expires_at=expires_at,
            created_at=created_at,
        )

    def get_by_id(self, token_id: int) -> Optional[AccessToken]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, person_id, name, token_hash, abilities, expires_at, created_at, last_used_at
                FROM portal_access_tokens
                WHERE id=%s
                """,
                (token_id,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return AccessToken(
                token_id=int(r["id"]),
                person_id=int(r["person_id"]),
                name=r["name"],
                token_hash=r["token_hash"],
                abilities=_parse_abilities(r.get("abilities")),
                expires_at=r["expires_at"],
                created_at=r["created_at"],
                last_used_at=r.get("last_used_at"),
            )

    def delete(self, token_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM portal_access_tokens WHERE id=%s", (token_id,))
            return cur.rowcount > 0

    def delete_for_person(self, person_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM portal_access_tokens WHERE person_id=%s", (person_id,))
            return int(cur.rowcount)

    def touch(self, token_id: int, *, at: datetime) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE portal_access_tokens SET last_used_at=%s WHERE id=%s", (at, token_id))
