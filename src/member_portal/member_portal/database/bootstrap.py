"""Development bootstrap: apply schema/seed SQL and demo member accounts.

Production reads an existing ChurchCRM database; only ``portal_access_tokens``
is owned by this application.
"""
from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable

import mysql.connector

from ..auth.hashing import legacy_password_hash
from .connection import DBConfig

DEMO_MEMBERS = (
    # (person_id, username, password, is_admin)
    (1, "jdoe", "secret", False),
    (2, "admin", "admin123", True),
)


def _connect(target: DBConfig, *, with_database: bool = True):
    kwargs = dict(
        host=target.host,
        port=target.port,
        user=target.user,
        password=target.password,
        use_pure=True,
    )
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql usable regardless of the configured DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema/seed files (handles ';' inside quotes).
    buf: list[str] = []
    quote = ""
    escape = False

    for ch in sql:
        buf.append(ch)
        if escape:
            escape = False
            continue
        if ch == "\\":
            escape = True
            continue
        if ch in ("'", '"'):
            if not quote:
                quote = ch
            elif quote == ch:
                quote = ""
            continue
        if ch == ";" and not quote:
            buf.pop()
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _exec_sql(cur, sql: str) -> None:
    for stmt in _iter_sql_statements(sql):
        cur.execute(stmt)


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_mapping(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def _apply_sql_file(db_config: dict, path: str | Path) -> None:
    sql = _strip_create_db_and_use(Path(path).read_text(encoding="utf-8"))
    conn = _connect(DBConfig.from_mapping(db_config))
    try:
        cur = conn.cursor()
        _exec_sql(cur, sql)
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    _apply_sql_file(db_config, schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    _apply_sql_file(db_config, seed_path)


def ensure_demo_members(db_config: dict) -> None:
    """Upsert login accounts for the seeded people (legacy password hashing)."""
    conn = _connect(DBConfig.from_mapping(db_config))
    try:
        cur = conn.cursor(dictionary=True)
        for person_id, username, password, is_admin in DEMO_MEMBERS:
            cur.execute("SELECT per_ID FROM person_per WHERE per_ID=%s", (person_id,))
            if not cur.fetchone():
                raise RuntimeError(f"Missing person_per row for per_ID={person_id}; apply seed.sql first")

            password_hash = legacy_password_hash(password, person_id)
            cur.execute("SELECT usr_per_ID FROM user_usr WHERE usr_per_ID=%s", (person_id,))
            if cur.fetchone():
                cur.execute(
                    """
                    UPDATE user_usr
                    SET usr_UserName=%s, usr_Password=%s, usr_Admin=%s
                    WHERE usr_per_ID=%s
                    """,
                    (username, password_hash, int(is_admin), person_id),
                )
            else:
                cur.execute(
                    """
                    INSERT INTO user_usr (usr_per_ID, usr_UserName, usr_Password, usr_Admin, usr_LoginCount, usr_NeedPasswordChange)
                    VALUES (%s, %s, %s, %s, 0, 0)
                    """,
                    (person_id, username, password_hash, int(is_admin)),
                )
        conn.commit()
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(DBConfig.from_mapping(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
