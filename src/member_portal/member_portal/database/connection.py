from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

import mysql.connector

DEFAULT_DATABASE = "churchcrm"


@dataclass(frozen=True)
class DBConfig:
    """Where the ChurchCRM schema lives."""

    host: str = "localhost"
    port: int = 3306
    user: str = "root"
    password: str = ""
    database: str = DEFAULT_DATABASE

    @classmethod
    def from_mapping(cls, values: Mapping) -> "DBConfig":
        return cls(
            host=str(values.get("host") or "localhost"),
            port=int(values.get("port") or 3306),
            user=str(values.get("user") or "root"),
            password=str(values.get("password") or ""),
            database=str(values.get("database") or DEFAULT_DATABASE),
        )


class DatabaseConnection:
    """Process-wide connection factory.

    Every repository call opens its own connection and closes it when the
    ``db_cursor`` block ends; nothing is pooled or shared between requests.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self.config = config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None or cls._instance.config != config:
            cls._instance = cls(config)
        return cls._instance

    def connect(self):
        cfg = self.config
        # Transactions are explicit: db_cursor commits or rolls back.
        return mysql.connector.connect(
            host=cfg.host,
            port=cfg.port,
            user=cfg.user,
            password=cfg.password,
            database=cfg.database,
            autocommit=False,
        )
