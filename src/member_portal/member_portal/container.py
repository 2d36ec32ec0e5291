from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from .auth.mysql_credential_repository import MySQLCredentialRepository
from .auth.mysql_token_repository import MySQLTokenRepository
from .auth.service import AuthService
from .core.constants import DEFAULT_REMEMBER_TTL_DAYS, DEFAULT_TOKEN_TTL_HOURS
from .database.connection import DBConfig, DatabaseConnection
from .history.mysql_history_repository import MySQLHistoryRepository
from .history.service import HistoryService
from .profile.mysql_dropdown_repository import MySQLDropdownOptionRepository
from .profile.mysql_person_repository import MySQLPersonRepository
from .profile.service import ProfileService


@dataclass(frozen=True)
class Container:
    auth_service: AuthService
    profile_service: ProfileService
    history_service: HistoryService


def build_container(
    *,
    db_config: dict,
    token_ttl_hours: int = DEFAULT_TOKEN_TTL_HOURS,
    remember_ttl_days: int = DEFAULT_REMEMBER_TTL_DAYS,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    people_repo = MySQLPersonRepository(conn)
    options_repo = MySQLDropdownOptionRepository(conn)
    credentials_repo = MySQLCredentialRepository(conn)
    tokens_repo = MySQLTokenRepository(conn)
    history_repo = MySQLHistoryRepository(conn)

    profile_service = ProfileService(people_repo, options_repo)
    auth_service = AuthService(
        credentials_repo,
        tokens_repo,
        profile_service,
        token_ttl=timedelta(hours=int(token_ttl_hours)),
        remember_ttl=timedelta(days=int(remember_ttl_days)),
    )
    history_service = HistoryService(history_repo)

    return Container(
        auth_service=auth_service,
        profile_service=profile_service,
        history_service=history_service,
    )
