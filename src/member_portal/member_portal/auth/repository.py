from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional, Protocol

from ..core.enums import Capability
from .model import AccessToken, Credential


class CredentialRepository(Protocol):
    def get_by_username(self, username: str) -> Optional[Credential]:
        raise NotImplementedError

    def get_by_person_id(self, person_id: int) -> Optional[Credential]:
        raise NotImplementedError

    def record_login(self, person_id: int, *, at: datetime) -> None:
        """Increment the login counter and set the last-login timestamp."""

        raise NotImplementedError


class TokenRepository(Protocol):
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
        raise NotImplementedError

    def get_by_id(self, token_id: int) -> Optional[AccessToken]:
        raise NotImplementedError

    def delete(self, token_id: int) -> bool:
        raise NotImplementedError

    def delete_for_person(self, person_id: int) -> int:
        raise NotImplementedError

    def touch(self, token_id: int, *, at: datetime) -> None:
        raise NotImplementedError
