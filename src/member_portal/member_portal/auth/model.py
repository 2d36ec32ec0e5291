from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import FrozenSet, Optional

from ..core.enums import Capability


@dataclass(frozen=True)
class Credential:
    """Domain entity: login account (ChurchCRM ``user_usr``), keyed by person id."""

    person_id: int
    username: str
    password_hash: str
    is_admin: bool = False
    last_login: Optional[datetime] = None
    login_count: int = 0
    needs_password_change: bool = False


@dataclass(frozen=True)
class AccessToken:
    """Stored bearer token. Only a digest of the secret is kept."""

    token_id: int
    person_id: int
    name: str
    token_hash: str
    abilities: FrozenSet[Capability]
    expires_at: datetime
    created_at: datetime
    last_used_at: Optional[datetime] = None

    def can(self, ability: Capability) -> bool:
        return ability in self.abilities

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at

