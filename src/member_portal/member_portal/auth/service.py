from __future__ import annotations

import hmac
import logging
from datetime import datetime, timedelta
from typing import Callable

from ..common.datetime_utils import isoformat, now_local
from ..core.constants import (
    DEFAULT_REMEMBER_TTL_DAYS,
    DEFAULT_TOKEN_TTL_HOURS,
    INVALID_CREDENTIALS_MESSAGE,
    TOKEN_NAME,
    UNAUTHENTICATED_MESSAGE,
    UNAUTHORIZED_MESSAGE,
)
from ..core.enums import Capability
from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError
from ..profile.service import ProfileService
from .hashing import hash_token_secret, new_token_secret, split_plain_text_token, verify_legacy_password
from .model import AccessToken, Credential
from .repository import CredentialRepository, TokenRepository

logger = logging.getLogger(__name__)

BASE_ABILITIES = (Capability.PROFILE_READ, Capability.PROFILE_UPDATE, Capability.QR_READ)


def token_abilities(credential: Credential) -> frozenset[Capability]:
    abilities = set(BASE_ABILITIES)
    if credential.is_admin:
        abilities.add(Capability.ADMIN_ACCESS)
    return frozenset(abilities)


class AuthService:
    """Use case: login/logout with single-active-token bearer sessions."""

    def __init__(
        self,
        credentials: CredentialRepository,
        tokens: TokenRepository,
        profiles: ProfileService,
        *,
        token_ttl: timedelta = timedelta(hours=DEFAULT_TOKEN_TTL_HOURS),
        remember_ttl: timedelta = timedelta(days=DEFAULT_REMEMBER_TTL_DAYS),
        clock: Callable[[], datetime] = now_local,
    ):
        self._credentials = credentials
        self._tokens = tokens
        self._profiles = profiles
        self._token_ttl = token_ttl
        self._remember_ttl = remember_ttl
        self._clock = clock

    def login(self, username: str, password: str, remember: bool = False) -> dict:
        credential = self._credentials.get_by_username(username)
        # Same message for unknown user and wrong password.
        if credential is None:
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)
        if not verify_legacy_password(password, credential.person_id, credential.password_hash):
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)

        if credential.needs_password_change:
            # Recorded only; not enforced by the portal.
            logger.info("Login with pending password change person_id=%s", credential.person_id)

        now = self._clock()
        # Single active session: drop older tokens before issuing the new one.
        self._tokens.delete_for_person(credential.person_id)

        expires_at = now + (self._remember_ttl if remember else self._token_ttl)
        secret = new_token_secret()
        token = self._tokens.create(
            person_id=credential.person_id,
            name=TOKEN_NAME,
            token_hash=hash_token_secret(secret),
            abilities=token_abilities(credential),
            expires_at=expires_at,
            created_at=now,
        )

        self._credentials.record_login(credential.person_id, at=now)
        logger.info("Login person_id=%s token_id=%s remember=%s", credential.person_id, token.token_id, bool(remember))

        return {
            "user": self.get_authenticated_user(credential.person_id),
            "token": f"{token.token_id}|{secret}",
            "expires_at": expires_at.isoformat(),
        }

    def authenticate_token(self, raw: str) -> AccessToken:
        parsed = split_plain_text_token(raw or "")
        if parsed is None:
            raise AuthenticationError(UNAUTHENTICATED_MESSAGE)
        token_id, secret = parsed

        token = self._tokens.get_by_id(token_id)
        if token is None or not hmac.compare_digest(token.token_hash, hash_token_secret(secret)):
            raise AuthenticationError(UNAUTHENTICATED_MESSAGE)

        now = self._clock()
        if token.is_expired(now):
            raise AuthenticationError(UNAUTHENTICATED_MESSAGE)

        self._tokens.touch(token.token_id, at=now)
        return token

    def authorize(self, token: AccessToken, *abilities: Capability) -> None:
        missing = [a.value for a in abilities if not token.can(a)]
        if missing:
            logger.warning("Token lacks abilities person_id=%s missing=%s", token.person_id, missing)
            raise AuthorizationError(UNAUTHORIZED_MESSAGE)

    def logout(self, token: AccessToken) -> None:
        """Revoke only the token used for the current request."""
        self._tokens.delete(token.token_id)
        logger.info("Logout person_id=%s token_id=%s", token.person_id, token.token_id)

    def get_authenticated_user(self, person_id: int) -> dict:
        credential = self._credentials.get_by_person_id(person_id)
        if credential is None:
            raise NotFoundError("User not found.")
        return {
            "id": credential.person_id,
            "username": credential.username,
            "is_admin": credential.is_admin,
            "last_login": isoformat(credential.last_login),
            "login_count": credential.login_count,
            "needs_password_change": credential.needs_password_change,
            "person": self._profiles.get_member_view(credential.person_id),
        }
