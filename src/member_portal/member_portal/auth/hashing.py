"""Credential and token digests.

The member password scheme is the legacy ChurchCRM one and must stay
bit-for-bit compatible with the existing ``user_usr`` table:
``sha256(password + str(person_id))`` as lowercase hex.
"""
from __future__ import annotations

import hashlib
import hmac
import secrets


def legacy_password_hash(password: str, person_id: int) -> str:
    return hashlib.sha256(f"{password}{int(person_id)}".encode("utf-8")).hexdigest()


def verify_legacy_password(password: str, person_id: int, stored_hash: str) -> bool:
    if not stored_hash:
        return False
    return hmac.compare_digest(legacy_password_hash(password, person_id), stored_hash.strip().lower())


def new_token_secret() -> str:
    return secrets.token_urlsafe(30)


def hash_token_secret(secret: str) -> str:
    return hashlib.sha256(secret.encode("utf-8")).hexdigest()


def split_plain_text_token(raw: str) -> tuple[int, str] | None:
    """Parse ``"<id>|<secret>"``; returns None for anything malformed."""
    token_id, sep, secret = raw.partition("|")
    if not sep or not secret or not (token_id.isascii() and token_id.isdecimal()):
        return None
    return int(token_id), secret
