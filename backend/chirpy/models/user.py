"""User and refresh-token record definitions."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta

import bcrypt
from werkzeug.security import check_password_hash, generate_password_hash

from .base import ZERO_TIME


def hash_password(raw: str) -> str:
    """
    Hash a plain text password (salted, one-way).

    :param raw: Plain text password.
    :type raw: str
    :returns: Encoded hash suitable for :func:`verify_password_hash`.
    :rtype: str
    :raises ValueError: If the password is empty or not a string.
    """
    if not isinstance(raw, str) or not raw:
        raise ValueError("Password must be a non-empty string.")
    return generate_password_hash(raw)


# Hashes written by the previous bcrypt-based store.
BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")


def verify_password_hash(password_hash: str, raw: str) -> bool:
    """
    Return ``True`` when ``raw`` matches ``password_hash``.

    Accepts werkzeug hashes and legacy bcrypt hashes. An unreadable hash
    never verifies.
    """
    if not password_hash or not isinstance(raw, str):
        return False
    if password_hash.startswith(BCRYPT_PREFIXES):
        try:
            return bcrypt.checkpw(raw.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError:
            return False
    try:
        return bool(check_password_hash(password_hash, raw))
    except ValueError:
        return False


@dataclass(frozen=True, slots=True)
class RefreshTokenRecord:
    """
    Server-side record of a user's opaque refresh token.

    An empty ``token`` means there is no active refresh token.

    :ivar token: Opaque random token (hex).
    :ivar issued_at: Issue timestamp (UTC).
    :ivar expires_at: Recorded expiry (UTC).
    """

    token: str = ""
    issued_at: datetime = ZERO_TIME
    expires_at: datetime = ZERO_TIME

    @classmethod
    def issue(cls, token: str, *, now: datetime, ttl: timedelta) -> RefreshTokenRecord:
        return cls(token=token, issued_at=now, expires_at=now + ttl)

    @classmethod
    def empty(cls) -> RefreshTokenRecord:
        return cls()

    @property
    def active(self) -> bool:
        return bool(self.token)

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now


@dataclass(frozen=True, slots=True)
class User:
    """
    Registered account as stored in the snapshot.

    Fields
    ------
    id : int
        Positive identifier assigned by the store, never reused.
    email : str
        Login email. Uniqueness is not enforced.
    password_hash : str
        Salted one-way hash; the plain password is never kept.
    refresh : RefreshTokenRecord
        Current refresh token, empty when none is active.
    is_premium : bool
        Premium ("Chirpy Red") membership flag.
    """

    id: int
    email: str
    password_hash: str = field(repr=False)
    refresh: RefreshTokenRecord = field(default_factory=RefreshTokenRecord.empty, repr=False)
    is_premium: bool = False

    def verify_password(self, raw: str) -> bool:
        return verify_password_hash(self.password_hash, raw)

    def with_credentials(self, *, email: str, password: str) -> User:
        """Return a copy with a new email and a freshly hashed password."""
        return replace(self, email=email, password_hash=hash_password(password))

    def with_refresh(self, record: RefreshTokenRecord) -> User:
        return replace(self, refresh=record)

    def upgraded(self) -> User:
        return replace(self, is_premium=True)
