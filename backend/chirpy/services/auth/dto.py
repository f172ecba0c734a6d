# chirpy/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from chirpy.services.store.dto import UserOut

# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class TokenPairOut:
    """
    Output DTO with access and refresh tokens.

    :param access_token: Encoded access JWT.
    :type access_token: str
    :param refresh_token: Opaque refresh token (hex).
    :type refresh_token: str
    """

    access_token: str
    refresh_token: str


@dataclass(frozen=True, slots=True)
class LoginOut:
    """
    Output DTO for a successful login.

    :param user: Public-safe user projection.
    :type user: UserOut
    :param tokens: Freshly issued token pair.
    :type tokens: TokenPairOut
    """

    user: UserOut
    tokens: TokenPairOut


# ------------------------ Config DTO -------------------------------------- #


@dataclass(frozen=True, slots=True)
class AuthTokenConfig:
    """
    Token emission configuration.

    :param secret: Shared HS256 signing secret.
    :type secret: str
    :param access_expires: Access token lifetime.
    :type access_expires: timedelta
    """

    secret: str
    access_expires: timedelta = timedelta(minutes=60)
