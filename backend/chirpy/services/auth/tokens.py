"""Access/refresh token primitives.

Access tokens are stateless HS256 JWTs (``iss``, ``sub``, ``iat``, ``exp``).
Refresh tokens are 256 random bits, hex encoded, with no embedded claims;
they are only meaningful through a server-side lookup.
"""

from __future__ import annotations

import secrets
from datetime import timedelta

from chirpy.infra.jwt import JWTTokenSigner
from chirpy.services._shared.errors import InvalidIssuerError, MalformedTokenError
from chirpy.services._shared.ports import TokenSigner

ISSUER = "chirpy"
REFRESH_TOKEN_BYTES = 32


def make_refresh_token() -> str:
    return secrets.token_hex(REFRESH_TOKEN_BYTES)


def make_access_token(
    secret: str,
    ttl: timedelta,
    user_id: int,
    *,
    signer: TokenSigner | None = None,
) -> str:
    """Sign an access token for ``user_id`` valid for ``ttl`` from the signer's clock."""
    signer = signer or JWTTokenSigner()
    issued_at = int(signer.clock().timestamp())
    claims = {
        "iss": ISSUER,
        "sub": str(user_id),
        "iat": issued_at,
        "exp": issued_at + int(ttl.total_seconds()),
    }
    return signer.sign(claims, secret)


def make_token(
    secret: str,
    ttl_minutes: int,
    user_id: int,
    *,
    signer: TokenSigner | None = None,
) -> tuple[str, str]:
    """
    Issue a fresh ``(access_token, refresh_token)`` pair.

    The refresh token is not persisted here; callers store it.
    """
    access = make_access_token(secret, timedelta(minutes=ttl_minutes), user_id, signer=signer)
    return access, make_refresh_token()


def verify_token(token: str, secret: str, *, signer: TokenSigner | None = None) -> int:
    """
    Verify an access token and return its subject as a user id.

    Checks signature and expiry (signer), then the issuer.

    :raises InvalidSignatureError: Wrong secret or tampered token.
    :raises ExpiredTokenError: At or after ``exp``.
    :raises InvalidIssuerError: Issuer is not ``chirpy``.
    :raises MalformedTokenError: Undecodable token or non-numeric subject.
    """
    signer = signer or JWTTokenSigner()
    claims = signer.verify(token, secret)
    if claims.get("iss") != ISSUER:
        raise InvalidIssuerError()
    subject = claims.get("sub")
    if not isinstance(subject, str) or not (subject.isascii() and subject.isdigit()):
        raise MalformedTokenError("Token subject is not a user id")
    return int(subject)
