# chirpy/infra/jwt/pyjwt_signer.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import jwt

from chirpy.services._shared.errors import (
    ExpiredTokenError,
    InvalidSignatureError,
    MalformedTokenError,
)
from chirpy.services._shared.ports import Clock, TokenSigner, system_clock

ALGORITHM = "HS256"


@dataclass(slots=True)
class JWTTokenSigner(TokenSigner):
    """
    HS256 adapter on PyJWT.

    Time-based checks are done against ``clock`` rather than the library's
    wall clock, so expiry can be exercised with a simulated time source.

    :param clock: Callable returning an aware UTC ``datetime``.
    """

    clock: Clock = field(default=system_clock)

    def sign(self, claims: dict[str, Any], secret: str) -> str:
        return jwt.encode(claims, secret, algorithm=ALGORITHM)

    def verify(self, token: str, secret: str) -> dict[str, Any]:
        try:
            claims = jwt.decode(
                token,
                secret,
                algorithms=[ALGORITHM],
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "verify_nbf": False,
                    "require": ["exp", "iat", "iss", "sub"],
                },
            )
        # InvalidSignatureError subclasses DecodeError; order matters.
        except jwt.InvalidSignatureError as exc:
            raise InvalidSignatureError() from exc
        except jwt.InvalidTokenError as exc:
            raise MalformedTokenError(str(exc)) from exc

        exp = claims["exp"]
        if not isinstance(exp, int | float):
            raise MalformedTokenError("Token 'exp' claim must be numeric")
        if self.clock().timestamp() >= exp:
            raise ExpiredTokenError()
        return claims
