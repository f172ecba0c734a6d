from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any, Protocol

Clock = Callable[[], datetime]


def system_clock() -> datetime:
    """Default clock: timezone-aware UTC now."""
    return datetime.now(UTC)


class TokenSigner(Protocol):
    """
    Port for signing and verifying self-contained access tokens.

    Implementations verify the signature, the expiry (against their clock)
    and nothing else; issuer/subject policy lives in the auth service.
    """

    clock: Clock

    def sign(self, claims: dict[str, Any], secret: str) -> str: ...

    def verify(self, token: str, secret: str) -> dict[str, Any]:
        """
        Return the claims of a valid token.

        :raises InvalidSignatureError: Signature does not match ``secret``.
        :raises ExpiredTokenError: ``exp`` is at or before the clock's now.
        :raises MalformedTokenError: Token cannot be decoded.
        """
        ...
