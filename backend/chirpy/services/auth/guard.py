"""Credential extraction from request headers."""

from __future__ import annotations

import secrets
from collections.abc import Mapping

from werkzeug.datastructures import Headers

from chirpy.services._shared.errors import (
    InvalidApiKeyError,
    MalformedHeaderError,
    MissingHeaderError,
)

AUTHORIZATION_HEADER = "Authorization"
BEARER_SCHEME = "Bearer"
API_KEY_SCHEME = "ApiKey"


def _authorization(headers: Headers | Mapping[str, str]) -> str:
    if not isinstance(headers, Headers):
        headers = Headers(dict(headers))
    value = headers.get(AUTHORIZATION_HEADER)
    if not value:
        raise MissingHeaderError()
    return value


def _credential(headers: Headers | Mapping[str, str], scheme: str) -> str:
    # Exactly "<scheme> <token>": one single space, exact-case scheme.
    parts = _authorization(headers).split(" ")
    if len(parts) != 2 or parts[0] != scheme or not parts[1]:
        raise MalformedHeaderError()
    return parts[1]


def get_bearer_token(headers: Headers | Mapping[str, str]) -> str:
    """
    Return the token of an ``Authorization: Bearer <token>`` header.

    Header names are case-insensitive.

    :raises MissingHeaderError: No (or empty) ``Authorization`` header.
    :raises MalformedHeaderError: Any other shape.
    """
    return _credential(headers, BEARER_SCHEME)


def get_api_token(headers: Headers | Mapping[str, str]) -> str:
    """Same as :func:`get_bearer_token` for ``Authorization: ApiKey <key>``."""
    return _credential(headers, API_KEY_SCHEME)


def require_api_key(headers: Headers | Mapping[str, str], expected_key: str) -> None:
    """
    Check a trusted-service ``ApiKey`` credential against the configured key.

    :raises InvalidApiKeyError: Key does not match (or none is configured).
    """
    provided = get_api_token(headers)
    if not expected_key or not secrets.compare_digest(provided, expected_key):
        raise InvalidApiKeyError()


__all__ = [
    "get_api_token",
    "get_bearer_token",
    "require_api_key",
]
