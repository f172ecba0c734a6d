"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and should never import or depend
on Flask or HTTP directly. They serve as stable contracts between the snapshot
store, repositories and application services.

Each error carries a stable ``kind`` code. Mapping kinds to status codes and
response bodies belongs to the HTTP layer, never to the services.
"""

from __future__ import annotations

from dataclasses import dataclass

# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - They can be safely raised from repositories, the store or domain logic.
    - Nothing retries them; callers receive them synchronously.
    """

    kind = "service_error"


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the snapshot.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    entity: str
    key: str | int

    kind = "not_found"

    def __str__(self) -> str:
        return f"{self.entity} not found: {self.key}"


class ForbiddenError(ServiceError):
    """Raised when an authenticated actor tries to mutate a resource it does not own."""

    kind = "forbidden"


class StorageError(ServiceError):
    """Raised when the snapshot file cannot be read, parsed or written."""

    kind = "storage_error"


class MalformedInputError(ServiceError):
    """
    Raised when a payload does not have the expected shape.

    :param messages: Field-level validation messages, when available.
    """

    kind = "malformed_input"

    def __init__(self, message: str, messages: dict | None = None) -> None:
        super().__init__(message)
        self.messages = messages or {}


@dataclass(slots=True)
class TooLongError(ServiceError):
    """Raised when a chirp body exceeds the maximum length."""

    length: int
    limit: int

    kind = "too_long"

    def __str__(self) -> str:
        return f"Chirp is too long ({self.length} > {self.limit} characters)"


# --------------------------------------------------------------------------- #
# Unauthorized variants
# --------------------------------------------------------------------------- #


class UnauthorizedError(ServiceError):
    """Base class for credential problems (missing, malformed or rejected)."""

    kind = "unauthorized"


class MissingHeaderError(UnauthorizedError):
    kind = "missing_header"

    def __init__(self, message: str = "Authorization header not included in request") -> None:
        super().__init__(message)


class MalformedHeaderError(UnauthorizedError):
    kind = "malformed_header"

    def __init__(self, message: str = "Malformed authorization header") -> None:
        super().__init__(message)


class InvalidSignatureError(UnauthorizedError):
    kind = "invalid_signature"

    def __init__(self, message: str = "Token signature is invalid") -> None:
        super().__init__(message)


class ExpiredTokenError(UnauthorizedError):
    kind = "expired"

    def __init__(self, message: str = "Token has expired") -> None:
        super().__init__(message)


class InvalidIssuerError(UnauthorizedError):
    kind = "invalid_issuer"

    def __init__(self, message: str = "Token issuer is invalid") -> None:
        super().__init__(message)


class MalformedTokenError(UnauthorizedError):
    kind = "malformed_token"

    def __init__(self, message: str = "Token is malformed") -> None:
        super().__init__(message)


class InvalidCredentialsError(UnauthorizedError):
    kind = "invalid_credentials"

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message)


class InvalidApiKeyError(UnauthorizedError):
    kind = "invalid_api_key"

    def __init__(self, message: str = "Invalid API key") -> None:
        super().__init__(message)


__all__ = [
    "ServiceError",
    "NotFoundError",
    "ForbiddenError",
    "StorageError",
    "MalformedInputError",
    "TooLongError",
    "UnauthorizedError",
    "MissingHeaderError",
    "MalformedHeaderError",
    "InvalidSignatureError",
    "ExpiredTokenError",
    "InvalidIssuerError",
    "MalformedTokenError",
    "InvalidCredentialsError",
    "InvalidApiKeyError",
]
