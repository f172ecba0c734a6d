"""
UserService
===========

Account registration and credential updates with payload validation.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from werkzeug.datastructures import Headers

from chirpy.schemas.user import UserCredentialsSchema
from chirpy.services._shared.base import BaseService
from chirpy.services.auth.dto import LoginOut
from chirpy.services.auth.service import AuthService
from chirpy.services.store.dto import UserOut
from chirpy.services.store.service import StoreService

_credentials_schema = UserCredentialsSchema()


class UserService:
    """
    Application service for the user account lifecycle.

    Email uniqueness is not enforced.
    """

    def __init__(self, *, store: StoreService, auth: AuthService) -> None:
        self.store = store
        self.auth = auth

    def register(self, payload: Mapping[str, Any]) -> UserOut:
        """
        :raises MalformedInputError: Missing/invalid email or empty password.
        """
        data = BaseService.validate(_credentials_schema, payload)
        return self.store.create_user(data["email"], data["password"])

    def login(self, payload: Mapping[str, Any]) -> LoginOut:
        """
        :raises MalformedInputError: Missing email or password.
        :raises InvalidCredentialsError: Credentials do not match.
        """
        data = BaseService.validate(_credentials_schema, payload)
        return self.auth.login(data["email"], data["password"])

    def update(self, headers: Headers | Mapping[str, str], payload: Mapping[str, Any]) -> UserOut:
        """
        Change the authenticated user's email and password.

        :raises UnauthorizedError: Missing or rejected bearer token.
        :raises MalformedInputError: Invalid payload.
        :raises NotFoundError: Token subject no longer exists.
        """
        user_id = self.auth.authenticate_request(headers)
        data = BaseService.validate(_credentials_schema, payload)
        return self.store.update_user(user_id, data["email"], data["password"])
