# chirpy/services/auth/service.py
from __future__ import annotations

import logging
from collections.abc import Mapping

from werkzeug.datastructures import Headers

from chirpy.infra.jwt import JWTTokenSigner
from chirpy.services._shared.errors import NotFoundError, UnauthorizedError
from chirpy.services._shared.ports import TokenSigner
from chirpy.services.auth import tokens
from chirpy.services.auth.dto import AuthTokenConfig, LoginOut, TokenPairOut
from chirpy.services.auth.guard import get_bearer_token
from chirpy.services.store.dto import UserOut
from chirpy.services.store.service import StoreService

log = logging.getLogger(__name__)


class AuthService:
    """
    Session lifecycle service (login / verify / refresh / revoke).

    Access tokens are verified without touching the store. Refresh tokens are
    looked up in the store on every use and can be revoked there, which
    invalidates sessions without rotating the signing secret.
    """

    def __init__(
        self,
        *,
        store: StoreService,
        token_cfg: AuthTokenConfig,
        signer: TokenSigner | None = None,
    ) -> None:
        """
        Initialize the service with its dependencies.

        :param store: Snapshot store holding refresh tokens.
        :param token_cfg: Signing secret and access-token lifetime.
        :param signer: Token signing adapter (PyJWT by default).
        """
        self.store = store
        self.cfg = token_cfg
        self.signer = signer or JWTTokenSigner()

    # ------------------------------------------------------------------ #
    # Issue / verify
    # ------------------------------------------------------------------ #

    def issue_access_token(self, user_id: int) -> str:
        return tokens.make_access_token(
            self.cfg.secret, self.cfg.access_expires, user_id, signer=self.signer
        )

    def issue_tokens(self, user_id: int) -> TokenPairOut:
        """Issue a token pair. The refresh token is not persisted here."""
        return TokenPairOut(
            access_token=self.issue_access_token(user_id),
            refresh_token=tokens.make_refresh_token(),
        )

    def verify_access_token(self, token: str) -> int:
        """Return the user id carried by a valid access token."""
        return tokens.verify_token(token, self.cfg.secret, signer=self.signer)

    def authenticate_request(self, headers: Headers | Mapping[str, str]) -> int:
        """
        Extract the bearer credential and verify it.

        :returns: Authenticated user id.
        :raises UnauthorizedError: Missing/malformed header or rejected token.
        """
        token = get_bearer_token(headers)
        try:
            return self.verify_access_token(token)
        except UnauthorizedError as exc:
            log.info("Access token rejected: %s", exc.kind)
            raise

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, email: str, password: str) -> LoginOut:
        """
        Authenticate credentials, issue a fresh pair and record the refresh token.

        :raises InvalidCredentialsError: Unknown email or wrong password.
        """
        user = self.store.authenticate(email, password)
        pair = self.issue_tokens(user.id)
        self.store.store_refresh_token(user.id, pair.refresh_token)
        log.info("User logged in", extra={"user_id": user.id})
        return LoginOut(user=UserOut.from_user(user), tokens=pair)

    # ------------------------------------------------------------------ #
    # Refresh / revoke
    # ------------------------------------------------------------------ #

    def refresh(self, refresh_token: str) -> str:
        """
        Mint a new access token for the owner of ``refresh_token``.

        The refresh token itself is not rotated.

        :raises NotFoundError: No user holds this refresh token.
        """
        user, found = self.store.find_user_by_token(refresh_token)
        if not found or user is None:
            raise NotFoundError("RefreshToken", "<redacted>")
        return self.issue_access_token(user.id)

    def revoke(self, refresh_token: str) -> None:
        """
        Clear the stored refresh token so later lookups fail.

        :raises NotFoundError: No user holds this refresh token.
        """
        user = self.store.revoke_refresh_token(refresh_token)
        if user is None:
            raise NotFoundError("RefreshToken", "<redacted>")
        log.info("Refresh token revoked", extra={"user_id": user.id})
