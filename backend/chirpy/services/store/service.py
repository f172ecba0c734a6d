"""
StoreService
============

Durable CRUD over users and chirps with snapshot semantics. Every operation
is one unit of work: load the whole snapshot, mutate it in memory, rewrite
the whole document (read-write units only), return.
"""

from __future__ import annotations

import logging
from datetime import timedelta

from chirpy.models import Chirp, RefreshTokenRecord, User
from chirpy.repositories import SORT_ASC, SORT_DESC
from chirpy.services._shared.base import BaseService
from chirpy.services._shared.errors import (
    InvalidCredentialsError,
    MalformedInputError,
    NotFoundError,
)
from chirpy.services._shared.ports import Clock, system_clock
from chirpy.services.store.dto import UserOut
from chirpy.uow import SnapshotStorage

log = logging.getLogger(__name__)

DEFAULT_REFRESH_TTL = timedelta(days=60)


def _check_sort(sort: str) -> str:
    if sort not in (SORT_ASC, SORT_DESC):
        raise MalformedInputError(f"Unsupported sort direction: {sort!r}")
    return sort


class StoreService(BaseService):
    """
    Application service owning the snapshot store.

    :param storage: Shared snapshot file and coordinator.
    :param clock: Time source for refresh-token timestamps.
    :param refresh_ttl: Lifetime recorded on stored refresh tokens.
    :param enforce_refresh_expiry: Reject expired refresh tokens on lookup.
    """

    def __init__(
        self,
        *,
        storage: SnapshotStorage,
        clock: Clock = system_clock,
        refresh_ttl: timedelta = DEFAULT_REFRESH_TTL,
        enforce_refresh_expiry: bool = False,
    ) -> None:
        super().__init__(storage=storage)
        self.clock = clock
        self.refresh_ttl = refresh_ttl
        self.enforce_refresh_expiry = enforce_refresh_expiry

    # --------------------------------------------------------------------- #
    # Users
    # --------------------------------------------------------------------- #

    def create_user(self, email: str, password: str) -> UserOut:
        """
        Hash the password and store a new user under the next id.

        Email uniqueness is not enforced.

        :returns: Public-safe user DTO (no hash).
        :rtype: UserOut
        :raises StorageError: On file I/O or parse failure.
        """
        with self.rw_uow() as uow:
            try:
                user = uow.users.add(email=email, password=password)
            except ValueError as exc:
                raise MalformedInputError(str(exc)) from exc
        log.info("User created", extra={"user_id": user.id})
        return UserOut.from_user(user)

    def get_user(self, user_id: int) -> User:
        """
        :raises NotFoundError: If the user does not exist.
        """
        with self.ro_uow() as uow:
            user = uow.users.get(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    def get_user_by_email(self, email: str) -> User:
        """
        Linear scan by email; with duplicates the lowest id wins.

        :raises NotFoundError: If no user has this email.
        """
        with self.ro_uow() as uow:
            user = uow.users.get_by_email(email)
        if user is None:
            raise NotFoundError("User", email)
        return user

    def authenticate(self, email: str, password: str) -> User:
        """
        Verify an email/password pair.

        Unknown email and wrong password fail the same way.

        :raises InvalidCredentialsError: When the credentials do not match.
        """
        with self.ro_uow() as uow:
            user = uow.users.get_by_email(email)
        if user is None or not user.verify_password(password):
            raise InvalidCredentialsError()
        return user

    def update_user(self, user_id: int, email: str, password: str) -> UserOut:
        """
        Replace email and password, keeping the refresh record and premium flag.

        :raises NotFoundError: If the user does not exist.
        """
        with self.rw_uow() as uow:
            try:
                user = uow.users.update_credentials(user_id, email=email, password=password)
            except ValueError as exc:
                raise MalformedInputError(str(exc)) from exc
            if user is None:
                raise NotFoundError("User", user_id)
        log.info("User updated", extra={"user_id": user_id})
        return UserOut.from_user(user)

    def upgrade_premium(self, user_id: int) -> bool:
        """Set the premium flag. Returns ``False`` when the user does not exist."""
        with self.rw_uow() as uow:
            user = uow.users.set_premium(user_id)
        if user is None:
            return False
        log.info("User upgraded to premium", extra={"user_id": user_id})
        return True

    # --------------------------------------------------------------------- #
    # Refresh tokens
    # --------------------------------------------------------------------- #

    def store_refresh_token(self, user_id: int, token: str) -> None:
        """
        Overwrite the user's refresh record (issued now, expires now + ttl).

        :raises NotFoundError: If the user does not exist.
        """
        record = RefreshTokenRecord.issue(token, now=self.clock(), ttl=self.refresh_ttl)
        with self.rw_uow() as uow:
            if uow.users.set_refresh(user_id, record) is None:
                raise NotFoundError("User", user_id)

    def find_user_by_token(self, token: str) -> tuple[User | None, bool]:
        """
        Find the owner of a refresh token by exact match.

        :returns: ``(user, True)`` when found, ``(None, False)`` otherwise.
        """
        with self.ro_uow() as uow:
            user = uow.users.find_by_refresh_token(token)
        if user is None:
            return None, False
        if self.enforce_refresh_expiry and user.refresh.is_expired(self.clock()):
            log.info("Expired refresh token presented", extra={"user_id": user.id})
            return None, False
        return user, True

    def delete_refresh_token(self, user_id: int) -> bool:
        """Clear the refresh record. Returns ``False`` when the user does not exist."""
        with self.rw_uow() as uow:
            user = uow.users.set_refresh(user_id, RefreshTokenRecord.empty())
        return user is not None

    def revoke_refresh_token(self, token: str) -> User | None:
        """
        Find the owner of ``token`` and clear its record in one unit of work.

        :returns: The owner as it was before revocation, or ``None``.
        """
        with self.rw_uow() as uow:
            user = uow.users.find_by_refresh_token(token)
            if user is not None:
                uow.users.set_refresh(user.id, RefreshTokenRecord.empty())
        return user

    # --------------------------------------------------------------------- #
    # Chirps
    # --------------------------------------------------------------------- #

    def create_chirp(self, body: str, author_id: int) -> Chirp:
        """
        Store an already-filtered chirp under the next id.

        :raises NotFoundError: If ``author_id`` is not an existing user.
        """
        with self.rw_uow() as uow:
            if not uow.users.exists(author_id):
                raise NotFoundError("User", author_id)
            chirp = uow.chirps.add(body=body, author_id=author_id)
        log.info("Chirp created", extra={"chirp_id": chirp.id, "user_id": author_id})
        return chirp

    def get_chirps(self, *, sort: str = SORT_ASC, author_id: int | None = None) -> list[Chirp]:
        """All chirps (optionally of one author) ordered by id."""
        _check_sort(sort)
        with self.ro_uow() as uow:
            if author_id is None:
                return uow.chirps.list(sort=sort)
            return uow.chirps.list_by_author(author_id, sort=sort)

    def get_chirps_by_author(self, author_id: int, *, sort: str = SORT_ASC) -> list[Chirp]:
        return self.get_chirps(sort=sort, author_id=author_id)

    def get_chirp(self, chirp_id: int) -> Chirp:
        """
        :raises NotFoundError: If the chirp does not exist.
        """
        with self.ro_uow() as uow:
            chirp = uow.chirps.get(chirp_id)
        if chirp is None:
            raise NotFoundError("Chirp", chirp_id)
        return chirp

    def delete_chirp(self, chirp_id: int, *, actor_id: int | None = None) -> None:
        """
        Delete a chirp.

        When ``actor_id`` is given the ownership check runs inside the same
        unit of work, right before the deletion.

        :raises NotFoundError: If the chirp does not exist.
        :raises ForbiddenError: If ``actor_id`` is not the chirp's author.
        """
        with self.rw_uow() as uow:
            chirp = uow.chirps.get(chirp_id)
            if chirp is None:
                raise NotFoundError("Chirp", chirp_id)
            if actor_id is not None:
                self.ensure_owner(actor_id, chirp.author_id, msg="Only the author can delete a chirp.")
            uow.chirps.delete(chirp_id)
        log.info("Chirp deleted", extra={"chirp_id": chirp_id})
