"""User repository for snapshot persistence and lookup helpers."""

from __future__ import annotations

from collections.abc import MutableMapping

from chirpy.models import RefreshTokenRecord, User, hash_password
from chirpy.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    Lookups by email or refresh token are linear scans in ascending id order.
    It NEVER issues tokens; it only records them.
    """

    def _records(self) -> MutableMapping[int, User]:
        return self.snapshot.users

    # ---------------------------- Create ----------------------------

    def add(self, *, email: str, password: str) -> User:
        """Hash the password, allocate the next id and store a new user.

        :param email: Login email (stored as given).
        :type email: str
        :param password: Raw password; only its hash is stored.
        :type password: str
        :returns: Stored user.
        :rtype: User
        """
        password_hash = hash_password(password)
        user = User(id=self.snapshot.allocate_user_id(), email=email, password_hash=password_hash)
        return self.put(user.id, user)

    # ---------------------------- Lookup helpers ----------------------------

    def get_by_email(self, email: str) -> User | None:
        """Return the first user (lowest id) with exactly this email."""
        for user in self.iter_ordered():
            if user.email == email:
                return user
        return None

    def find_by_refresh_token(self, token: str) -> User | None:
        """Return the user whose stored refresh token equals ``token``.

        An empty token never matches; it denotes "no active refresh token".
        """
        if not token:
            return None
        for user in self.iter_ordered():
            if user.refresh.token == token:
                return user
        return None

    # ---------------------------- Updates ----------------------------

    def update_credentials(self, user_id: int, *, email: str, password: str) -> User | None:
        """Rehash the password and set the email, keeping refresh record and premium flag."""
        user = self.get(user_id)
        if user is None:
            return None
        return self.put(user_id, user.with_credentials(email=email, password=password))

    def set_refresh(self, user_id: int, record: RefreshTokenRecord) -> User | None:
        user = self.get(user_id)
        if user is None:
            return None
        return self.put(user_id, user.with_refresh(record))

    def set_premium(self, user_id: int) -> User | None:
        user = self.get(user_id)
        if user is None:
            return None
        return self.put(user_id, user.upgraded())
