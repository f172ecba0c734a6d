"""
DTOs for StoreService.

Output DTOs keep the password hash inside the store: callers outside it only
ever see these projections.
"""

from __future__ import annotations

from dataclasses import dataclass

from chirpy.models import User


@dataclass(frozen=True, slots=True)
class UserOut:
    """
    Public-safe user projection.

    :param id: User id.
    :type id: int
    :param email: Login email.
    :type email: str
    :param is_premium: Premium membership flag.
    :type is_premium: bool
    """

    id: int
    email: str
    is_premium: bool

    @classmethod
    def from_user(cls, user: User) -> UserOut:
        return cls(id=user.id, email=user.email, is_premium=user.is_premium)
