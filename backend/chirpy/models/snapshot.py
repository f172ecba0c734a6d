"""In-memory representation of the whole durable document."""

from __future__ import annotations

from dataclasses import dataclass, field

from .chirp import Chirp
from .user import User


@dataclass(slots=True)
class Snapshot:
    """
    All users and chirps plus the persisted id counters.

    The snapshot is loaded whole before a mutation and rewritten whole after
    it. ``next_user_id``/``next_chirp_id`` only ever grow, so ids stay unique
    after deletions.
    """

    users: dict[int, User] = field(default_factory=dict)
    chirps: dict[int, Chirp] = field(default_factory=dict)
    next_user_id: int = 1
    next_chirp_id: int = 1

    def allocate_user_id(self) -> int:
        user_id = self.next_user_id
        self.next_user_id += 1
        return user_id

    def allocate_chirp_id(self) -> int:
        chirp_id = self.next_chirp_id
        self.next_chirp_id += 1
        return chirp_id
