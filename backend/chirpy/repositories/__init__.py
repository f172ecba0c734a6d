"""Repository layer exports."""

from .base import SORT_ASC, SORT_DESC, BaseRepository
from .chirp import ChirpRepository
from .user import UserRepository

__all__ = [
    "BaseRepository",
    "ChirpRepository",
    "SORT_ASC",
    "SORT_DESC",
    "UserRepository",
]
