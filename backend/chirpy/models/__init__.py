from chirpy.models.base import ZERO_TIME
from chirpy.models.chirp import MAX_CHIRP_LENGTH, Chirp
from chirpy.models.snapshot import Snapshot
from chirpy.models.user import RefreshTokenRecord, User, hash_password, verify_password_hash

__all__ = [
    "Chirp",
    "MAX_CHIRP_LENGTH",
    "RefreshTokenRecord",
    "Snapshot",
    "User",
    "ZERO_TIME",
    "hash_password",
    "verify_password_hash",
]
