"""
Abstract Unit of Work contract.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chirpy.repositories import ChirpRepository, UserRepository


class UnitOfWork(ABC):
    """
    Transactional boundary of a single use-case over the snapshot.

    Responsibilities:
    - Hold a side of the file lock from load to release.
    - Expose ``users`` and ``chirps`` repositories bound to one loaded snapshot.
    - Commit (rewrite the whole snapshot) or discard it; never half of it.
    """

    users: UserRepository
    chirps: ChirpRepository

    _lock_ctx: AbstractContextManager[None] | None = None

    @abstractmethod
    def __enter__(self) -> UnitOfWork: ...
    @abstractmethod
    def __exit__(self, exc_type, exc, tb) -> None: ...
    @abstractmethod
    def commit(self) -> None: ...
    @abstractmethod
    def rollback(self) -> None: ...

    def _acquire(self, lock_ctx: AbstractContextManager[None]) -> None:
        lock_ctx.__enter__()
        self._lock_ctx = lock_ctx

    def _release(self) -> None:
        if self._lock_ctx is not None:
            ctx, self._lock_ctx = self._lock_ctx, None
            ctx.__exit__(None, None, None)
