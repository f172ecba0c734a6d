"""Unit of Work abstractions and the snapshot-backed implementation.

Services depend on :class:`SnapshotStorage` to open read-write or read-only
units; both share one :class:`SnapshotCoordinator` per file.
"""

from .base import UnitOfWork
from .snapshot_uow import (
    SnapshotCoordinator,
    SnapshotReadOnlyUnitOfWork,
    SnapshotStorage,
    SnapshotUnitOfWork,
)

__all__ = [
    "UnitOfWork",
    "SnapshotCoordinator",
    "SnapshotStorage",
    "SnapshotUnitOfWork",
    "SnapshotReadOnlyUnitOfWork",
]
