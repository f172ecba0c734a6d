"""
Snapshot implementation of UnitOfWork.

Every use-case runs inside one unit of work: the whole snapshot is loaded on
enter, repositories mutate it in memory, and a read-write unit rewrites the
whole document on a clean exit. A single :class:`SnapshotCoordinator` per file
serializes writers for the complete load-mutate-write cycle.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager

from chirpy.infra.jsonfile import JSONSnapshotFile
from chirpy.models import Snapshot
from chirpy.repositories import ChirpRepository, UserRepository
from chirpy.uow.base import UnitOfWork

log = logging.getLogger(__name__)


class SnapshotCoordinator:
    """
    Readers-writer lock guarding one snapshot file.

    - Writers are exclusive with respect to readers and other writers.
    - Readers may overlap each other but never an in-flight write.
    - Once a writer is waiting, new readers queue behind it so writes are not
      starved by a steady stream of reads.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class SnapshotRepositoryContainer:
    """Provide repository instances that share one loaded snapshot."""

    snapshot: Snapshot

    def _bind(self, snapshot: Snapshot) -> None:
        self.snapshot = snapshot
        self.users = UserRepository(snapshot=snapshot)
        self.chirps = ChirpRepository(snapshot=snapshot)


class SnapshotUnitOfWork(SnapshotRepositoryContainer, UnitOfWork):
    """
    Read-write unit of work.

    Holds the writer side of the coordinator from load to rewrite. Leaving the
    block without an exception commits; an exception discards the in-memory
    snapshot so the file is untouched.
    """

    def __init__(self, *, file: JSONSnapshotFile, coordinator: SnapshotCoordinator) -> None:
        self.file = file
        self.coordinator = coordinator
        self._done = False

    def __enter__(self) -> SnapshotUnitOfWork:
        self._acquire(self.coordinator.write())
        try:
            self._bind(self.file.load())
        except BaseException:
            self._release()
            raise
        self._done = False
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if exc_type is None:
                self.commit()
            else:
                self.rollback()
        finally:
            self._release()

    def commit(self) -> None:
        if self._done:
            return
        self.file.write(self.snapshot)
        self._done = True

    def rollback(self) -> None:
        log.debug("Discarding uncommitted snapshot changes")
        self._done = True


class SnapshotReadOnlyUnitOfWork(SnapshotRepositoryContainer, UnitOfWork):
    """
    Read-only unit of work.

    Loads the snapshot under the reader side of the coordinator. ``commit()``
    is disallowed; changes made through its repositories are never written.
    """

    def __init__(self, *, file: JSONSnapshotFile, coordinator: SnapshotCoordinator) -> None:
        self.file = file
        self.coordinator = coordinator

    def __enter__(self) -> SnapshotReadOnlyUnitOfWork:
        self._acquire(self.coordinator.read())
        try:
            self._bind(self.file.load())
        except BaseException:
            self._release()
            raise
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._release()

    def commit(self) -> None:
        raise RuntimeError("Read-only unit of work cannot commit.")

    def rollback(self) -> None:
        return None


class SnapshotStorage:
    """
    One snapshot file plus the coordinator that serializes access to it.

    Services share a single instance per file so every unit of work competes
    for the same lock.
    """

    def __init__(self, file: JSONSnapshotFile, coordinator: SnapshotCoordinator | None = None) -> None:
        self.file = file
        self.coordinator = coordinator or SnapshotCoordinator()

    def rw(self) -> SnapshotUnitOfWork:
        return SnapshotUnitOfWork(file=self.file, coordinator=self.coordinator)

    def ro(self) -> SnapshotReadOnlyUnitOfWork:
        return SnapshotReadOnlyUnitOfWork(file=self.file, coordinator=self.coordinator)
