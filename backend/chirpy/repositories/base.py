"""Generic repository base over an in-memory snapshot collection.

Repositories are persistence-only:
- They never implement use cases or domain policies.
- They never write the file; the unit of work commits the whole snapshot.
- Ids come from the snapshot's persisted counters, never from collection size.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, MutableMapping
from typing import Generic, TypeVar

from chirpy.models import Snapshot

E = TypeVar("E")  # snapshot record type

SORT_ASC = "asc"
SORT_DESC = "desc"


class BaseRepository(Generic[E]):
    """Common CRUD helpers for one ``id -> record`` mapping of a snapshot.

    :param snapshot: Snapshot loaded by the active unit of work.
    :type snapshot: Snapshot
    """

    def __init__(self, *, snapshot: Snapshot) -> None:
        self.snapshot = snapshot

    # Subclasses pick their collection.
    def _records(self) -> MutableMapping[int, E]:  # pragma: no cover - abstract
        raise NotImplementedError

    # ------------------------------------------------------------------ #
    # Reads
    # ------------------------------------------------------------------ #

    def get(self, record_id: int) -> E | None:
        return self._records().get(record_id)

    def exists(self, record_id: int) -> bool:
        return record_id in self._records()

    def count(self) -> int:
        return len(self._records())

    def iter_ordered(self, *, sort: str = SORT_ASC) -> Iterator[E]:
        """Yield records ordered by id (``"asc"`` or ``"desc"``)."""
        ids = sorted(self._records(), reverse=(sort == SORT_DESC))
        records = self._records()
        for record_id in ids:
            yield records[record_id]

    def list(self, *, sort: str = SORT_ASC, where: Callable[[E], bool] | None = None) -> list[E]:
        return [r for r in self.iter_ordered(sort=sort) if where is None or where(r)]

    # ------------------------------------------------------------------ #
    # Writes
    # ------------------------------------------------------------------ #

    def put(self, record_id: int, record: E) -> E:
        self._records()[record_id] = record
        return record

    def delete(self, record_id: int) -> bool:
        return self._records().pop(record_id, None) is not None
