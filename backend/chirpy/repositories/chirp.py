"""Chirp repository."""

from __future__ import annotations

from collections.abc import MutableMapping

from chirpy.models import Chirp
from chirpy.repositories.base import SORT_ASC, BaseRepository


class ChirpRepository(BaseRepository[Chirp]):
    """Persistence-only repository for :class:`Chirp`."""

    def _records(self) -> MutableMapping[int, Chirp]:
        return self.snapshot.chirps

    def add(self, *, body: str, author_id: int) -> Chirp:
        chirp = Chirp(id=self.snapshot.allocate_chirp_id(), body=body, author_id=author_id)
        return self.put(chirp.id, chirp)

    def list_by_author(self, author_id: int, *, sort: str = SORT_ASC) -> list[Chirp]:
        return self.list(sort=sort, where=lambda c: c.author_id == author_id)
