"""Chirp definition."""

from __future__ import annotations

from dataclasses import dataclass

MAX_CHIRP_LENGTH = 140


@dataclass(frozen=True, slots=True)
class Chirp:
    """
    Short text post.

    :ivar id: Positive identifier assigned by the store, never reused.
    :ivar body: Filtered body (at most 140 characters).
    :ivar author_id: Id of the user that existed when the chirp was created.
    """

    id: int
    body: str
    author_id: int
