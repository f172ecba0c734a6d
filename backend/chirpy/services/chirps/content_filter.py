"""Chirp body validation and denylist masking."""

from __future__ import annotations

from chirpy.models import MAX_CHIRP_LENGTH
from chirpy.services._shared.errors import TooLongError

DENYLIST = frozenset({"kerfuffle", "sharbert", "fornax"})
MASK = "****"
WORD_DELIMITER = " "


def clean_body(body: str, *, limit: int = MAX_CHIRP_LENGTH) -> str:
    """
    Validate and mask a chirp body.

    Words are split on single spaces and compared case-insensitively as whole
    words, so ``"Sharbert!"`` or ``"Sharbertx"`` are left alone. Runs of
    spaces split into empty words and are rejoined as-is.

    :raises TooLongError: More than ``limit`` characters.
    """
    if len(body) > limit:
        raise TooLongError(length=len(body), limit=limit)
    words = body.split(WORD_DELIMITER)
    return WORD_DELIMITER.join(MASK if w.lower() in DENYLIST else w for w in words)
