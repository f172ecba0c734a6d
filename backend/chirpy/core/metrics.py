"""Thread-safe request counter shared by concurrent request handlers."""

from __future__ import annotations

import threading

from flask import Flask


class HitCounter:
    """Monotonic hit counter guarded by a lock.

    Request handlers run concurrently, so the count is only ever touched while
    holding ``_lock``.
    """

    def __init__(self) -> None:
        self._value = 0
        self._lock = threading.Lock()

    def increment(self) -> int:
        """Add one hit and return the new total."""
        with self._lock:
            self._value += 1
            return self._value

    @property
    def value(self) -> int:
        with self._lock:
            return self._value

    def reset(self) -> None:
        with self._lock:
            self._value = 0


def init_app(app: Flask, counter: HitCounter) -> None:
    """Count every request served by ``app``."""

    @app.before_request
    def _count_hit() -> None:  # pragma: no cover - integration glue
        counter.increment()


__all__ = ["HitCounter", "init_app"]
