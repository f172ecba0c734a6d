"""Shared constants for the snapshot domain models."""

from __future__ import annotations

from datetime import UTC, datetime

# Zero timestamp used for cleared refresh records ("0001-01-01T00:00:00Z" on disk).
ZERO_TIME = datetime.min.replace(tzinfo=UTC)
