"""Marshmallow schemas for the snapshot document and service payloads."""

from .chirp import SORT_ASC, SORT_DESC, ChirpCreateSchema, ChirpListQuerySchema
from .snapshot import SnapshotSchema, snapshot_schema
from .user import UserCredentialsSchema
from .webhook import USER_UPGRADED_EVENT, WebhookEventSchema

__all__ = [
    "ChirpCreateSchema",
    "ChirpListQuerySchema",
    "SORT_ASC",
    "SORT_DESC",
    "SnapshotSchema",
    "USER_UPGRADED_EVENT",
    "UserCredentialsSchema",
    "WebhookEventSchema",
    "snapshot_schema",
]
