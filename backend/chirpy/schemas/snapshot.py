"""Marshmallow schemas for the durable snapshot document.

Field names and nesting match the on-disk layout::

    {"users":  {"1": {"id", "email", "password",
                      "authData": {"token", "date_made", "expiration_date"},
                      "is_chirpy_red"}},
     "chirps": {"1": {"id", "body", "author_id"}},
     "next_user_id": 2, "next_chirp_id": 2}
"""

from __future__ import annotations

import re
from datetime import UTC, datetime
from typing import Any

from marshmallow import EXCLUDE, Schema, ValidationError, fields, post_load

from chirpy.models import ZERO_TIME, Chirp, RefreshTokenRecord, Snapshot, User

# Fractional seconds beyond microseconds (nanosecond timestamps) are truncated.
_FRACTION_RE = re.compile(r"(\.\d{6})\d+")


class Timestamp(fields.Field):
    """UTC timestamp serialized as RFC 3339 with a ``Z`` suffix."""

    def _serialize(self, value: datetime | None, attr: str | None, obj: Any, **kwargs: Any):
        if value is None:
            return None
        value = value.astimezone(UTC) if value.tzinfo else value.replace(tzinfo=UTC)
        return value.isoformat().replace("+00:00", "Z")

    def _deserialize(self, value: Any, attr: str | None, data: Any, **kwargs: Any) -> datetime:
        if not isinstance(value, str) or not value:
            raise ValidationError("Not a valid timestamp.")
        text = _FRACTION_RE.sub(r"\1", value.strip())
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as exc:
            raise ValidationError("Not a valid timestamp.") from exc
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=UTC)
        try:
            return parsed.astimezone(UTC)
        except OverflowError as exc:
            raise ValidationError("Timestamp out of range.") from exc


class RefreshRecordSchema(Schema):
    """``authData`` block of a stored user."""

    class Meta:
        unknown = EXCLUDE

    token = fields.String(load_default="")
    issued_at = Timestamp(data_key="date_made", load_default=ZERO_TIME)
    expires_at = Timestamp(data_key="expiration_date", load_default=ZERO_TIME)

    @post_load
    def make_record(self, data: dict[str, Any], **_: Any) -> RefreshTokenRecord:
        return RefreshTokenRecord(**data)


class UserRecordSchema(Schema):
    """Stored user, including the password hash (never exposed outside the store)."""

    class Meta:
        unknown = EXCLUDE

    id = fields.Integer(required=True, strict=True)
    email = fields.String(required=True)
    password_hash = fields.String(data_key="password", required=True)
    refresh = fields.Nested(
        RefreshRecordSchema,
        data_key="authData",
        load_default=lambda: RefreshTokenRecord.empty(),
    )
    is_premium = fields.Boolean(data_key="is_chirpy_red", load_default=False)

    @post_load
    def make_user(self, data: dict[str, Any], **_: Any) -> User:
        return User(**data)


class ChirpRecordSchema(Schema):
    """Stored chirp."""

    class Meta:
        unknown = EXCLUDE

    id = fields.Integer(required=True, strict=True)
    body = fields.String(required=True)
    author_id = fields.Integer(required=True, strict=True)

    @post_load
    def make_chirp(self, data: dict[str, Any], **_: Any) -> Chirp:
        return Chirp(**data)


def _next_id(records: dict[int, Any]) -> int:
    return max(records, default=0) + 1


class SnapshotSchema(Schema):
    """Whole snapshot document."""

    class Meta:
        unknown = EXCLUDE

    users = fields.Dict(
        keys=fields.String(),
        values=fields.Nested(UserRecordSchema),
        load_default=dict,
    )
    chirps = fields.Dict(
        keys=fields.String(),
        values=fields.Nested(ChirpRecordSchema),
        load_default=dict,
    )
    next_user_id = fields.Integer(load_default=None, allow_none=True)
    next_chirp_id = fields.Integer(load_default=None, allow_none=True)

    @post_load
    def make_snapshot(self, data: dict[str, Any], **_: Any) -> Snapshot:
        # Records are keyed by their own id; the document key is informational.
        users = {user.id: user for user in data["users"].values()}
        chirps = {chirp.id: chirp for chirp in data["chirps"].values()}
        next_user_id = max(data["next_user_id"] or 0, _next_id(users))
        next_chirp_id = max(data["next_chirp_id"] or 0, _next_id(chirps))
        return Snapshot(
            users=users,
            chirps=chirps,
            next_user_id=next_user_id,
            next_chirp_id=next_chirp_id,
        )


snapshot_schema = SnapshotSchema()

__all__ = [
    "ChirpRecordSchema",
    "RefreshRecordSchema",
    "SnapshotSchema",
    "Timestamp",
    "UserRecordSchema",
    "snapshot_schema",
]
