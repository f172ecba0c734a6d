"""Chirp input and query schemas."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from marshmallow import EXCLUDE, Schema, fields, pre_load, validate

SORT_ASC = "asc"
SORT_DESC = "desc"


class ChirpCreateSchema(Schema):
    """Payload for posting a chirp. Length is enforced by the content filter."""

    class Meta:
        unknown = EXCLUDE

    body = fields.String(required=True)


class ChirpListQuerySchema(Schema):
    """Supported query parameters for listing chirps."""

    class Meta:
        unknown = EXCLUDE

    sort = fields.String(load_default=SORT_ASC, validate=validate.OneOf([SORT_ASC, SORT_DESC]))
    author_id = fields.Integer(load_default=None, allow_none=True)

    @pre_load
    def drop_empty(self, data: Any, **_: Any) -> Any:
        # ``?author_id=&sort=`` means "not given".
        if not isinstance(data, Mapping):
            return data
        return {key: value for key, value in data.items() if value != ""}
