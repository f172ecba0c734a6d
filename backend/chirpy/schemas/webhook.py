"""Payment provider webhook payloads."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields

USER_UPGRADED_EVENT = "user.upgraded"


class WebhookDataSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    user_id = fields.Integer(required=True)


class WebhookEventSchema(Schema):
    """``{"event": "user.upgraded", "data": {"user_id": 3}}``"""

    class Meta:
        unknown = EXCLUDE

    event = fields.String(required=True)
    data = fields.Nested(WebhookDataSchema, required=True)
