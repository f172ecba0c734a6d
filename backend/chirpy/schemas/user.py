"""User input schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate


class UserCredentialsSchema(Schema):
    """
    Payload for creating or updating a user (email + plain password).

    Both fields must be non-empty strings; the email is stored as given.
    """

    class Meta:
        unknown = EXCLUDE

    email = fields.String(required=True, validate=validate.Length(min=1))
    password = fields.String(required=True, validate=validate.Length(min=1))
