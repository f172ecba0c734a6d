"""
ChirpService
============

Authenticated chirp use-cases on top of the store: post (filter, then
persist), list, fetch and author-only delete.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from werkzeug.datastructures import Headers

from chirpy.models import Chirp
from chirpy.schemas.chirp import ChirpCreateSchema, ChirpListQuerySchema
from chirpy.services._shared.base import BaseService
from chirpy.services.auth.service import AuthService
from chirpy.services.chirps.content_filter import clean_body
from chirpy.services.store.service import StoreService

_create_schema = ChirpCreateSchema()
_list_schema = ChirpListQuerySchema()


class ChirpService:
    """
    Application service for chirps.

    :param store: Snapshot store.
    :param auth: Session service used to authenticate write requests.
    """

    def __init__(self, *, store: StoreService, auth: AuthService) -> None:
        self.store = store
        self.auth = auth

    def create_chirp(self, headers: Headers | Mapping[str, str], payload: Mapping[str, Any]) -> Chirp:
        """
        Post a chirp as the authenticated user.

        Order: identity, payload shape, content filter, persistence.

        :raises UnauthorizedError: Missing or rejected bearer token.
        :raises MalformedInputError: Payload without a string ``body``.
        :raises TooLongError: Body over 140 characters.
        """
        author_id = self.auth.authenticate_request(headers)
        data = BaseService.validate(_create_schema, payload)
        return self.store.create_chirp(clean_body(data["body"]), author_id)

    def list_chirps(self, query: Mapping[str, Any] | None = None) -> list[Chirp]:
        """
        List chirps using ``sort`` (``asc``/``desc``) and optional ``author_id`` parameters.

        :raises MalformedInputError: Unsupported sort or non-integer author id.
        """
        params = BaseService.validate(_list_schema, query or {})
        return self.store.get_chirps(sort=params["sort"], author_id=params["author_id"])

    def get_chirp(self, chirp_id: int) -> Chirp:
        return self.store.get_chirp(chirp_id)

    def delete_chirp(self, headers: Headers | Mapping[str, str], chirp_id: int) -> None:
        """
        Delete a chirp on behalf of its author.

        Identity is verified first; ownership is checked inside the store's
        write unit, right before the deletion.

        :raises UnauthorizedError: Missing or rejected bearer token.
        :raises NotFoundError: Unknown chirp.
        :raises ForbiddenError: Authenticated user is not the author.
        """
        actor_id = self.auth.authenticate_request(headers)
        self.store.delete_chirp(chirp_id, actor_id=actor_id)
