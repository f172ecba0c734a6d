# chirpy/services/_shared/base.py
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from marshmallow import Schema, ValidationError

from chirpy.services._shared.errors import ForbiddenError, MalformedInputError
from chirpy.services._shared.policies.common import is_owner
from chirpy.uow import SnapshotReadOnlyUnitOfWork, SnapshotStorage, SnapshotUnitOfWork


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide helpers to run read-only and read-write units of work.
    * Validate inbound payloads against marshmallow schemas.
    * Centralize the ownership policy.
    * Keep services thin, orchestration-only, no web leakage.

    Notes
    -----
    - Services must never touch the snapshot file directly; always use a Unit of Work.
    - Units of work must not be nested: the writer lock is not re-entrant.
    """

    def __init__(self, *, storage: SnapshotStorage) -> None:
        """
        Initialize the base service.

        :param storage: Shared snapshot file and coordinator.
        :type storage: SnapshotStorage
        """
        self.storage = storage

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> SnapshotUnitOfWork:
        """
        Create a read-write Unit of Work (exclusive for its whole duration).

        :returns: Read-write UoW instance.
        :rtype: SnapshotUnitOfWork
        """
        return self.storage.rw()

    def ro_uow(self) -> SnapshotReadOnlyUnitOfWork:
        """
        Create a read-only Unit of Work (shared with other readers).

        :returns: Read-only UoW instance.
        :rtype: SnapshotReadOnlyUnitOfWork
        """
        return self.storage.ro()

    # ----------------------- Validation utilities ---------------------------

    @staticmethod
    def validate(schema: Schema, payload: Mapping[str, Any] | None) -> dict[str, Any]:
        """
        Load ``payload`` through ``schema``.

        :raises MalformedInputError: When the payload is missing or invalid.
        """
        if payload is None or not isinstance(payload, Mapping):
            raise MalformedInputError("Payload must be an object.")
        try:
            return schema.load(payload)
        except ValidationError as exc:
            raise MalformedInputError("Invalid payload.", messages=exc.messages) from exc

    # --------------------------- AuthZ --------------------------------

    def ensure_owner(self, actor_id: int | None, owner_id: int, *, msg: str | None = None) -> None:
        """
        Ensure the current actor is the resource owner.

        :param actor_id: Authenticated user id (already verified).
        :param owner_id: Declared author/owner of the resource.
        :type owner_id: int
        :param msg: Optional custom error message.
        :type msg: str | None
        :raises ForbiddenError: If actor is not the owner.
        """
        if not is_owner(actor_id=actor_id, owner_id=owner_id):
            raise ForbiddenError(msg or "You can only modify your own resources.")
