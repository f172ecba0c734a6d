"""
WebhookService
==============

Trusted-service callbacks from the payment provider.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Mapping
from typing import Any

from werkzeug.datastructures import Headers

from chirpy.schemas.webhook import USER_UPGRADED_EVENT, WebhookEventSchema
from chirpy.services._shared.base import BaseService
from chirpy.services._shared.errors import NotFoundError
from chirpy.services.auth.guard import require_api_key
from chirpy.services.store.service import StoreService

log = logging.getLogger(__name__)

_event_schema = WebhookEventSchema()


class WebhookOutcome(enum.Enum):
    """Result of handling a webhook event."""

    UPGRADED = "upgraded"
    IGNORED = "ignored"


class WebhookService:
    """
    :param store: Snapshot store.
    :param api_key: Key the provider sends as ``Authorization: ApiKey <key>``.
    """

    def __init__(self, *, store: StoreService, api_key: str) -> None:
        self.store = store
        self.api_key = api_key

    def handle_event(self, headers: Headers | Mapping[str, str], payload: Mapping[str, Any]) -> WebhookOutcome:
        """
        Apply a provider event.

        Only ``user.upgraded`` changes state; other events are acknowledged
        and ignored.

        :raises UnauthorizedError: Missing, malformed or wrong API key.
        :raises MalformedInputError: Payload shape is invalid.
        :raises NotFoundError: The referenced user does not exist.
        """
        require_api_key(headers, self.api_key)
        event = BaseService.validate(_event_schema, payload)
        if event["event"] != USER_UPGRADED_EVENT:
            log.info("Ignoring webhook event", extra={"event": event["event"]})
            return WebhookOutcome.IGNORED

        user_id = event["data"]["user_id"]
        if not self.store.upgrade_premium(user_id):
            raise NotFoundError("User", user_id)
        return WebhookOutcome.UPGRADED
