"""Service container and Flask extension wiring."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from flask import Flask, current_app

from chirpy.core.metrics import HitCounter
from chirpy.infra.jsonfile import JSONSnapshotFile
from chirpy.infra.jwt import JWTTokenSigner
from chirpy.services._shared.ports import Clock, system_clock
from chirpy.services.auth.dto import AuthTokenConfig
from chirpy.services.auth.service import AuthService
from chirpy.services.chirps.service import ChirpService
from chirpy.services.store.service import StoreService
from chirpy.services.users.service import UserService
from chirpy.services.webhooks.service import WebhookService
from chirpy.uow import SnapshotStorage

log = logging.getLogger(__name__)

EXTENSION_KEY = "chirpy"
PLACEHOLDER_SECRET = "CHANGE_ME_JWT"


@dataclass(slots=True)
class ChirpyServices:
    """Everything the HTTP layer needs, sharing one snapshot storage."""

    store: StoreService
    auth: AuthService
    users: UserService
    chirps: ChirpService
    webhooks: WebhookService
    hits: HitCounter


def build_services(config: Mapping[str, Any], *, clock: Clock = system_clock) -> ChirpyServices:
    """
    Build the service graph from a config mapping.

    Creates the snapshot file when missing; an ``OSError`` here is a startup
    failure and is left to the caller.
    """
    secret = str(config.get("JWT_SECRET") or "")
    if not secret or secret == PLACEHOLDER_SECRET:
        log.warning("JWT_SECRET is not configured; tokens are signed with a placeholder secret")

    file = JSONSnapshotFile(config.get("DATABASE_PATH", "database.json"))
    file.ensure_exists()
    storage = SnapshotStorage(file)

    store = StoreService(
        storage=storage,
        clock=clock,
        refresh_ttl=timedelta(days=int(config.get("REFRESH_TOKEN_TTL_DAYS", 60))),
        enforce_refresh_expiry=bool(config.get("ENFORCE_REFRESH_EXPIRY", False)),
    )
    auth = AuthService(
        store=store,
        token_cfg=AuthTokenConfig(
            secret=secret,
            access_expires=timedelta(minutes=int(config.get("ACCESS_TOKEN_TTL_MINUTES", 60))),
        ),
        signer=JWTTokenSigner(clock=clock),
    )
    return ChirpyServices(
        store=store,
        auth=auth,
        users=UserService(store=store, auth=auth),
        chirps=ChirpService(store=store, auth=auth),
        webhooks=WebhookService(store=store, api_key=str(config.get("POLKA_KEY") or "")),
        hits=HitCounter(),
    )


def init_app(app: Flask, *, clock: Clock = system_clock) -> ChirpyServices:
    """Build the services from ``app.config`` and register them on the app."""
    services = build_services(app.config, clock=clock)
    app.extensions[EXTENSION_KEY] = services
    return services


def get_services(app: Flask | None = None) -> ChirpyServices:
    """Return the services registered on ``app`` (defaults to ``current_app``)."""
    target = app or current_app
    return target.extensions[EXTENSION_KEY]
