"""Application factory wiring configuration, logging and the core services."""

from __future__ import annotations

from flask import Flask

from chirpy.core.config import BaseConfig, get_config
from chirpy.core.logger import configure_logging, init_app as init_logging
from chirpy.services._shared.ports import Clock, system_clock


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    clock: Clock = system_clock,
) -> Flask:
    """
    Build and configure the Flask application.

    Routes are registered by the HTTP layer on top of the returned app; the
    services are available through :func:`chirpy.core.extensions.get_services`.
    """

    app = Flask(__name__)
    app.config.from_object(get_config() if config is None else config)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))
    init_logging(app)

    from chirpy.core import extensions, metrics

    services = extensions.init_app(app, clock=clock)
    metrics.init_app(app, services.hits)

    return app
