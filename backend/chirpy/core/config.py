"""Application settings with environment-based simple classes."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Final

from dotenv import load_dotenv

# Public selector env var (keep neutral name to avoid collisions)
ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'


# Loads .env in development (no-op when the file is missing)
load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Parse a boolean flag from an environment variable.

    Parameters
    ----------
    name: str
        Environment variable to inspect.
    default: bool, optional
        Value returned when the variable is unset. Defaults to ``False``.

    Returns
    -------
    bool
        ``True`` if the value resembles ``{"1", "true", "yes", "y", "on"}``
        ignoring case; otherwise ``False`` or ``default`` when missing.
    """
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "y", "on"}


def env_int(name: str, default: int) -> int:
    """Parse an integer from an environment variable, falling back to ``default``."""
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    return int(val)


class BaseConfig:
    """Base configuration shared across environments.

    Attributes
    ----------
    JWT_SECRET: str
        Shared secret used to sign and verify access tokens (HS256).
    POLKA_KEY: str
        API key the payment provider presents as ``Authorization: ApiKey <key>``.
    DATABASE_PATH: str
        Location of the JSON snapshot file.
    ACCESS_TOKEN_TTL_MINUTES: int
        Lifetime of access tokens issued on login and refresh.
    REFRESH_TOKEN_TTL_DAYS: int
        Lifetime recorded on stored refresh tokens.
    ENFORCE_REFRESH_EXPIRY: bool
        When ``True`` expired refresh tokens are rejected on lookup. Off by
        default so recorded expiry stays informational.
    LOG_LEVEL: str
        Root logging verbosity (``INFO`` by default).
    DEBUG: bool
        Toggles Flask debug mode.
    TESTING: bool
        Enables Flask testing mode when ``True``.

    Notes
    -----
    Values are primarily sourced from environment variables, enabling
    configuration without code changes.
    """

    # Secrets
    JWT_SECRET = os.getenv("JWT_SECRET", "CHANGE_ME_JWT")
    POLKA_KEY = os.getenv("POLKA_KEY", os.getenv("API_KEY", ""))

    # Storage
    DATABASE_PATH = os.getenv("DATABASE_PATH", "database.json")

    # Sessions
    ACCESS_TOKEN_TTL_MINUTES = env_int("ACCESS_TOKEN_TTL_MINUTES", 60)
    REFRESH_TOKEN_TTL_DAYS = env_int("REFRESH_TOKEN_TTL_DAYS", 60)
    ENFORCE_REFRESH_EXPIRY = env_bool("ENFORCE_REFRESH_EXPIRY", False)

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Flask built-ins
    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Configuration tailored for local development."""

    DEBUG = env_bool("FLASK_DEBUG", True)


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Forces ``TESTING`` mode and disables debug logs.
    - Uses a fixed signing secret and API key so tests never depend on ``.env``.
    - Points the snapshot at ``TEST_DATABASE_PATH`` when set.
    """

    TESTING = True
    DEBUG = False
    JWT_SECRET = "testing-secret-not-for-production-use"
    POLKA_KEY = "test-polka-key"
    DATABASE_PATH = os.getenv("TEST_DATABASE_PATH", "test-database.json")
    LOG_LEVEL = "WARNING"


class ProductionConfig(BaseConfig):
    """Configuration defaults for production deployments."""

    DEBUG = False


# Map names -> classes (simple, explicit)
CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the configuration class inferred from ``APP_ENV``.

    Returns
    -------
    type[BaseConfig]
        Class to pass to :meth:`flask.Config.from_object`.

    Notes
    -----
    Falls back to :class:`DevelopmentConfig` when ``APP_ENV`` is unset or
    unknown.
    """
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)
