# tests/unit/core/test_config.py
from __future__ import annotations

import pytest
from chirpy.core.config import (
    BaseConfig,
    DevelopmentConfig,
    ProductionConfig,
    TestingConfig,
    env_bool,
    env_int,
    get_config,
)


@pytest.mark.parametrize(
    ("env", "expected"),
    [
        ("development", DevelopmentConfig),
        ("testing", TestingConfig),
        (" Production ", ProductionConfig),
        ("staging", DevelopmentConfig),
    ],
)
def test_get_config_selects_class(monkeypatch, env, expected):
    monkeypatch.setenv("APP_ENV", env)
    assert get_config() is expected


def test_get_config_defaults_to_development(monkeypatch):
    monkeypatch.delenv("APP_ENV", raising=False)
    assert get_config() is DevelopmentConfig


@pytest.mark.parametrize(("raw", "expected"), [("1", True), ("YES", True), ("on", True), ("0", False), ("nope", False)])
def test_env_bool(monkeypatch, raw, expected):
    monkeypatch.setenv("CHIRPY_FLAG", raw)
    assert env_bool("CHIRPY_FLAG") is expected


def test_env_bool_default(monkeypatch):
    monkeypatch.delenv("CHIRPY_FLAG", raising=False)
    assert env_bool("CHIRPY_FLAG", True) is True


def test_env_int(monkeypatch):
    monkeypatch.setenv("CHIRPY_TTL", "15")
    assert env_int("CHIRPY_TTL", 60) == 15
    monkeypatch.setenv("CHIRPY_TTL", " ")
    assert env_int("CHIRPY_TTL", 60) == 60
    monkeypatch.setenv("CHIRPY_TTL", "soon")
    with pytest.raises(ValueError):
        env_int("CHIRPY_TTL", 60)


def test_testing_config_is_self_contained():
    assert TestingConfig.TESTING is True
    assert TestingConfig.JWT_SECRET
    assert TestingConfig.POLKA_KEY
    assert TestingConfig.ENFORCE_REFRESH_EXPIRY is False


def test_session_defaults():
    assert BaseConfig.ACCESS_TOKEN_TTL_MINUTES > 0
    assert BaseConfig.REFRESH_TOKEN_TTL_DAYS > 0
