"""Pytest fixtures wiring the core services to an isolated snapshot file.

Each test gets its own JSON document under ``tmp_path`` and a controllable
clock, so persistence and expiry behaviour never leak between cases.
"""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
from chirpy.core.extensions import ChirpyServices, build_services
from chirpy.infra.jsonfile import JSONSnapshotFile
from chirpy.infra.jwt import JWTTokenSigner
from chirpy.services.store.service import StoreService
from chirpy.uow import SnapshotStorage

from tests.helpers.auth import TEST_POLKA_KEY, TEST_SECRET
from tests.helpers.clock import FakeClock


@pytest.fixture()
def clock() -> FakeClock:
    """Provide a frozen clock starting at a whole second."""
    return FakeClock(datetime(2024, 1, 1, 12, 0, 0, tzinfo=UTC))


@pytest.fixture()
def db_path(tmp_path):
    """Location of the snapshot document for the current test."""
    return tmp_path / "database.json"


@pytest.fixture()
def snapshot_file(db_path) -> JSONSnapshotFile:
    file = JSONSnapshotFile(db_path)
    file.ensure_exists()
    return file


@pytest.fixture()
def storage(snapshot_file) -> SnapshotStorage:
    return SnapshotStorage(snapshot_file)


@pytest.fixture()
def store(storage, clock) -> StoreService:
    """Store service bound to the per-test snapshot and frozen clock."""
    return StoreService(storage=storage, clock=clock)


@pytest.fixture()
def signer(clock) -> JWTTokenSigner:
    return JWTTokenSigner(clock=clock)


@pytest.fixture()
def config(db_path) -> dict:
    """Minimal config mapping as the Flask app would provide it."""
    return {
        "JWT_SECRET": TEST_SECRET,
        "POLKA_KEY": TEST_POLKA_KEY,
        "DATABASE_PATH": str(db_path),
        "ACCESS_TOKEN_TTL_MINUTES": 60,
        "REFRESH_TOKEN_TTL_DAYS": 60,
        "ENFORCE_REFRESH_EXPIRY": False,
    }


@pytest.fixture()
def services(config, clock) -> ChirpyServices:
    """Full service graph sharing one snapshot storage."""
    return build_services(config, clock=clock)


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk
