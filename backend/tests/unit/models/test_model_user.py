# tests/unit/models/test_model_user.py
from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from chirpy.models import ZERO_TIME, RefreshTokenRecord, Snapshot, User, hash_password


def test_hash_password_is_salted_and_verifiable():
    first = hash_password("correct horse")
    second = hash_password("correct horse")

    assert first != "correct horse"
    assert first != second
    user = User(id=1, email="a@example.com", password_hash=first)
    assert user.verify_password("correct horse")
    assert not user.verify_password("Correct horse")


@pytest.mark.parametrize("raw", ["", None])
def test_hash_password_rejects_empty(raw):
    with pytest.raises(ValueError):
        hash_password(raw)


def test_user_without_hash_never_verifies():
    assert not User(id=1, email="a@example.com", password_hash="").verify_password("")


def test_repr_hides_secrets():
    user = User(
        id=1,
        email="a@example.com",
        password_hash=hash_password("pw"),
        refresh=RefreshTokenRecord(token="sekret"),
    )
    assert "sekret" not in repr(user)
    assert user.password_hash not in repr(user)


def test_with_credentials_rehashes_and_keeps_other_fields():
    record = RefreshTokenRecord(token="t")
    user = User(id=1, email="a@example.com", password_hash=hash_password("old"), refresh=record)

    changed = user.upgraded().with_credentials(email="b@example.com", password="new")

    assert changed.email == "b@example.com"
    assert changed.verify_password("new")
    assert changed.refresh == record
    assert changed.is_premium is True
    assert user.is_premium is False


def test_refresh_record_lifecycle():
    now = datetime(2024, 1, 1, tzinfo=UTC)
    record = RefreshTokenRecord.issue("abc", now=now, ttl=timedelta(days=60))

    assert record.active
    assert not record.is_expired(now + timedelta(days=59))
    assert record.is_expired(now + timedelta(days=60))

    empty = RefreshTokenRecord.empty()
    assert not empty.active
    assert empty.issued_at == empty.expires_at == ZERO_TIME


def test_snapshot_counters_only_grow():
    snapshot = Snapshot()
    assert [snapshot.allocate_user_id() for _ in range(3)] == [1, 2, 3]
    assert snapshot.allocate_chirp_id() == 1
    assert snapshot.next_user_id == 4
