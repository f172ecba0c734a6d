# tests/unit/services/test_auth_service.py
from __future__ import annotations

from datetime import timedelta

import pytest
from chirpy.services._shared.errors import (
    ExpiredTokenError,
    InvalidCredentialsError,
    InvalidSignatureError,
    MalformedHeaderError,
    MissingHeaderError,
    NotFoundError,
)
from chirpy.services.auth.dto import AuthTokenConfig, LoginOut
from chirpy.services.auth.service import AuthService

from tests.factories import create_user
from tests.helpers.auth import TEST_SECRET, bearer


# ------------------------------ Fixtures ---------------------------------- #
@pytest.fixture()
def service(store, signer) -> AuthService:
    """AuthService over the per-test store, sharing its frozen clock."""
    return AuthService(
        store=store,
        token_cfg=AuthTokenConfig(secret=TEST_SECRET, access_expires=timedelta(minutes=60)),
        signer=signer,
    )


# -------------------------------- Tests ----------------------------------- #
def test_login_issues_pair_and_records_refresh_token(service, store):
    """Login returns the public user plus a token pair; the refresh token is stored."""
    out, password = create_user(store)

    result = service.login(out.email, password)

    assert isinstance(result, LoginOut)
    assert result.user == out
    assert service.verify_access_token(result.tokens.access_token) == out.id
    user, found = store.find_user_by_token(result.tokens.refresh_token)
    assert found and user.id == out.id


def test_login_invalid_credentials(service, store):
    out, _ = create_user(store)
    with pytest.raises(InvalidCredentialsError):
        service.login(out.email, "wrong-password")
    with pytest.raises(InvalidCredentialsError):
        service.login("missing@example.com", "x")


def test_second_login_replaces_refresh_token(service, store):
    out, password = create_user(store)
    first = service.login(out.email, password)
    second = service.login(out.email, password)

    assert first.tokens.refresh_token != second.tokens.refresh_token
    with pytest.raises(NotFoundError):
        service.refresh(first.tokens.refresh_token)
    service.refresh(second.tokens.refresh_token)


def test_refresh_mints_access_token_without_rotation(service, store, clock):
    out, password = create_user(store)
    pair = service.login(out.email, password).tokens

    clock.advance(minutes=90)
    with pytest.raises(ExpiredTokenError):
        service.verify_access_token(pair.access_token)

    access = service.refresh(pair.refresh_token)
    assert service.verify_access_token(access) == out.id
    # Same refresh token keeps working.
    assert service.verify_access_token(service.refresh(pair.refresh_token)) == out.id


def test_refresh_unknown_token(service):
    with pytest.raises(NotFoundError):
        service.refresh("deadbeef")


def test_revoke_then_refresh_fails(service, store):
    out, password = create_user(store)
    pair = service.login(out.email, password).tokens

    service.revoke(pair.refresh_token)

    assert store.find_user_by_token(pair.refresh_token) == (None, False)
    with pytest.raises(NotFoundError):
        service.refresh(pair.refresh_token)
    with pytest.raises(NotFoundError):
        service.revoke(pair.refresh_token)


def test_revoke_leaves_access_token_valid_until_expiry(service, store):
    out, password = create_user(store)
    pair = service.login(out.email, password).tokens
    service.revoke(pair.refresh_token)
    assert service.verify_access_token(pair.access_token) == out.id


def test_authenticate_request(service, store):
    out, _ = create_user(store)
    token = service.issue_access_token(out.id)
    assert service.authenticate_request(bearer(token)) == out.id


def test_authenticate_request_rejections(service, caplog):
    with pytest.raises(MissingHeaderError):
        service.authenticate_request({})
    with pytest.raises(MalformedHeaderError):
        service.authenticate_request({"Authorization": "Token abc"})

    foreign = AuthService(
        store=service.store,
        token_cfg=AuthTokenConfig(secret="a-completely-different-signing-secret"),
        signer=service.signer,
    ).issue_access_token(1)
    with caplog.at_level("INFO", logger="chirpy.services.auth.service"):
        with pytest.raises(InvalidSignatureError):
            service.authenticate_request(bearer(foreign))
    assert "invalid_signature" in caplog.text


def test_issue_tokens_does_not_persist_refresh_token(service, store):
    out, _ = create_user(store)
    pair = service.issue_tokens(out.id)
    assert store.find_user_by_token(pair.refresh_token) == (None, False)
