"""Credentials and header builders for authenticated calls."""

from __future__ import annotations

# At least 32 bytes so HS256 keys are not flagged as too short.
TEST_SECRET = "test-secret-with-enough-bytes-for-hs256"
TEST_POLKA_KEY = "f271c81ff7084ee5b99a5091b42d486e"


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def api_key(key: str) -> dict[str, str]:
    return {"Authorization": f"ApiKey {key}"}
