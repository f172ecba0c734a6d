"""Factory Boy helpers producing payloads and persisted records through the store."""

from __future__ import annotations

import factory


class CredentialsFactory(factory.DictFactory):
    """Build ``{"email", "password"}`` payloads."""

    email = factory.Sequence(lambda n: f"user{n}@example.com")
    password = factory.Faker("password", length=12)


def create_user(store, **overrides):
    """Persist a user through ``store`` and return ``(UserOut, password)``."""
    creds = CredentialsFactory(**overrides)
    return store.create_user(creds["email"], creds["password"]), creds["password"]
