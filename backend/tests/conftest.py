"""Root conftest — shared test configuration and payload factory."""

import copy
import os

import pytest

# Importing user_directory.main builds an app from the environment; keep it off disk
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "test")


BASE_USER = {
    "name": "Ada Lovelace",
    "email": "ada@example.com",
    "phone": "+44 20 7946 0000",
    "company": "Analytical Engines Ltd",
    "address": {
        "street": "12 St James's Square",
        "city": "London",
        "zip": "SW1Y 4JH",
        "geo": {"lat": 51.5074, "lng": -0.1357},
    },
}


@pytest.fixture
def user_payload():
    """Factory for a valid user body; top-level keys can be overridden."""
    def _make(**overrides) -> dict:
        payload = copy.deepcopy(BASE_USER)
        payload.update(overrides)
        return payload
    return _make
