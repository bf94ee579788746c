"""API test fixtures — isolated app + in-memory SQLite + httpx client.

Invariants:
    - Every test gets a fresh in-memory SQLite database with the users table
    - The storage handle is injected through app.state, exactly like the lifespan does
    - The lifespan itself does not run (ASGITransport skips it)
"""

import pytest
from httpx import ASGITransport, AsyncClient

from user_directory.config import Settings
from user_directory.infrastructure.database import DatabaseSessionManager
from user_directory.main import create_app


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
def settings():
    return Settings(
        environment="development",
        database_url=TEST_DATABASE_URL,
        _env_file=None,
    )


@pytest.fixture
async def db_manager():
    manager = DatabaseSessionManager(TEST_DATABASE_URL)
    await manager.create_schema()
    yield manager
    await manager.close()


@pytest.fixture
def app(settings, db_manager):
    app = create_app(settings)
    app.state.db_manager = db_manager
    return app


@pytest.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
async def create_user(client, user_payload):
    """POST a user and return its id."""
    async def _create(**overrides) -> int:
        res = await client.post("/api/users", json=user_payload(**overrides))
        assert res.status_code == 201, res.text
        return res.json()["data"]["id"]
    return _create
