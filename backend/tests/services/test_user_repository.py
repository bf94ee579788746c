"""User Repository — SQL behavior against an in-memory SQLite database.

Tests cover:
    - create assigns ids and sets both timestamps
    - update/delete return False when no row matched
    - UNIQUE email violation → EmailConflictError, other storage faults → DatabaseError
"""

import pytest
from sqlalchemy.exc import IntegrityError

from user_directory.core.domain_types import UserId, UserRow
from user_directory.core.errors import DatabaseError, EmailConflictError
from user_directory.infrastructure.database import DatabaseSessionManager
from user_directory.services.user_repository import (
    UserRepository, is_storable_id, is_unique_violation,
)


def _row(**overrides) -> UserRow:
    values = dict(
        name="Ada", email="ada@example.com", phone="1", company="AE",
        address_street="S", address_city="C", address_zip="Z",
        geo_lat=1.0, geo_lng=2.0,
    )
    values.update(overrides)
    return UserRow(**values)


@pytest.fixture
async def manager():
    manager = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    await manager.create_schema()
    yield manager
    await manager.close()


@pytest.fixture
async def repo(manager):
    async with manager.session() as db:
        yield UserRepository(db)


async def test_create_assigns_sequential_ids(repo):
    first = await repo.create(_row(email="a@example.com"))
    second = await repo.create(_row(email="b@example.com"))
    assert second > first


async def test_create_sets_equal_timestamps(repo):
    user_id = await repo.create(_row())
    user = await repo.get(user_id)
    assert user.created_at == user.updated_at


async def test_get_missing_returns_none(repo):
    assert await repo.get(UserId(404)) is None


async def test_out_of_range_id_matches_nothing(repo):
    too_big = UserId(2**63)
    assert await repo.get(too_big) is None
    assert await repo.update(too_big, _row()) is False
    assert await repo.delete(UserId(-(2**63) - 1)) is False


async def test_update_missing_returns_false(repo):
    assert await repo.update(UserId(404), _row()) is False
    assert await repo.list_all() == []


async def test_update_existing_replaces_columns(repo):
    user_id = await repo.create(_row())
    assert await repo.update(user_id, _row(name="Ada K", geo_lat=9.5)) is True
    user = await repo.get(user_id)
    assert user.name == "Ada K"
    assert user.geo_lat == 9.5


async def test_delete_reports_whether_row_existed(repo):
    user_id = await repo.create(_row())
    assert await repo.delete(user_id) is True
    assert await repo.delete(user_id) is False


async def test_duplicate_email_raises_conflict_and_session_stays_usable(repo):
    await repo.create(_row())
    with pytest.raises(EmailConflictError):
        await repo.create(_row(name="Other"))
    assert len(await repo.list_all()) == 1


async def test_missing_table_maps_to_database_error():
    manager = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    try:
        async with manager.session() as db:
            with pytest.raises(DatabaseError) as exc_info:
                await UserRepository(db).list_all()
        assert exc_info.value.message == "Failed to fetch users"
        assert "users" in exc_info.value.detail
    finally:
        await manager.close()


def test_unique_violation_detection():
    sqlite_unique = IntegrityError(
        "INSERT", {}, Exception("UNIQUE constraint failed: users.email"),
    )
    postgres_unique = IntegrityError(
        "INSERT", {}, Exception('duplicate key value violates unique constraint "users_email_key"'),
    )
    not_null = IntegrityError(
        "INSERT", {}, Exception("NOT NULL constraint failed: users.name"),
    )
    assert is_unique_violation(sqlite_unique)
    assert is_unique_violation(postgres_unique)
    assert not is_unique_violation(not_null)


def test_storable_id_bounds():
    assert is_storable_id(2**63 - 1)
    assert is_storable_id(-(2**63))
    assert not is_storable_id(2**63)
    assert not is_storable_id(99999999999999999999)
