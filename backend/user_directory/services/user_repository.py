"""User Repository — SQL access for the users table through one AsyncSession.

Invariants:
    - Every write commits or rolls back before returning
    - IntegrityError on the UNIQUE email column → EmailConflictError
    - Any other SQLAlchemy failure → DatabaseError with an operation-specific message
    - update/delete report "zero rows affected" as False, never raise for it
    - list_all orders by created_at DESC, id DESC (most recent first)
    - An id outside the signed 64-bit INTEGER range names no row: get → None,
      update/delete → False, and the driver is never asked to bind it

Design Decisions:
    - Storage faults are mapped here, next to the statement that caused them,
      so the route layer only sees domain errors
    - Bulk UPDATE/DELETE statements: one round trip, rowcount tells existence
"""

import logging
from contextlib import asynccontextmanager
from dataclasses import asdict
from typing import AsyncGenerator, Sequence

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from user_directory.core.domain_types import UserId, UserRow
from user_directory.core.errors import DatabaseError, EmailConflictError
from user_directory.models.user import User, utc_now

logger = logging.getLogger(__name__)

MAX_ROW_ID = 2**63 - 1
MIN_ROW_ID = -(2**63)


def is_unique_violation(exc: IntegrityError) -> bool:
    """SQLite: 'UNIQUE constraint failed'; PostgreSQL: 'violates unique constraint'."""
    return "unique" in str(exc.orig).lower()


def is_storable_id(user_id: int) -> bool:
    return MIN_ROW_ID <= user_id <= MAX_ROW_ID


class UserRepository:
    """Persistence for User rows, bound to a request-scoped session."""

    def __init__(self, db: AsyncSession):
        self._db = db

    @asynccontextmanager
    async def _storage_errors(self, failure_message: str) -> AsyncGenerator[None, None]:
        try:
            yield
        except IntegrityError as e:
            await self._db.rollback()
            if is_unique_violation(e):
                logger.warning(
                    f"{failure_message}: email already exists",
                    extra={"error_code": "EMAIL_CONFLICT"},
                )
                raise EmailConflictError() from e
            logger.error(f"{failure_message}: {e.orig}")
            raise DatabaseError(failure_message, str(e.orig)) from e
        except SQLAlchemyError as e:
            await self._db.rollback()
            logger.error(f"{failure_message}: {e}", exc_info=True)
            raise DatabaseError(failure_message, str(e)) from e

    async def list_all(self) -> Sequence[User]:
        async with self._storage_errors("Failed to fetch users"):
            result = await self._db.execute(
                select(User).order_by(User.created_at.desc(), User.id.desc()),
            )
            return result.scalars().all()

    async def get(self, user_id: UserId) -> User | None:
        if not is_storable_id(user_id):
            return None
        async with self._storage_errors("Failed to fetch user"):
            result = await self._db.execute(
                select(User).where(User.id == user_id),
            )
            return result.scalar_one_or_none()

    async def create(self, row: UserRow) -> UserId:
        """Insert a new user; the id is assigned by storage."""
        async with self._storage_errors("Failed to create user"):
            now = utc_now()
            user = User(**asdict(row), created_at=now, updated_at=now)
            self._db.add(user)
            await self._db.flush()
            await self._db.commit()
        logger.info("User created", extra={"user_id": user.id})
        return UserId(user.id)

    async def update(self, user_id: UserId, row: UserRow) -> bool:
        """Replace every payload column and refresh updated_at."""
        if not is_storable_id(user_id):
            return False
        async with self._storage_errors("Failed to update user"):
            result = await self._db.execute(
                update(User)
                .where(User.id == user_id)
                .values(**asdict(row), updated_at=utc_now()),
            )
            await self._db.commit()
        updated = result.rowcount > 0
        if updated:
            logger.info("User updated", extra={"user_id": user_id})
        return updated

    async def delete(self, user_id: UserId) -> bool:
        """Hard delete; False when no row matched."""
        if not is_storable_id(user_id):
            return False
        async with self._storage_errors("Failed to delete user"):
            result = await self._db.execute(
                delete(User).where(User.id == user_id),
            )
            await self._db.commit()
        deleted = result.rowcount > 0
        if deleted:
            logger.info("User deleted", extra={"user_id": user_id})
        return deleted
