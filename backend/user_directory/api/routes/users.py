"""User Routes — list, get, create, update, delete.

Invariants:
    - Bodies are validated by UserPayload before the handler runs; failures
      become 400 envelopes in api/error_handlers.py
    - Update always replaces the full object (no partial updates)
    - Not found → UserNotFoundError (404); duplicate email → EmailConflictError (400)
    - The response is built only after the storage operation completes
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from user_directory.core.domain_types import UserId
from user_directory.core.errors import UserNotFoundError
from user_directory.core.repository_protocols import UserStore
from user_directory.core.user_mapper import expand_user, flatten_user
from user_directory.infrastructure.database import get_db
from user_directory.schemas.envelope import success_envelope
from user_directory.schemas.user import UserPayload
from user_directory.services.user_repository import UserRepository

router = APIRouter(prefix="/api/users", tags=["users"])


def get_user_store(db: AsyncSession = Depends(get_db)) -> UserStore:
    return UserRepository(db)


@router.get("")
async def list_users(store: UserStore = Depends(get_user_store)):
    """All users, most recently created first."""
    users = await store.list_all()
    return success_envelope(data=[expand_user(u) for u in users])


@router.get("/{user_id}")
async def get_user(user_id: int, store: UserStore = Depends(get_user_store)):
    user = await store.get(UserId(user_id))
    if user is None:
        raise UserNotFoundError(user_id)
    return success_envelope(data=expand_user(user))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(
    payload: UserPayload, store: UserStore = Depends(get_user_store),
):
    new_id = await store.create(flatten_user(payload))
    return success_envelope(
        message="User created successfully", data={"id": new_id},
    )


@router.put("/{user_id}")
async def update_user(
    user_id: int,
    payload: UserPayload,
    store: UserStore = Depends(get_user_store),
):
    if not await store.update(UserId(user_id), flatten_user(payload)):
        raise UserNotFoundError(user_id)
    return success_envelope(message="User updated successfully")


@router.delete("/{user_id}")
async def delete_user(user_id: int, store: UserStore = Depends(get_user_store)):
    if not await store.delete(UserId(user_id)):
        raise UserNotFoundError(user_id)
    return success_envelope(message="User deleted successfully")
