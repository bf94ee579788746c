"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods do IO, the mapper that consumes
      their results stays synchronous and pure
"""

from datetime import datetime
from typing import Protocol, Sequence

from user_directory.core.domain_types import UserId, UserRow


class UserLike(Protocol):
    """Structural contract for a stored user (the ORM model satisfies it)."""
    id: int
    name: str
    email: str
    phone: str
    company: str
    address_street: str
    address_city: str
    address_zip: str
    geo_lat: float
    geo_lng: float
    created_at: datetime
    updated_at: datetime


class UserStore(Protocol):
    """Contract for user persistence, implemented by services/user_repository.py."""
    async def list_all(self) -> Sequence[UserLike]: ...
    async def get(self, user_id: UserId) -> UserLike | None: ...
    async def create(self, row: UserRow) -> UserId: ...
    async def update(self, user_id: UserId, row: UserRow) -> bool: ...
    async def delete(self, user_id: UserId) -> bool: ...
