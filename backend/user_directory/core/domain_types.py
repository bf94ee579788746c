"""Domain Types — explicit typed records for the user resource.

Invariants:
    - UserRow mirrors the persisted columns one-to-one (no nesting)
    - FieldError is the single shape for field-level validation failures
    - UserId wraps int: storage-assigned, immutable once created

Design Decisions:
    - Frozen dataclasses over dicts: field-by-field mapping is checked by the
      type checker instead of relying on dynamic key access
"""

from dataclasses import dataclass
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)


# ─── Records ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class UserRow:
    """Flat column values of a user, excluding id and timestamps."""
    name: str
    email: str
    phone: str
    company: str
    address_street: str
    address_city: str
    address_zip: str
    geo_lat: float
    geo_lng: float


@dataclass(frozen=True)
class FieldError:
    """One field-level validation failure."""
    field: str
    message: str
    type: str = "value_error"

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message, "type": self.type}
