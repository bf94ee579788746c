"""Record Mapper — flat storage columns <-> nested wire representation.

Invariants:
    - flatten_user and expand_row are exact inverses over the payload fields
    - address and address.geo are always reconstructed together (no partial nesting)
    - Timestamps serialize as ISO-8601 with an explicit UTC offset

Design Decisions:
    - Field-by-field mapping through UserRow instead of dynamic key access
    - Naive datetimes are read as UTC: SQLite drops tzinfo on the way back
"""

from datetime import datetime, timezone

from user_directory.core.domain_types import UserRow
from user_directory.core.repository_protocols import UserLike
from user_directory.schemas.user import UserPayload


def flatten_user(payload: UserPayload) -> UserRow:
    """Nested payload -> flat column values."""
    return UserRow(
        name=payload.name,
        email=payload.email,
        phone=payload.phone,
        company=payload.company,
        address_street=payload.address.street,
        address_city=payload.address.city,
        address_zip=payload.address.zip,
        geo_lat=payload.address.geo.lat,
        geo_lng=payload.address.geo.lng,
    )


def expand_row(row: UserRow) -> dict:
    """Flat column values -> nested wire fields (no id, no timestamps)."""
    return {
        "name": row.name,
        "email": row.email,
        "phone": row.phone,
        "company": row.company,
        "address": {
            "street": row.address_street,
            "city": row.address_city,
            "zip": row.address_zip,
            "geo": {
                "lat": row.geo_lat,
                "lng": row.geo_lng,
            },
        },
    }


def row_from_record(user: UserLike) -> UserRow:
    """Extract the column values of a stored user."""
    return UserRow(
        name=user.name,
        email=user.email,
        phone=user.phone,
        company=user.company,
        address_street=user.address_street,
        address_city=user.address_city,
        address_zip=user.address_zip,
        geo_lat=user.geo_lat,
        geo_lng=user.geo_lng,
    )


def expand_user(user: UserLike) -> dict:
    """Stored user -> full wire object."""
    return {
        "id": user.id,
        **expand_row(row_from_record(user)),
        "created_at": format_timestamp(user.created_at),
        "updated_at": format_timestamp(user.updated_at),
    }


def format_timestamp(value: datetime | None) -> str | None:
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()
