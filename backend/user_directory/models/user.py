"""User ORM — the single persisted entity.

Invariants:
    - id is an autoincrement integer primary key, assigned by storage
    - email is UNIQUE at the storage level (conflicts surface as IntegrityError)
    - Every payload column is NOT NULL
    - created_at set once on insert; updated_at refreshed by the repository on update

Design Decisions:
    - Flat address_*/geo_* columns: the nested wire shape is rebuilt by core/user_mapper.py
    - Timestamps defaulted in Python with microsecond precision so creation
      order is preserved for requests landing in the same second
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, Text, Float, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from user_directory.db.base import Base


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """A directory entry."""
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(
        Text, nullable=False, unique=True,
    )
    phone: Mapped[str] = mapped_column(Text, nullable=False)
    company: Mapped[str] = mapped_column(Text, nullable=False)
    address_street: Mapped[str] = mapped_column(Text, nullable=False)
    address_city: Mapped[str] = mapped_column(Text, nullable=False)
    address_zip: Mapped[str] = mapped_column(Text, nullable=False)
    geo_lat: Mapped[float] = mapped_column(Float, nullable=False)
    geo_lng: Mapped[float] = mapped_column(Float, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now,
    )

    def __repr__(self) -> str:
        return f"<User {self.id} {self.email}>"
