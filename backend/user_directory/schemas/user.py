"""User Schemas — Pydantic models with field-level validation for the user payload.

Invariants:
    - Text fields are stripped and must be non-empty after stripping
    - email is syntactically valid and stored in normalized form
    - geo.lat / geo.lng accept anything parseable as a finite float
      (booleans excluded)
    - address and address.geo are required objects (no partial nesting)

Design Decisions:
    - coerce_numbers_to_str: a numeric phone or zip is accepted as text
    - Normalization lives in validators so the parsed model is the single
      normalized payload used downstream
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from user_directory.core.normalize_email import normalize_email


_TEXT_CONFIG = ConfigDict(
    str_strip_whitespace=True,
    coerce_numbers_to_str=True,
)


class GeoPayload(BaseModel):
    """Geographic coordinates."""
    lat: float = Field(allow_inf_nan=False)
    lng: float = Field(allow_inf_nan=False)

    @field_validator("lat", "lng", mode="before")
    @classmethod
    def reject_booleans(cls, v):
        if isinstance(v, bool):
            raise ValueError("must be a number, not a boolean")
        return v


class AddressPayload(BaseModel):
    """Postal address with coordinates."""
    model_config = _TEXT_CONFIG

    street: str = Field(min_length=1)
    city: str = Field(min_length=1)
    zip: str = Field(min_length=1)
    geo: GeoPayload


class UserPayload(BaseModel):
    """Full user body for create and update (no partial updates)."""
    model_config = _TEXT_CONFIG

    name: str = Field(min_length=1)
    email: EmailStr
    phone: str = Field(min_length=1)
    company: str = Field(min_length=1)
    address: AddressPayload

    @field_validator("email")
    @classmethod
    def normalize(cls, v: str) -> str:
        return normalize_email(v)
