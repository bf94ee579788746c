"""User Payload Validation — turns raw validation failures into field-level errors.

Invariants:
    - Output is a list of FieldError, one per failing field, in payload order
    - Every leaf field has exactly one human-readable message (FIELD_MESSAGES)
    - A missing or malformed container (body, address, address.geo) reports
      one error per leaf field beneath it
    - Pure: never touches storage

Design Decisions:
    - Works on the plain error dicts produced by pydantic (ValidationError.errors()
      and RequestValidationError.errors() share the shape), so the core does not
      depend on FastAPI
"""

from typing import Any, Iterable

from user_directory.core.domain_types import FieldError


FIELD_MESSAGES: dict[str, str] = {
    "name": "Name is required",
    "email": "Valid email is required",
    "phone": "Phone is required",
    "company": "Company is required",
    "address.street": "Street address is required",
    "address.city": "City is required",
    "address.zip": "Zip code is required",
    "address.geo.lat": "Valid latitude is required",
    "address.geo.lng": "Valid longitude is required",
    "id": "Valid user id is required",
}

MALFORMED_BODY_MESSAGE = "Request body must be valid JSON"

# Request sections FastAPI prepends to error locations
_REQUEST_SECTIONS = frozenset({"body", "path", "query", "header", "cookie"})
_PARAMETER_ALIASES = {"user_id": "id"}


def field_errors_from_pydantic(errors: Iterable[dict[str, Any]]) -> list[FieldError]:
    """Translate pydantic error dicts into field-level errors."""
    result: list[FieldError] = []
    seen: set[str] = set()
    for error in errors:
        for field_error in _translate(error):
            if field_error.field not in seen:
                seen.add(field_error.field)
                result.append(field_error)
    return result


def _translate(error: dict[str, Any]) -> list[FieldError]:
    error_type = error.get("type", "value_error")
    if error_type == "json_invalid":
        return [FieldError("body", MALFORMED_BODY_MESSAGE, error_type)]

    path = _field_path(error.get("loc", ()))
    if path in FIELD_MESSAGES:
        return [FieldError(path, FIELD_MESSAGES[path], error_type)]

    leaves = _leaf_fields_under(path)
    if leaves:
        return [FieldError(leaf, FIELD_MESSAGES[leaf], error_type) for leaf in leaves]
    return [FieldError(path or "body", error.get("msg", "Invalid value"), error_type)]


def _field_path(loc: Iterable[Any]) -> str:
    parts = [str(p) for p in loc]
    if parts and parts[0] in _REQUEST_SECTIONS:
        parts = parts[1:]
    parts = [_PARAMETER_ALIASES.get(p, p) for p in parts]
    return ".".join(parts)


def _leaf_fields_under(path: str) -> list[str]:
    """Leaf fields of a container path; '' is the whole payload."""
    if path == "":
        return [f for f in FIELD_MESSAGES if f != "id"]
    prefix = path + "."
    return [f for f in FIELD_MESSAGES if f.startswith(prefix)]
