"""User Payload Validation — pydantic failures translated to field errors.

Tests cover:
    - Valid payloads produce no errors and a normalized model
    - Each leaf field reports its own message
    - Missing containers (body, address, geo) fan out to their leaf fields
    - FastAPI request locations (body/path) are stripped and aliased
    - Malformed JSON reported against `body`
"""

import pytest
from pydantic import ValidationError

from user_directory.core.domain_types import FieldError
from user_directory.core.validate_user import (
    FIELD_MESSAGES,
    MALFORMED_BODY_MESSAGE,
    field_errors_from_pydantic,
)
from user_directory.schemas.user import UserPayload


def _errors_for(payload) -> list[FieldError]:
    try:
        UserPayload.model_validate(payload)
    except ValidationError as e:
        return field_errors_from_pydantic(e.errors())
    return []


def test_valid_payload_has_no_errors(user_payload):
    assert _errors_for(user_payload()) == []


@pytest.mark.parametrize("field", ["name", "phone", "company"])
def test_blank_text_field_is_rejected(user_payload, field):
    errors = _errors_for(user_payload(**{field: "   "}))
    assert [e.field for e in errors] == [field]
    assert errors[0].message == FIELD_MESSAGES[field]


@pytest.mark.parametrize("field", ["street", "city", "zip"])
def test_blank_address_field_is_rejected(user_payload, field):
    payload = user_payload()
    payload["address"][field] = ""
    errors = _errors_for(payload)
    assert [e.field for e in errors] == [f"address.{field}"]


@pytest.mark.parametrize("email", ["", "plainaddress", "a@", "@example.com", "a b@example.com"])
def test_invalid_email_is_rejected(user_payload, email):
    errors = _errors_for(user_payload(email=email))
    assert errors == [FieldError("email", "Valid email is required", errors[0].type)]


@pytest.mark.parametrize("value", ["north", None, "", "nan", "inf"])
def test_unparseable_latitude_is_rejected(user_payload, value):
    payload = user_payload()
    payload["address"]["geo"]["lat"] = value
    errors = _errors_for(payload)
    assert [e.field for e in errors] == ["address.geo.lat"]
    assert errors[0].message == "Valid latitude is required"


def test_missing_geo_reports_both_coordinates(user_payload):
    payload = user_payload()
    del payload["address"]["geo"]
    fields = [e.field for e in _errors_for(payload)]
    assert fields == ["address.geo.lat", "address.geo.lng"]


def test_address_of_wrong_type_reports_every_address_field(user_payload):
    fields = [e.field for e in _errors_for(user_payload(address="Main St"))]
    assert fields == [
        "address.street", "address.city", "address.zip",
        "address.geo.lat", "address.geo.lng",
    ]


def test_non_object_body_reports_every_field():
    fields = [e.field for e in _errors_for(["not", "an", "object"])]
    assert fields == [f for f in FIELD_MESSAGES if f != "id"]


def test_request_body_prefix_is_stripped():
    errors = field_errors_from_pydantic([
        {"loc": ("body", "name"), "msg": "Field required", "type": "missing"},
    ])
    assert errors == [FieldError("name", "Name is required", "missing")]


def test_path_parameter_is_aliased_to_id():
    errors = field_errors_from_pydantic([
        {"loc": ("path", "user_id"), "msg": "Input should be a valid integer", "type": "int_parsing"},
    ])
    assert errors == [FieldError("id", "Valid user id is required", "int_parsing")]


def test_malformed_json_is_reported_on_body():
    errors = field_errors_from_pydantic([
        {"loc": ("body", 1), "msg": "JSON decode error", "type": "json_invalid"},
    ])
    assert errors == [FieldError("body", MALFORMED_BODY_MESSAGE, "json_invalid")]


def test_duplicate_field_errors_are_collapsed():
    errors = field_errors_from_pydantic([
        {"loc": ("body", "email"), "msg": "bad", "type": "value_error"},
        {"loc": ("body", "email"), "msg": "worse", "type": "value_error"},
    ])
    assert len(errors) == 1


def test_unknown_location_keeps_pydantic_message():
    errors = field_errors_from_pydantic([
        {"loc": ("query", "verbose"), "msg": "Input should be a valid boolean", "type": "bool_parsing"},
    ])
    assert errors == [FieldError("verbose", "Input should be a valid boolean", "bool_parsing")]
