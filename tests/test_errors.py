"""
Tests for APIError: message, best-effort enrichment, duplicate detection.
"""

from __future__ import annotations

import json

import pytest

from freshdesk_client.errors import APIError, FieldError


def _error_body(*errors: dict) -> str:
    return json.dumps({"description": "Validation failed", "errors": list(errors)}, separators=(",", ":"))


def test_message_and_str() -> None:
    err = APIError(409, 201, '{"name":"x"}', '{"description":"nope"}')
    assert err.message == "received status code 409 (201 expected)"
    assert str(err) == 'received status code 409 (201 expected) - {"description":"nope"}'
    assert err.status_code == 409
    assert err.expected_status == 201
    assert err.req_body == '{"name":"x"}'


def test_enrichment_decodes_description_and_errors() -> None:
    body = _error_body(
        {"field": "name", "code": "missing_field", "message": "It should be a String"},
        {"field": "email", "code": "invalid_value", "message": "bad", "additional_info": {"x": 1}},
    )
    err = APIError(400, 200, "", body)
    assert err.description == "Validation failed"
    assert [e.field for e in err.errors] == ["name", "email"]
    assert err.errors[0] == FieldError(field="name", message="It should be a String", code="missing_field")
    assert err.errors[1].additional_info == {"x": 1.0}


def test_additional_info_numbers_are_floats() -> None:
    err = APIError(400, 201, "", _error_body({"field": "email", "additional_info": {"user_id": 42}}))
    user_id = err.errors[0].additional_info["user_id"]
    assert isinstance(user_id, float)
    assert user_id == 42.0


@pytest.mark.parametrize("body", ["", "not json", "[1, 2]", '"text"', "null", '{"errors": "oops"}'])
def test_enrichment_is_best_effort(body: str) -> None:
    err = APIError(500, 200, "", body)
    assert err.description is None
    assert err.errors == []
    assert err.res_body == body
    assert "500" in str(err)


def test_enrichment_skips_malformed_items() -> None:
    body = json.dumps({"errors": ["x", {"field": 3, "code": "duplicate_value", "additional_info": []}]})
    err = APIError(400, 201, "", body)
    assert err.errors == [FieldError(field="", message="", code="duplicate_value", additional_info={})]


def test_is_duplicate_with_user_id() -> None:
    body = _error_body({"field": "email", "code": "duplicate_value", "additional_info": {"user_id": 12345}})
    assert APIError(409, 201, "", body).is_duplicate() == (True, 12345)


@pytest.mark.parametrize("info", [{}, {"user_id": None}, {"user_id": "12345"}, {"user_id": True}])
def test_is_duplicate_without_usable_user_id(info: dict) -> None:
    body = _error_body({"field": "email", "code": "duplicate_value", "additional_info": info})
    assert APIError(409, 201, "", body).is_duplicate() == (False, 0)


@pytest.mark.parametrize("user_id", ["1e400", "-1e400", "Infinity", "NaN"])
def test_is_duplicate_non_finite_user_id(user_id: str) -> None:
    body = (
        '{"errors":[{"field":"email","code":"duplicate_value",'
        '"additional_info":{"user_id":' + user_id + "}}]}"
    )
    assert APIError(409, 201, "", body).is_duplicate() == (False, 0)


def test_is_duplicate_missing_additional_info() -> None:
    body = _error_body({"field": "email", "code": "duplicate_value", "message": "taken"})
    assert APIError(409, 201, "", body).is_duplicate() == (False, 0)


def test_is_duplicate_empty_errors() -> None:
    assert APIError(409, 201, "", _error_body()).is_duplicate() == (False, 0)
    assert APIError(409, 201, "", "").is_duplicate() == (False, 0)


def test_is_duplicate_ignores_other_fields_and_codes() -> None:
    body = _error_body(
        {"field": "phone", "code": "duplicate_value", "additional_info": {"user_id": 1}},
        {"field": "email", "code": "invalid_value", "additional_info": {"user_id": 2}},
        {"field": "email", "code": "duplicate_value", "additional_info": {"user_id": 3}},
    )
    assert APIError(409, 201, "", body).is_duplicate() == (True, 3)


def test_is_duplicate_first_email_match_decides() -> None:
    body = _error_body(
        {"field": "email", "code": "duplicate_value", "additional_info": {}},
        {"field": "email", "code": "duplicate_value", "additional_info": {"user_id": 7}},
    )
    assert APIError(409, 201, "", body).is_duplicate() == (False, 0)
