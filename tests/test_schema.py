import json

import pytest

from adminkit.errors import CustomError, ErrorType
from adminkit.schema import (
    BaseResponse,
    HTTPBaseResponse,
    LoginBodyParam,
    RefreshBodyParam,
    RegisterBodyParam,
    Response,
    RoleBodyParam,
    UserQueryParam,
    UserUpdateBodyParam,
    parse_body,
)


def test_parse_login_body_from_mapping():
    password = "password"
    body = parse_body(LoginBodyParam, {"username": "alice", "password": password})
    assert body == LoginBodyParam(username="alice", password=password)


def test_parse_register_body_from_json_text():
    password = "password"
    text = json.dumps(
        {"username": "alice", "email": "alice@example.com", "password": password}
    )
    body = parse_body(RegisterBodyParam, text)
    assert body.email == "alice@example.com"
    assert body.role_id == ""


def test_parse_from_bytes_ignores_unknown_keys():
    body = parse_body(RefreshBodyParam, b'{"refresh_token": "token", "extra": 1}')
    assert body.refresh_token == "token"


def test_missing_required_field_raises_invalid_params():
    with pytest.raises(CustomError) as exc_info:
        parse_body(RefreshBodyParam, {})
    assert exc_info.value.error_type == ErrorType.INVALID_PARAMS
    assert "refresh_token" in str(exc_info.value)


def test_empty_required_field_raises():
    with pytest.raises(CustomError) as exc_info:
        parse_body(RoleBodyParam, {"name": "", "description": "x"})
    assert exc_info.value.error_type == ErrorType.INVALID_PARAMS


def test_null_counts_as_missing():
    with pytest.raises(CustomError):
        parse_body(RoleBodyParam, {"name": None})


def test_optional_field_may_be_absent():
    body = parse_body(RoleBodyParam, {"name": "editor"})
    assert body.name == "editor"
    assert body.description == ""


def test_wrong_type_raises():
    with pytest.raises(CustomError) as exc_info:
        parse_body(RoleBodyParam, {"name": 5})
    assert exc_info.value.error_type == ErrorType.INVALID_PARAMS


def test_non_object_body_raises():
    with pytest.raises(CustomError):
        parse_body(RoleBodyParam, "[1, 2]")
    with pytest.raises(CustomError):
        parse_body(RoleBodyParam, "{broken")


def test_non_dataclass_model_rejected():
    with pytest.raises(TypeError):
        parse_body(dict, {})


def test_query_param_accepts_numeric_strings():
    query = parse_body(UserQueryParam, {"username": "bob", "offset": "5", "limit": 10})
    assert query.offset == 5
    assert query.limit == 10


def test_query_param_rejects_non_numeric_limit():
    with pytest.raises(CustomError):
        parse_body(UserQueryParam, {"limit": "lots"})


def test_filters_skip_empty_and_paging():
    query = UserQueryParam(username="bob", email="", offset=3, limit=9)
    assert query.filters() == {"username": "bob"}
    assert UserQueryParam().filters() == {}


def test_changes_skip_empty_fields():
    update = UserUpdateBodyParam(refresh_token="token")
    assert update.changes() == {"refresh_token": "token"}
    assert UserUpdateBodyParam().changes() == {}


def test_response_holds_error_and_data():
    err = ErrorType.NOT_FOUND.new()
    res = Response(error=err, data={"id": "1"})
    assert res.error is err
    assert res.data == {"id": "1"}
    assert Response() == Response(error=None, data=None)


def test_base_responses_defaults():
    assert BaseResponse() == BaseResponse(status=0, code="", message="", data=None)
    assert HTTPBaseResponse(status=200, message="OK").code == ""