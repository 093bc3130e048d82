import json

import jwt
import pytest
from freezegun import freeze_time

from adminkit.auth import JWTAuth, TokenInfo, init_auth
from adminkit.config import JWTAuthConfig, Settings
from adminkit.errors import CustomError, ErrorType


@pytest.fixture
def auth():
    return JWTAuth(
        signing_key="secret",
        verification_key="secret",
        refresh_signing_key="placeholder",
        refresh_verification_key="placeholder",
    )


def test_generate_and_parse_round_trip(auth):
    info = auth.generate_token("user-1")
    assert auth.parse_user_id(info.access_token, False) == "user-1"
    assert auth.parse_user_id(info.refresh_token, True) == "user-1"
    assert info.token_type == "Bearer"


def test_default_algorithm_and_lifetimes(auth):
    info = auth.generate_token("user-1")
    assert jwt.get_unverified_header(info.access_token)["alg"] == "HS512"
    access = jwt.decode(info.access_token, options={"verify_signature": False})
    refresh = jwt.decode(info.refresh_token, options={"verify_signature": False})
    assert access["exp"] - access["iat"] == 7200
    assert refresh["exp"] - refresh["iat"] == 24 * 60 * 60
    assert access["nbf"] == access["iat"]


def test_token_info_to_json_round_trip():
    info = TokenInfo(access_token="token", refresh_token="token", token_type="Bearer")
    decoded = json.loads(info.to_json())
    assert decoded == {"access_token": "token", "refresh_token": "token", "token_type": "Bearer"}
    assert list(decoded) == ["access_token", "refresh_token", "token_type"]


def test_malformed_token(auth):
    with pytest.raises(CustomError) as exc:
        auth.parse_user_id("token", False)
    assert exc.value.error_type is ErrorType.TOKEN_MALFORMED


def test_wrong_key_is_invalid(auth):
    info = auth.generate_token("user-1")
    with pytest.raises(CustomError) as exc:
        auth.parse_user_id(info.access_token, True)
    assert exc.value.error_type is ErrorType.TOKEN_INVALID


def test_non_hmac_token_is_invalid(auth):
    unsigned = jwt.encode({"sub": "user-1"}, None, algorithm="none")
    with pytest.raises(CustomError) as exc:
        auth.parse_user_id(unsigned, False)
    assert exc.value.error_type is ErrorType.TOKEN_INVALID


def test_expired_access_token(auth):
    with freeze_time("2024-01-01 00:00:00") as frozen:
        info = auth.generate_token("user-1")
        frozen.tick(7201)
        with pytest.raises(CustomError) as exc:
            auth.parse_user_id(info.access_token, False)
        assert exc.value.error_type is ErrorType.TOKEN_EXPIRED
        assert auth.parse_user_id(info.refresh_token, True) == "user-1"


def test_token_not_valid_yet_is_invalid(auth):
    with freeze_time("2024-01-01 00:00:00") as frozen:
        info = auth.generate_token("user-1")
        frozen.move_to("2023-12-31 23:00:00")
        with pytest.raises(CustomError) as exc:
            auth.parse_user_id(info.access_token, False)
        assert exc.value.error_type is ErrorType.TOKEN_INVALID


def test_refresh_keeps_refresh_token(auth):
    info = auth.generate_token("user-1")
    refreshed = auth.refresh_token(info.refresh_token)
    assert refreshed.refresh_token == info.refresh_token
    assert auth.parse_user_id(refreshed.access_token, False) == "user-1"
    assert refreshed.token_type == info.token_type


def test_refresh_with_expired_token_issues_new_pair(auth):
    with freeze_time("2024-01-01 00:00:00") as frozen:
        info = auth.generate_token("user-1")
        frozen.tick(25 * 3600)
        refreshed = auth.refresh_token(info.refresh_token)
        assert refreshed.refresh_token != info.refresh_token
        assert auth.parse_user_id(refreshed.refresh_token, True) == ""
        assert auth.parse_user_id(refreshed.access_token, False) == ""


def test_refresh_with_invalid_token_raises(auth):
    with pytest.raises(CustomError) as exc:
        auth.refresh_token("token")
    assert exc.value.error_type is ErrorType.TOKEN_MALFORMED


def test_default_refresh_keys_differ():
    auth = JWTAuth()
    info = auth.generate_token("user-1")
    assert auth.parse_user_id(info.access_token, False) == "user-1"
    with pytest.raises(CustomError) as exc:
        auth.parse_user_id(info.refresh_token, True)
    assert exc.value.error_type is ErrorType.TOKEN_INVALID


def test_init_auth_uses_settings():
    settings = Settings(
        jwt_auth=JWTAuthConfig(
            signing_key="secret",
            expired=60,
            signing_refresh_key="placeholder",
            expired_refresh_token=2,
        )
    )
    auth = init_auth(settings)
    info = auth.generate_token("user-9")
    access = jwt.decode(info.access_token, "secret", algorithms=["HS512"])
    refresh = jwt.decode(info.refresh_token, "placeholder", algorithms=["HS512"])
    assert access["exp"] - access["iat"] == 60
    assert refresh["exp"] - refresh["iat"] == 2 * 3600
    assert auth.refresh_token(info.refresh_token).refresh_token == info.refresh_token


def test_init_auth_zero_lifetimes_keep_defaults():
    settings = Settings(jwt_auth=JWTAuthConfig(signing_key="secret", signing_refresh_key="secret"))
    auth = init_auth(settings)
    assert auth.expired == 7200
    assert auth.expired_refresh == 24