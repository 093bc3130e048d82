"""Simple payload tokens and the checks that guard routes with them."""

from __future__ import annotations

import time
from typing import Any, Dict, Mapping

import jwt

from adminkit import utils

TOKEN_EXPIRED_TIME = 300
_SIGNING_KEY = b"secret"
_ALGORITHM = "HS256"
_HMAC_ALGORITHMS = ["HS256", "HS384", "HS512"]
_BEARER = "Bearer "
_UNAUTHORIZED_STATUS = 401


class TokenValidationError(Exception):
    """A token could not be validated; ``expired`` tells whether it only timed out."""

    def __init__(self, message: str, expired: bool = False) -> None:
        super().__init__(message)
        self.expired = expired


class Unauthorized(Exception):
    """A request was refused; carries the application code and the 401 body."""

    status = _UNAUTHORIZED_STATUS

    def __init__(self, code: str) -> None:
        super().__init__(f"Unauthorized ({code})")
        self.code = code

    @property
    def body(self) -> Dict[str, Any]:
        return utils.prepare_response(None, "Unauthorized", self.code)


def generate_token(payload: Any) -> str:
    """A signed token carrying the payload, valid for five minutes; "" on failure."""
    claims = {"payload": payload, "exp": int(time.time()) + TOKEN_EXPIRED_TIME}
    try:
        return jwt.encode(claims, _SIGNING_KEY, algorithm=_ALGORITHM)
    except (jwt.PyJWTError, TypeError, ValueError):
        return ""


def validate_token(token: str) -> Dict[str, Any]:
    """The payload of a token, which may carry a ``Bearer`` prefix.

    Raises TokenValidationError when the token is malformed, badly signed or
    expired. A payload that is not an object yields an empty dict.
    """
    clean = token.replace(_BEARER, "")
    try:
        claims = jwt.decode(clean, _SIGNING_KEY, algorithms=_HMAC_ALGORITHMS)
    except jwt.ExpiredSignatureError as exc:
        raise TokenValidationError("token is expired", expired=True) from exc
    except jwt.InvalidTokenError as exc:
        raise TokenValidationError(str(exc) or "token is invalid") from exc
    payload = claims.get("payload")
    return dict(payload) if isinstance(payload, Mapping) else {}


def authorize(authorization: str) -> Dict[str, Any]:
    """Check an Authorization header value and return the token's payload.

    Raises Unauthorized with code INVALID_PARAMS when the header is empty,
    ERROR_AUTH_CHECK_TOKEN_TIMEOUT when the token has expired and
    ERROR_AUTH_CHECK_TOKEN_FAIL for any other failure.
    """
    if not authorization:
        raise Unauthorized(utils.INVALID_PARAMS)
    try:
        return validate_token(authorization)
    except TokenValidationError as exc:
        code = (
            utils.ERROR_AUTH_CHECK_TOKEN_TIMEOUT
            if exc.expired
            else utils.ERROR_AUTH_CHECK_TOKEN_FAIL
        )
        raise Unauthorized(code) from exc


def check_admin(authorization: str) -> Dict[str, Any]:
    """The admin guard; it applies the same token check as ``authorize``."""
    return authorize(authorization)