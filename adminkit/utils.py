"""Small helpers: input validation, codes, response bodies, hashing and JSON."""

from __future__ import annotations

import json
import random
import re
from dataclasses import asdict, dataclass, is_dataclass
from datetime import datetime
from typing import Any, Dict, Iterable, Union

import bcrypt

from adminkit import errors

CHARSET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
RAND_LENGTH = 5
BCRYPT_MIN_COST = 4

SUCCESS = "200"
ERROR = "500"
INVALID_PARAMS = "400"

ERROR_GET_DATABASE = "1001"

ERROR_EXIST_PRODUCT = "10001"
ERROR_EXIST_PRODUCT_FAIL = "10002"
ERROR_NOT_EXIST_PRODUCT = "10003"
ERROR_GET_PRODUCTS_FAIL = "10004"
ERROR_COUNT_PRODUCT_FAIL = "10005"
ERROR_ADD_PRODUCT_FAIL = "10006"
ERROR_EDIT_PRODUCT_FAIL = "10007"
ERROR_DELETE_PRODUCT_FAIL = "10008"
ERROR_EXPORT_PRODUCT_FAIL = "10009"
ERROR_IMPORT_PRODUCT_FAIL = "10010"

ERROR_NOT_EXIST_USER = "20001"
ERROR_CHECK_EXIST_USER_FAIL = "20002"
ERROR_ADD_USER_FAIL = "20003"
ERROR_DELETE_USER_FAIL = "20004"
ERROR_EDIT_USER_FAIL = "20005"
ERROR_COUNT_USER_FAIL = "20006"
ERROR_GET_USERS_FAIL = "20007"
ERROR_GET_USER_FAIL = "20008"
ERROR_GEN_USER_POSTER_FAIL = "20009"

ERROR_AUTH_CHECK_TOKEN_FAIL = "30001"
ERROR_AUTH_CHECK_TOKEN_TIMEOUT = "30002"
ERROR_AUTH_BUILD = "30003"
ERROR_AUTH = "30004"

_USERNAME = re.compile(r"[A-Za-z0-9]")
_EMAIL = re.compile(r"^[A-Za-z0-9]+[@]+[A-Za-z0-9]+[.]+[A-Za-z]+$")
_MIN_PASSWORD_LENGTH = 5
_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}

_random = random.Random()


@dataclass(frozen=True)
class Validation:
    """A value and the kind of check it must pass: username, email or password."""

    value: str
    valid: str


def validate(validations: Iterable[Validation]) -> bool:
    """Whether every value passes its check; unknown kinds always pass."""
    for item in validations:
        if item.valid == "username" and not _USERNAME.search(item.value):
            return False
        if item.valid == "email" and not _EMAIL.search(item.value):
            return False
        if item.valid == "password" and len(item.value) < _MIN_PASSWORD_LENGTH:
            return False
    return True


def random_string(length: int) -> str:
    """A random string of upper-case letters and digits."""
    return "".join(_random.choices(CHARSET, k=length))


def generate_code(prefix: str) -> str:
    """The prefix, today's date as YYMMDD and a random suffix, upper-cased."""
    today = datetime.now()
    code = f"{prefix}{today:%y%m%d}{random_string(RAND_LENGTH)}"
    return code.upper()


def prepare_response(data: Any, message: str, code: str) -> Dict[str, Any]:
    """A response body holding data, a message and an application code."""
    return {"data": data, "message": message, "code": code}


def hash_password(password: Union[str, bytes]) -> str:
    """A bcrypt hash of the password at the minimum cost."""
    raw = password.encode("utf-8") if isinstance(password, str) else bytes(password)
    try:
        hashed = bcrypt.hashpw(raw, bcrypt.gensalt(rounds=BCRYPT_MIN_COST))
    except ValueError as exc:
        raise errors.wrap(exc, "utils.HashPassword") from exc
    return hashed.decode("ascii")


def _encode(value: Any) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        return asdict(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _dumps(value: Any) -> str:
    return json.dumps(
        value,
        default=_encode,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )


def json_marshal_to_string(value: Any) -> str:
    """Compact JSON text for the value, or an empty string if it cannot be encoded."""
    try:
        text = _dumps(value)
    except (TypeError, ValueError):
        return ""
    for char, escape in _HTML_ESCAPES.items():
        text = text.replace(char, escape)
    return text


def copy(src: Any) -> Any:
    """A deep copy of ``src`` made of plain JSON values (dicts, lists, scalars)."""
    return json.loads(_dumps(src))