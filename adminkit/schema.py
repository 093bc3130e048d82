"""Request and response shapes exchanged with API clients."""

import json
from dataclasses import dataclass, field, fields, is_dataclass
from typing import Any, Dict, Mapping, Optional, Type, TypeVar, Union

from adminkit.errors import ErrorType

T = TypeVar("T")


def _required() -> Any:
    return field(default="", metadata={"required": True})


@dataclass
class BaseResponse:
    status: int = 0
    code: str = ""
    message: str = ""
    data: Any = None


@dataclass
class Role:
    id: str = ""
    name: str = ""
    description: str = ""


@dataclass
class RoleBodyParam:
    name: str = _required()
    description: str = ""


@dataclass
class User:
    id: str = ""
    username: str = ""
    email: str = ""
    extra: Any = None


@dataclass
class RegisterBodyParam:
    username: str = _required()
    email: str = _required()
    password: str = _required()
    role_id: str = ""


@dataclass
class LoginBodyParam:
    username: str = _required()
    password: str = _required()


@dataclass
class RefreshBodyParam:
    refresh_token: str = _required()


@dataclass
class UserQueryParam:
    username: str = ""
    email: str = ""
    offset: int = 0
    limit: int = 0

    def filters(self) -> Dict[str, str]:
        """Column filters for a user query: the non-empty username and email."""
        return {
            name: value
            for name, value in (("username", self.username), ("email", self.email))
            if value
        }


@dataclass
class UserTokenInfo:
    access_token: str = ""
    refresh_token: str = ""
    token_type: str = ""


@dataclass
class UserUpdateBodyParam:
    password: str = ""
    role_id: str = ""
    refresh_token: str = ""

    def changes(self) -> Dict[str, str]:
        """The columns to update: every field that is not empty."""
        return {
            name: value
            for name, value in (
                ("password", self.password),
                ("role_id", self.role_id),
                ("refresh_token", self.refresh_token),
            )
            if value
        }


@dataclass
class Response:
    """What a handler returns: an error to report and data to send."""

    error: Optional[BaseException] = None
    data: Any = None


@dataclass
class HTTPBaseResponse:
    status: int = 0
    code: str = ""
    message: str = ""


def _invalid(detail: str) -> Exception:
    return ErrorType.INVALID_PARAMS.newm(detail)


def _decode(value: Any, kind: Any, name: str) -> Any:
    if kind is str:
        if not isinstance(value, str):
            raise _invalid(f"field '{name}' must be a string")
        return value
    if kind is int:
        if isinstance(value, bool):
            raise _invalid(f"field '{name}' must be an integer")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                raise _invalid(f"field '{name}' must be an integer") from None
        raise _invalid(f"field '{name}' must be an integer")
    return value


def parse_body(model: Type[T], data: Union[Mapping[str, Any], str, bytes]) -> T:
    """Build ``model`` from a JSON object or mapping and check its required fields.

    Unknown keys are ignored and nulls leave the default. Any problem raises a
    CustomError of type ``ErrorType.INVALID_PARAMS``.
    """
    if not (isinstance(model, type) and is_dataclass(model)):
        raise TypeError(f"{model!r} is not a dataclass type")
    if isinstance(data, (bytes, bytearray)):
        try:
            data = data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise _invalid(f"request body is not UTF-8: {exc}") from exc
    if isinstance(data, str):
        try:
            data = json.loads(data)
        except json.JSONDecodeError as exc:
            raise _invalid(f"request body is not valid JSON: {exc}") from exc
    if not isinstance(data, Mapping):
        raise _invalid("request body must be an object")

    values = {
        item.name: _decode(data[item.name], item.type, item.name)
        for item in fields(model)
        if data.get(item.name) is not None
    }
    instance = model(**values)
    missing = [
        item.name
        for item in fields(model)
        if item.metadata.get("required") and not getattr(instance, item.name)
    ]
    if missing:
        raise _invalid("missing required field(s): " + ", ".join(missing))
    return instance