"""Reading the bearer token and the authenticated user from a request."""

from __future__ import annotations

from typing import Any, Mapping, MutableMapping

PREFIX = "gin-go"
USER_ID_KEY = PREFIX + "/user-id"
REQ_BODY_KEY = PREFIX + "/req-body"
RES_BODY_KEY = PREFIX + "/res-body"
LOGGER_REQ_BODY_KEY = PREFIX + "/logger-req-body"

_BEARER = "Bearer "


def get_token(headers: Mapping[str, str]) -> str:
    """The bearer token of the Authorization header, or an empty string."""
    auth = next(
        (value for key, value in headers.items() if key.lower() == "authorization"), ""
    )
    if auth and auth.startswith(_BEARER):
        return auth[len(_BEARER):]
    return ""


def get_user_id(context: Mapping[str, Any]) -> str:
    """The user id stored in a request context, or an empty string."""
    user_id = context.get(USER_ID_KEY)
    return "" if user_id is None else user_id


def set_user_id(context: MutableMapping[str, Any], user_id: str) -> None:
    """Store the authenticated user's id in a request context."""
    context[USER_ID_KEY] = user_id