"""Skipper predicates that decide whether a middleware applies to a request."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable


@dataclass(frozen=True)
class RequestInfo:
    """The parts of a request the skippers look at."""

    method: str
    path: str


Skipper = Callable[[RequestInfo], bool]


def allow_path_prefix_skipper(*args: str) -> Skipper:
    """Skip requests whose path starts with any of the given prefixes."""

    def skipper(request: RequestInfo) -> bool:
        return any(request.path.startswith(prefix) for prefix in args)

    return skipper


def allow_path_prefix_no_skipper(*args: str) -> Skipper:
    """Skip requests whose path starts with none of the given prefixes."""

    def skipper(request: RequestInfo) -> bool:
        return not any(request.path.startswith(prefix) for prefix in args)

    return skipper


def allow_method_and_path_prefix_skipper(*args: str) -> Skipper:
    """Skip requests whose ``METHOD/path`` starts with any of the given prefixes."""

    def skipper(request: RequestInfo) -> bool:
        route = join_router(request.method, request.path)
        return any(route.startswith(prefix) for prefix in args)

    return skipper


def join_router(method: str, path: str) -> str:
    """The upper-cased method followed by the path, with a leading slash added."""
    if path and not path.startswith("/"):
        path = "/" + path
    return method.upper() + path


def skip_handler(request: RequestInfo, *args: Skipper) -> bool:
    """Whether any of the skippers skips this request."""
    return any(skipper(request) for skipper in args)