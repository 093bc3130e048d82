"""Typed application errors carrying a status code, a message and field context."""

from __future__ import annotations

import traceback
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Optional


@dataclass(frozen=True)
class ErrorContext:
    """The field an error refers to and a message about it."""

    field: str = ""
    message: str = ""

    def __bool__(self) -> bool:
        return bool(self.field or self.message)


class ErrorType(IntEnum):
    """Application status codes; each member builds errors of its own type."""

    SUCCESS = 200
    ERROR = 500
    INVALID_PARAMS = 400
    BAD_REQUEST = 421
    NO_PERMISSION = 403
    NOT_FOUND = 404
    METHOD_NOT_ALLOW = 405
    INVALID_PARENT = 409
    ALLOW_DELETE_WITH_CHILD = 410
    NOT_ALLOW_DELETE = 411
    USER_DISABLED = 412
    EXIST_MENU_NAME = 413
    EXIST_ROLE = 414
    EXIST_ROLE_USER = 415
    NOT_EXIST_USER = 416
    LOGIN_FAILED = 422
    INVALID_OLD_PASS = 423
    PASSWORD_REQUIRED = 424
    TOO_MANY_REQUEST = 429
    INTERNAL_SERVER = 512
    AUTH_CHECK_TOKEN_FAIL = 401
    AUTH_CHECK_TOKEN_TIMEOUT = 402
    AUTH_TOKEN = 408
    AUTH = 407
    EXIST_EMAIL = 430
    NOT_EXIST_ROLE = 431
    TOKEN_EXPIRED = 461
    TOKEN_INVALID = 462
    TOKEN_MALFORMED = 463

    def new(self) -> CustomError:
        """An error of this type carrying the standard message."""
        return CustomError(self, get_msg(self))

    def newm(self, msg: str) -> CustomError:
        """An error of this type with a custom message."""
        return CustomError(self, msg)

    def newf(self, msg: str, *args: object) -> CustomError:
        """An error of this type with a %-formatted message."""
        return CustomError(self, _format(msg, args))

    def wrap(self, err: Optional[BaseException], msg: str) -> Optional[CustomError]:
        """Wrap ``err`` with a message, giving it this type; None stays None."""
        return self.wrapf(err, msg)

    def wrapf(
        self, err: Optional[BaseException], msg: str, *args: object
    ) -> Optional[CustomError]:
        """Wrap ``err`` with a formatted message, giving it this type."""
        if err is None:
            return None
        return CustomError(self, _wrapped_message(err, msg, args), cause=err)


MESSAGES: Dict[ErrorType, str] = {
    ErrorType.SUCCESS: "OK",
    ErrorType.INVALID_PARAMS: "Request parameter error - %s",
    ErrorType.AUTH_CHECK_TOKEN_FAIL: "Token authentication failed",
    ErrorType.AUTH_CHECK_TOKEN_TIMEOUT: "Token time out",
    ErrorType.AUTH_TOKEN: "Token build failed",
    ErrorType.AUTH: "Token error",
    ErrorType.ERROR: "Error occurred",
    ErrorType.INTERNAL_SERVER: "Server error",
    ErrorType.EXIST_EMAIL: "The Email Address entered already exists in the system",
    ErrorType.BAD_REQUEST: "Request error",
    ErrorType.INVALID_PARENT: "Invalid parent node",
    ErrorType.ALLOW_DELETE_WITH_CHILD: "Contains children, cannot be deleted",
    ErrorType.NOT_ALLOW_DELETE: "Resources are not allowed to be deleted",
    ErrorType.INVALID_OLD_PASS: "Old password is incorrect",
    ErrorType.NOT_FOUND: "Resource does not exist",
    ErrorType.PASSWORD_REQUIRED: "Password is required",
    ErrorType.EXIST_MENU_NAME: "Menu name already exists",
    ErrorType.USER_DISABLED: "User is disabled, please contact administrator",
    ErrorType.NO_PERMISSION: "No access",
    ErrorType.METHOD_NOT_ALLOW: "Method is not allowed",
    ErrorType.TOO_MANY_REQUEST: "Requests are too frequent",
    ErrorType.LOGIN_FAILED: "Email or password is invalid",
    ErrorType.EXIST_ROLE: "Role name already exists",
    ErrorType.NOT_EXIST_USER: "Account is invalid",
    ErrorType.EXIST_ROLE_USER: (
        "The role has been given to the user and is not allowed to be deleted"
    ),
    ErrorType.NOT_EXIST_ROLE: "Role user is disabled, please contact administrator",
    ErrorType.TOKEN_EXPIRED: "Token is expired",
    ErrorType.TOKEN_INVALID: "Token is invalid",
    ErrorType.TOKEN_MALFORMED: "That's not even a token",
}


class CustomError(Exception):
    """An exception with an application error type and optional field context."""

    def __init__(
        self,
        error_type: ErrorType = ErrorType.ERROR,
        message: str = "",
        context: Optional[ErrorContext] = None,
        *,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.error_type = ErrorType(error_type)
        self.message = message
        self.context = context if context is not None else ErrorContext()
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"CustomError({self.error_type.name}, {self.message!r})"

    def stacktrace(self) -> str:
        """The error with its chain of causes and tracebacks, as text."""
        return "".join(traceback.format_exception(type(self), self, self.__traceback__))


def _format(msg: str, args: tuple) -> str:
    return msg % args if args else msg


def _wrapped_message(err: BaseException, msg: str, args: tuple) -> str:
    return f"{_format(msg, args)}: {err}"


def get_msg(status: int) -> str:
    """The standard message for a status code, or the generic error message."""
    try:
        return MESSAGES[ErrorType(status)]
    except (ValueError, KeyError):
        return MESSAGES[ErrorType.ERROR]


def new(msg: str) -> CustomError:
    """An untyped error with the given message."""
    return CustomError(ErrorType.ERROR, msg)


def newf(msg: str, *args: object) -> CustomError:
    """An untyped error with a %-formatted message."""
    return CustomError(ErrorType.ERROR, _format(msg, args))


def wrap(err: Optional[BaseException], msg: str) -> Optional[CustomError]:
    """Wrap ``err`` with a message, keeping its type and context."""
    return wrapf(err, msg)


def wrapf(err: Optional[BaseException], msg: str, *args: object) -> Optional[CustomError]:
    """Wrap ``err`` with a formatted message, keeping its type and context."""
    if err is None:
        return None
    message = _wrapped_message(err, msg, args)
    if isinstance(err, CustomError):
        return CustomError(err.error_type, message, err.context, cause=err)
    return CustomError(ErrorType.ERROR, message, cause=err)


def cause(err: BaseException) -> BaseException:
    """The innermost error of a chain of wrapped errors."""
    while err.__cause__ is not None:
        err = err.__cause__
    return err


def stack(err: BaseException) -> str:
    """A printable trace of ``err``, with the current stack if it was never raised."""
    if isinstance(err, CustomError):
        return err.stacktrace()
    text = "".join(traceback.format_exception(type(err), err, err.__traceback__))
    if err.__traceback__ is None:
        text = "".join(traceback.format_stack()[:-1]) + text
    return text


def add_error_context(err: BaseException, field: str, message: str) -> CustomError:
    """A copy of ``err`` carrying the given field context."""
    context = ErrorContext(field=field, message=message)
    if isinstance(err, CustomError):
        return CustomError(err.error_type, err.message, context, cause=err.__cause__)
    return CustomError(ErrorType.ERROR, str(err), context, cause=err)


def get_error_context(err: BaseException) -> Optional[Dict[str, str]]:
    """The field context of a CustomError as a dict, or None for other errors."""
    if isinstance(err, CustomError):
        return {"field": err.context.field, "message": err.context.message}
    return None


def get_type(err: BaseException) -> ErrorType:
    """The error type of ``err``; errors without one are ``ErrorType.ERROR``."""
    if isinstance(err, CustomError):
        return err.error_type
    return ErrorType.ERROR


ERR_METHOD_NOT_ALLOW = ErrorType.METHOD_NOT_ALLOW.new()
ERR_NO_PERMISSION = ErrorType.NO_PERMISSION.new()
ERR_NOT_FOUND = ErrorType.NOT_FOUND.new()
ERR_TOKEN_EXPIRED = ErrorType.TOKEN_EXPIRED.new()
ERR_TOKEN_INVALID = ErrorType.TOKEN_INVALID.new()
ERR_TOKEN_MALFORMED = ErrorType.TOKEN_MALFORMED.new()