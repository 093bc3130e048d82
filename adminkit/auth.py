"""Access and refresh tokens signed with HMAC JSON Web Tokens."""

from __future__ import annotations

import json
import time
from dataclasses import asdict, dataclass
from typing import Any, Dict, Union

import jwt

from adminkit import errors
from adminkit.config import Settings
from adminkit.errors import CustomError, ErrorType

Key = Union[str, bytes]

DEFAULT_KEY = "secret"
DEFAULT_REFRESH_KEY = "placeholder"
DEFAULT_TOKEN_TYPE = "Bearer"
DEFAULT_ALGORITHM = "HS512"
DEFAULT_EXPIRED = 7200
DEFAULT_EXPIRED_REFRESH = 24

_HMAC_ALGORITHMS = ["HS256", "HS384", "HS512"]


@dataclass(frozen=True)
class TokenInfo:
    """A pair of tokens handed to a client after authentication."""

    access_token: str
    refresh_token: str
    token_type: str

    def to_json(self) -> str:
        """The token pair as a compact JSON object."""
        return json.dumps(asdict(self), separators=(",", ":"))


@dataclass(frozen=True, kw_only=True)
class JWTAuth:
    """Issues and checks tokens.

    Access tokens live ``expired`` seconds, refresh tokens ``expired_refresh``
    hours. Tokens are verified with the verification keys, which only accept
    HMAC-signed tokens.
    """

    signing_key: Key = DEFAULT_KEY
    verification_key: Key = DEFAULT_KEY
    expired: int = DEFAULT_EXPIRED
    token_type: str = DEFAULT_TOKEN_TYPE
    algorithm: str = DEFAULT_ALGORITHM
    refresh_signing_key: Key = DEFAULT_KEY
    refresh_verification_key: Key = DEFAULT_REFRESH_KEY
    expired_refresh: int = DEFAULT_EXPIRED_REFRESH

    def _sign(self, user_id: str, lifetime: int, key: Key) -> str:
        now = int(time.time())
        claims = {"iat": now, "exp": now + lifetime, "nbf": now, "sub": user_id}
        try:
            return jwt.encode(claims, key, algorithm=self.algorithm)
        except (jwt.PyJWTError, TypeError, ValueError, NotImplementedError) as exc:
            raise errors.new("generate token fail") from exc

    def _generate_access(self, user_id: str) -> str:
        return self._sign(user_id, self.expired, self.signing_key)

    def _generate_refresh(self, user_id: str) -> str:
        return self._sign(user_id, self.expired_refresh * 3600, self.refresh_signing_key)

    def _parse_claims(self, token: str, refresh: bool) -> Dict[str, Any]:
        key = self.refresh_verification_key if refresh else self.verification_key
        try:
            return jwt.decode(token, key, algorithms=_HMAC_ALGORITHMS)
        except jwt.ExpiredSignatureError as exc:
            raise ErrorType.TOKEN_EXPIRED.new() from exc
        except jwt.InvalidSignatureError as exc:
            raise ErrorType.TOKEN_INVALID.new() from exc
        except jwt.DecodeError as exc:
            raise ErrorType.TOKEN_MALFORMED.new() from exc
        except jwt.InvalidTokenError as exc:
            raise ErrorType.TOKEN_INVALID.new() from exc

    def generate_token(self, user_id: str) -> TokenInfo:
        """A fresh access and refresh token for ``user_id``."""
        access = self._generate_access(user_id)
        refresh = self._generate_refresh(user_id)
        return TokenInfo(access_token=access, refresh_token=refresh, token_type=self.token_type)

    def parse_user_id(self, token: str, refresh: bool = False) -> str:
        """The user id a token was issued for; raises CustomError if it is not valid."""
        return self._parse_claims(token, refresh).get("sub", "")

    def refresh_token(self, refresh_token: str) -> TokenInfo:
        """A new access token for a refresh token.

        An expired refresh token yields a whole new pair, issued without a
        subject because the expired token's claims are not read.
        """
        try:
            user_id = self.parse_user_id(refresh_token, True)
        except CustomError as err:
            if err.error_type is ErrorType.TOKEN_EXPIRED:
                return self.generate_token("")
            raise
        access = self._generate_access(user_id)
        return TokenInfo(
            access_token=access, refresh_token=refresh_token, token_type=self.token_type
        )


def init_auth(settings: Settings) -> JWTAuth:
    """A JWTAuth configured from the ``jwt_auth`` section of the settings."""
    conf = settings.jwt_auth
    options: Dict[str, Any] = {
        "signing_key": conf.signing_key.encode(),
        "verification_key": conf.signing_key.encode(),
        "refresh_signing_key": conf.signing_refresh_key.encode(),
        "refresh_verification_key": conf.signing_refresh_key.encode(),
    }
    if conf.expired != 0:
        options["expired"] = conf.expired
    if conf.expired_refresh_token != 0:
        options["expired_refresh"] = conf.expired_refresh_token
    return JWTAuth(**options)