# adminkit

Building blocks for a small user and role administration API.

| Module | What it provides |
| --- | --- |
| `adminkit.errors` | `ErrorType` status codes, `CustomError`, wrapping (`wrap`, `wrapf`), field context (`add_error_context`, `get_error_context`), `get_type`, `get_msg`, `cause`, `stack` |
| `adminkit.config` | `Settings` and its sections, `load_config`, `config_from_mapping`, `ConfigError` |
| `adminkit.schema` | request and response dataclasses and `parse_body` |
| `adminkit.auth` | `JWTAuth` access/refresh tokens, `TokenInfo`, `init_auth` |
| `adminkit.request` | `get_token`, `get_user_id`, `set_user_id` |
| `adminkit.middleware` | `RequestInfo` and path-prefix skippers |
| `adminkit.utils` | `validate`, `generate_code`, `random_string`, `prepare_response`, `hash_password`, `json_marshal_to_string`, `copy` |
| `adminkit.tokens` | payload tokens: `generate_token`, `validate_token`, `authorize`, `check_admin` |
| `adminkit.models` | SQLAlchemy `Base` (UUID id, timestamps) and `Role` |
| `adminkit.database` | `Database`, `connection_url`, `new_database` (PostgreSQL) |
| `adminkit.roles` | `RoleRepository`, `RoleService`, `RoleAPI` |
| `adminkit.cache` | `RedisCache`, `new_redis`, `ResponseCache` |

## Installing

```
pip install adminkit
```

## Configuration

`load_config()` looks for `config.json`, `config.yaml` or `config.yml` in `.`,
`config/`, `../config/`, `../`, `../../config/` and `../../`, in that order,
and raises `ConfigError` if none is found. A different list of directories can
be passed as `search_paths`.

Every key can be overridden by an environment variable named after its path,
upper-cased, with `.` replaced by `__`: `ENV`, `DEFAULT_LIMIT`,
`DATABASE__HOST`, `DATABASE__SSLMODE`, `JWT_AUTH__EXPIRED`, and so on.

```python
from adminkit.config import config_from_mapping

settings = config_from_mapping(
    {"env": "development", "jwt_auth": {"signing_key": "secret", "expired": 3600}},
    environ={"JWT_AUTH__EXPIRED": "60"},
)
assert settings.jwt_auth.expired == 60
```

## Access and refresh tokens

```python
from adminkit.auth import init_auth

auth = init_auth(settings)

info = auth.generate_token("user-1")
print(info.to_json())   # {"access_token":...,"refresh_token":...,"token_type":"Bearer"}

user_id = auth.parse_user_id(info.access_token, False)
renewed = auth.refresh_token(info.refresh_token)
```

Access tokens last `jwt_auth.expired` seconds (7200 when unset) and refresh
tokens `jwt_auth.expired_refresh_token` hours (24 when unset). Only
HMAC-signed tokens are accepted. A token that cannot be read raises a
`CustomError` of type `ErrorType.TOKEN_MALFORMED`, `TOKEN_EXPIRED` or
`TOKEN_INVALID`. Refreshing with an expired refresh token issues a whole new
pair.

`adminkit.request.get_token({"Authorization": "Bearer token"})` returns
`"token"`; `set_user_id` and `get_user_id` store and read the authenticated
user's id in a request context mapping.

## Errors

```python
from adminkit.errors import ErrorType, get_type, wrap

err = ErrorType.NOT_FOUND.new()
wrapped = wrap(err, "loading user")
assert get_type(wrapped) is ErrorType.NOT_FOUND
assert str(wrapped) == "loading user: Resource does not exist"
```

Errors that are not `CustomError` report `ErrorType.ERROR`.

## Request bodies

```python
from adminkit.schema import LoginBodyParam, parse_body

body = parse_body(LoginBodyParam, b'{"username": "alice", "password": "password"}')
```

Missing required fields, wrong types or invalid JSON raise a `CustomError` of
type `ErrorType.INVALID_PARAMS`.

## Middleware helpers

```python
from adminkit.middleware import RequestInfo, allow_path_prefix_skipper, skip_handler

skip_public = allow_path_prefix_skipper("/login", "/register")
assert skip_handler(RequestInfo("POST", "/login"), skip_public)
```

`adminkit.tokens.authorize(header)` checks an Authorization value carrying a
payload token and returns its payload, or raises `Unauthorized` whose `code`
and `body` describe the refusal (status 401).

## Roles, database and cache

`new_database(settings)` connects to PostgreSQL using the `database` section;
`Database.session()` is a context manager that commits on success and rolls
back on error. `RoleAPI(RoleService(RoleRepository(db))).create_role(body)`
returns an HTTP status and a response body.

`new_redis(settings)` returns a `RedisCache` or `None` if the server does not
answer. `ResponseCache.lookup(method, uri)` returns a cached GET response body;
`ResponseCache.store(method, uri, status, body)` caches successful GETs and,
after a successful POST, PUT or DELETE, drops cached keys containing the last
path segment.

## What is not included

The package has no HTTP server, routing or command-line program. It provides
no user storage and no login, registration, logout or user-listing services;
only roles are stored. It does not create database tables or seed data.

## Tests

```
pip install "adminkit[test]"
pytest
```