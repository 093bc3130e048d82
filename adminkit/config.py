"""Application settings read from a config file with environment overrides."""

import json
import os
from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional, Union

import yaml

CONFIG_NAME = "config"
DEFAULT_SEARCH_PATHS = (".", "config/", "../config/", "../", "../../config/", "../../")
_EXTENSIONS = ("json", "yaml", "yml")
_TRUE = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE = {"0", "f", "F", "FALSE", "false", "False"}


class ConfigError(Exception):
    """The configuration could not be found or decoded."""


@dataclass
class DatabaseConfig:
    host: str = ""
    port: int = 0
    name: str = ""
    user: str = ""
    password: str = ""
    env: str = ""
    ssl_mode: str = field(default="", metadata={"key": "sslmode"})


@dataclass
class RedisConfig:
    host: str = ""
    port: int = 0
    password: str = ""
    database: int = 0


@dataclass
class CacheConfig:
    enable: bool = False
    expiry_time: int = 0


@dataclass
class JWTAuthConfig:
    signing_key: str = ""
    expired: int = 0
    signing_refresh_key: str = ""
    expired_refresh_token: int = 0


@dataclass
class Settings:
    env: str = ""
    default_limit: int = 0
    max_limit: int = 0
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    redis: RedisConfig = field(default_factory=RedisConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    jwt_auth: JWTAuthConfig = field(default_factory=JWTAuthConfig)


def _lower_keys(data: Mapping) -> Dict[str, Any]:
    return {str(key).lower(): value for key, value in data.items()}


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        if value == "":
            return False
        if value in _TRUE:
            return True
        if value in _FALSE:
            return False
        raise ValueError(f"invalid boolean {value!r}")
    raise TypeError(f"expected a boolean, got {type(value).__name__}")


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if text == "":
            return 0
        try:
            return int(text, 0)
        except ValueError:
            return int(text)
    raise TypeError(f"expected an integer, got {type(value).__name__}")


def _to_str(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (int, float)):
        return str(value)
    raise TypeError(f"expected a string, got {type(value).__name__}")


_CONVERTERS = {bool: _to_bool, int: _to_int, str: _to_str}


def _coerce(value: Any, kind: Any, path: str) -> Any:
    converter = _CONVERTERS.get(kind)
    if converter is None:
        return value
    try:
        return converter(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"cannot decode '{path}': {exc}") from exc


def _build(cls: type, data: Mapping[str, Any], prefix: str, environ: Mapping[str, str]):
    values: Dict[str, Any] = {}
    for item in fields(cls):
        key = item.metadata.get("key", item.name)
        path = f"{prefix}{key}"
        kind = item.type
        if isinstance(kind, type) and is_dataclass(kind):
            section = data.get(key)
            if section is None:
                section = {}
            if not isinstance(section, Mapping):
                raise ConfigError(f"'{path}' must be a mapping")
            values[item.name] = _build(kind, _lower_keys(section), f"{path}.", environ)
            continue
        env_name = path.upper().replace(".", "__")
        if env_name in environ:
            raw = environ[env_name]
        elif data.get(key) is not None:
            raw = data[key]
        else:
            continue
        values[item.name] = _coerce(raw, kind, path)
    return cls(**values)


def config_from_mapping(
    data: Mapping[str, Any], environ: Optional[Mapping[str, str]] = None
) -> Settings:
    """Settings from parsed config data; environment variables take precedence.

    A key such as ``database.host`` is overridden by ``DATABASE__HOST``.
    """
    if not isinstance(data, Mapping):
        raise ConfigError("configuration must be a mapping")
    env = os.environ if environ is None else environ
    return _build(Settings, _lower_keys(data), "", env)


def _read(path: Path) -> Mapping[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
        if path.suffix == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        raise ConfigError(f"Fatal error config file: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ConfigError(f"Fatal error config file: {path} does not hold a mapping")
    return data


def load_config(
    search_paths: Optional[Iterable[Union[str, os.PathLike]]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """Find ``config.json``/``config.yaml``/``config.yml`` in the search paths and load it."""
    directories = list(DEFAULT_SEARCH_PATHS if search_paths is None else search_paths)
    for directory in directories:
        for extension in _EXTENSIONS:
            candidate = Path(directory) / f"{CONFIG_NAME}.{extension}"
            if candidate.is_file():
                return config_from_mapping(_read(candidate), environ)
    searched = ", ".join(str(d) for d in directories)
    raise ConfigError(
        f'Fatal error config file: Config File "{CONFIG_NAME}" Not Found in [{searched}]'
    )