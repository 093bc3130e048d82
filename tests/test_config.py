import json

import pytest

from adminkit.config import (
    ConfigError,
    DatabaseConfig,
    Settings,
    config_from_mapping,
    load_config,
)


def _sample(password):
    return {
        "env": "production",
        "default_limit": 20,
        "max_limit": 100,
        "database": {
            "host": "db.example.com",
            "port": 5432,
            "name": "admin",
            "user": "user",
            "password": password,
            "sslmode": "disable",
        },
        "redis": {"host": "cache.example.com", "port": 6379, "database": 1},
        "cache": {"enable": True, "expiry_time": 600},
        "jwt_auth": {"signing_key": "secret", "expired": 7200},
    }


def test_values_come_through():
    password = "password"
    settings = config_from_mapping(_sample(password), {})
    assert settings.env == "production"
    assert settings.max_limit == 100
    assert settings.database.host == "db.example.com"
    assert settings.database.password == password
    assert settings.database.ssl_mode == "disable"
    assert settings.redis.database == 1
    assert settings.cache.enable is True
    assert settings.jwt_auth.signing_key == "secret"


def test_missing_values_are_zero():
    settings = config_from_mapping({}, {})
    assert settings == Settings()
    assert settings.database == DatabaseConfig()
    assert settings.default_limit == 0
    assert settings.cache.enable is False


def test_environment_overrides_file():
    password = "password"
    environ = {"DATABASE__HOST": "other.example.com", "MAX_LIMIT": "50"}
    settings = config_from_mapping(_sample(password), environ)
    assert settings.database.host == "other.example.com"
    assert settings.max_limit == 50
    assert settings.database.port == 5432


def test_environment_strings_are_coerced():
    environ = {"CACHE__ENABLE": "true", "REDIS__PORT": "6380", "DATABASE__SSLMODE": "require"}
    settings = config_from_mapping({}, environ)
    assert settings.cache.enable is True
    assert settings.redis.port == 6380
    assert settings.database.ssl_mode == "require"


def test_weak_typing_in_file_values():
    settings = config_from_mapping({"max_limit": "30", "env": 7, "cache": {"enable": 0}}, {})
    assert settings.max_limit == 30
    assert settings.env == "7"
    assert settings.cache.enable is False


def test_keys_are_case_insensitive():
    settings = config_from_mapping({"ENV": "dev", "Database": {"Host": "h.example.com"}}, {})
    assert settings.env == "dev"
    assert settings.database.host == "h.example.com"


def test_bad_integer_raises():
    with pytest.raises(ConfigError):
        config_from_mapping({"max_limit": "many"}, {})


def test_bad_boolean_from_environment_raises():
    with pytest.raises(ConfigError):
        config_from_mapping({}, {"CACHE__ENABLE": "maybe"})


def test_section_must_be_mapping():
    with pytest.raises(ConfigError):
        config_from_mapping({"database": "db.example.com"}, {})


def test_load_yaml_file(tmp_path):
    (tmp_path / "config.yaml").write_text(
        "env: staging\ndatabase:\n  host: db.example.com\n  port: 5432\n", encoding="utf-8"
    )
    settings = load_config([tmp_path], {})
    assert settings.env == "staging"
    assert settings.database.port == 5432


def test_load_json_file_preferred_in_same_directory(tmp_path):
    (tmp_path / "config.json").write_text(json.dumps({"env": "from-json"}), encoding="utf-8")
    (tmp_path / "config.yaml").write_text("env: from-yaml\n", encoding="utf-8")
    assert load_config([tmp_path], {}).env == "from-json"


def test_earlier_search_path_wins(tmp_path):
    first = tmp_path / "first"
    second = tmp_path / "second"
    first.mkdir()
    second.mkdir()
    (first / "config.yml").write_text("env: first\n", encoding="utf-8")
    (second / "config.yml").write_text("env: second\n", encoding="utf-8")
    assert load_config([first, second], {}).env == "first"


def test_missing_file_raises(tmp_path):
    with pytest.raises(ConfigError):
        load_config([tmp_path], {})


def test_malformed_file_raises(tmp_path):
    (tmp_path / "config.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config([tmp_path], {})