from __future__ import annotations

import pytest

from pantry.core.config import AppConfig, database_name_from_uri, normalize_environment

ENV_KEYS = (
    "APP_ENV",
    "MONGODB_URI",
    "MONGODB_DB",
    "SESSION_SECRET",
    "SESSION_COOKIE_NAME",
    "SESSION_TTL_SECONDS",
    "SESSION_COOKIE_SECURE",
    "AUTH_ADMIN_USERNAME",
    "AUTH_ADMIN_PASSWORD",
    "CORS_ALLOWED_ORIGINS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


@pytest.mark.parametrize(
    ("app_env", "expected_env", "expected_db"),
    [
        ("development", "development", "pantry-dev"),
        ("dev", "development", "pantry-dev"),
        ("PROD", "production", "pantry"),
        ("test", "test", "pantry-test"),
        ("staging", "development", "pantry-dev"),
    ],
)
def test_from_env_picks_per_environment_defaults(
    monkeypatch: pytest.MonkeyPatch, app_env: str, expected_env: str, expected_db: str
) -> None:
    monkeypatch.setenv("APP_ENV", app_env)

    config = AppConfig.from_env()

    assert config.environment == expected_env
    assert config.database.mongodb_db == expected_db
    assert config.database.mongodb_uri.endswith(f"/{expected_db}")


def test_from_env_session_defaults() -> None:
    config = AppConfig.from_env()

    assert config.session.cookie_name == "pantry.sid"
    assert config.session.ttl_seconds == 14 * 24 * 3600
    assert config.session.cookie_secure is False
    assert config.auth.admin_password == ""


def test_production_defaults_to_secure_cookie(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_ENV", "production")

    assert AppConfig.from_env().session.cookie_secure is True

    monkeypatch.setenv("SESSION_COOKIE_SECURE", "0")

    assert AppConfig.from_env().session.cookie_secure is False


def test_explicitly_empty_uri_selects_file_store(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MONGODB_URI", "")

    config = AppConfig.from_env()

    assert config.database.mongodb_uri == ""
    assert config.database.mongodb_db == "pantry"


def test_overrides_are_read(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MONGODB_URI", "mongodb://db.internal:27017/recipes?tls=true")
    monkeypatch.setenv("AUTH_ADMIN_USERNAME", "Chef")
    monkeypatch.setenv("CORS_ALLOWED_ORIGINS", "https://a.example, ,https://b.example")

    config = AppConfig.from_env()

    assert config.database.mongodb_db == "recipes"
    assert config.auth.admin_username == "chef"
    assert config.security.cors_allowed_origins == [
        "https://a.example",
        "https://b.example",
    ]


def test_database_name_from_uri() -> None:
    assert database_name_from_uri("mongodb://localhost:27017/pantry") == "pantry"
    assert database_name_from_uri("mongodb://localhost:27017") == ""
    assert database_name_from_uri("") == ""


def test_normalize_environment_falls_back_to_development() -> None:
    assert normalize_environment("") == "development"
    assert normalize_environment(" Test ") == "test"
