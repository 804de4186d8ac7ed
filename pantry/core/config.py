"""Application configuration loaded from environment variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from urllib.parse import urlparse

LOGGER = logging.getLogger(__name__)

ENVIRONMENT_ALIASES = {
    "development": "development",
    "develop": "development",
    "dev": "development",
    "production": "production",
    "prod": "production",
    "test": "test",
}

DEFAULT_MONGODB_URIS = {
    "development": "mongodb://localhost:27017/pantry-dev",
    "production": "mongodb://localhost:27017/pantry",
    "test": "mongodb://localhost:27017/pantry-test",
}

DEFAULT_SESSION_SECRETS = {
    "development": "dev-insecure-session-secret-change-me",
    "production": "prod-insecure-session-secret-change-me",
    "test": "test-session-secret",
}


@dataclass(frozen=True)
class DatabaseConfig:
    """Document store connection settings."""

    mongodb_uri: str
    mongodb_db: str


@dataclass(frozen=True)
class SessionConfig:
    """Server-side session and cookie settings."""

    secret_key: str
    cookie_name: str
    ttl_seconds: int
    cookie_secure: bool


@dataclass(frozen=True)
class AuthConfig:
    """Bootstrap admin account settings."""

    admin_username: str
    admin_email: str
    admin_password: str


@dataclass(frozen=True)
class LoggingConfig:
    """Structured logging configuration."""

    level: str


@dataclass(frozen=True)
class SecurityConfig:
    """API perimeter security settings."""

    cors_allowed_origins: list[str]
    request_max_bytes: int


@dataclass(frozen=True)
class ServerConfig:
    """HTTP server and static client settings."""

    port: int
    client_dist_dir: str


@dataclass(frozen=True)
class AppConfig:
    """Top-level application configuration."""

    environment: str
    database: DatabaseConfig
    session: SessionConfig
    auth: AuthConfig
    logging: LoggingConfig
    security: SecurityConfig
    server: ServerConfig

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @staticmethod
    def from_env() -> "AppConfig":
        """Build app config from process environment."""
        environment = normalize_environment(os.getenv("APP_ENV", "development"))

        mongodb_uri = os.getenv("MONGODB_URI")
        if mongodb_uri is None:
            LOGGER.info(
                "No value set for MONGODB_URI, using %s default", environment
            )
            mongodb_uri = DEFAULT_MONGODB_URIS[environment]
        mongodb_uri = mongodb_uri.strip()
        mongodb_db = (
            os.getenv("MONGODB_DB", "").strip()
            or database_name_from_uri(mongodb_uri)
            or "pantry"
        )

        secret_key = (
            os.getenv("SESSION_SECRET", "").strip()
            or DEFAULT_SESSION_SECRETS[environment]
        )
        cookie_name = (
            os.getenv("SESSION_COOKIE_NAME", "pantry.sid").strip() or "pantry.sid"
        )
        session_ttl = int(os.getenv("SESSION_TTL_SECONDS", str(14 * 24 * 3600)))
        cookie_secure_raw = os.getenv("SESSION_COOKIE_SECURE")
        if cookie_secure_raw is None:
            cookie_secure = environment == "production"
        else:
            cookie_secure = _is_truthy(cookie_secure_raw)

        admin_username = os.getenv("AUTH_ADMIN_USERNAME", "admin").strip().lower()
        admin_email = os.getenv("AUTH_ADMIN_EMAIL", "admin@example.com").strip().lower()
        admin_password = os.getenv("AUTH_ADMIN_PASSWORD", "")

        log_level = os.getenv("LOG_LEVEL", "INFO").strip() or "INFO"
        cors_allowed_origins = [
            origin.strip()
            for origin in os.getenv(
                "CORS_ALLOWED_ORIGINS",
                "http://localhost:3000,http://127.0.0.1:3000",
            ).split(",")
            if origin.strip()
        ]
        request_max_bytes = int(os.getenv("REQUEST_MAX_BYTES", str(1024 * 1024)))
        port = int(os.getenv("PORT", "3000"))
        client_dist_dir = (
            os.getenv("CLIENT_DIST_DIR", "dist/client").strip() or "dist/client"
        )

        return AppConfig(
            environment=environment,
            database=DatabaseConfig(mongodb_uri=mongodb_uri, mongodb_db=mongodb_db),
            session=SessionConfig(
                secret_key=secret_key,
                cookie_name=cookie_name,
                ttl_seconds=session_ttl,
                cookie_secure=cookie_secure,
            ),
            auth=AuthConfig(
                admin_username=admin_username,
                admin_email=admin_email,
                admin_password=admin_password,
            ),
            logging=LoggingConfig(level=log_level),
            security=SecurityConfig(
                cors_allowed_origins=cors_allowed_origins,
                request_max_bytes=request_max_bytes,
            ),
            server=ServerConfig(port=port, client_dist_dir=client_dist_dir),
        )


def normalize_environment(value: str) -> str:
    """Map environment aliases to a canonical name, defaulting to development."""
    key = (value or "").strip().lower()
    if key in ENVIRONMENT_ALIASES:
        return ENVIRONMENT_ALIASES[key]
    LOGGER.warning(
        "APP_ENV should be one of development, production or test; "
        "got %r, defaulting to development",
        value,
    )
    return "development"


def database_name_from_uri(uri: str) -> str:
    """Return database name embedded in a mongodb:// URI path, if any."""
    if not uri:
        return ""
    path = urlparse(uri).path.lstrip("/")
    return path.split("/", 1)[0].strip()


def _is_truthy(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}
