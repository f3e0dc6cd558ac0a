"""Application configuration with environment-specific profiles.

Supports dev, staging, production and test environments via APP_ENV.
All values can be overridden by environment variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    """Immutable application settings resolved from environment."""

    database_url: str
    app_env: str = "dev"
    log_level: str = "INFO"

    # Tokens are issued by the hosted auth provider; we only verify them.
    auth_jwt_secret: str = "jwt-change-me"
    auth_jwt_algorithm: str = "HS256"
    auth_jwt_audience: str = "authenticated"

    # Chat passthrough
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    openai_base_url: str = "https://api.openai.com/v1"
    chat_timeout_seconds: float = 30.0

    # HTTP surface
    cors_origins: tuple[str, ...] = ("http://localhost:3000",)
    request_id_header_name: str = "X-Request-ID"
    rate_limit_enabled: bool = True
    rate_limit_storage_uri: str = "memory://"
    chat_rate_limit: str = "20/minute"

    # Programme tuning
    session_fatigue_increment: int = 5
    readiness_primed_threshold: int = 65

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @property
    def is_dev(self) -> bool:
        return self.app_env == "dev"


# -- Environment profiles --

_ENV_PROFILES: dict[str, dict] = {
    "dev": {
        "log_level": "DEBUG",
        "chat_rate_limit": "60/minute",
    },
    "staging": {
        "log_level": "INFO",
        "chat_rate_limit": "30/minute",
    },
    "production": {
        "log_level": "WARNING",
        "chat_rate_limit": "20/minute",
    },
    "test": {
        "log_level": "WARNING",
        "rate_limit_enabled": False,
    },
}


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.getenv(name)
    if not raw:
        return default
    return tuple(item.strip() for item in raw.split(",") if item.strip())


def get_database_url() -> str:
    """Resolve database URL from env var or local default.

    The hosted Postgres instance behind the auth provider is reached the same
    way as a local one, so only the URL differs between environments.
    """
    env_url = os.getenv("DATABASE_URL")
    if env_url:
        return env_url
    return "postgresql+psycopg2://localhost:5432/pathfinder"


def get_settings() -> Settings:
    """Build Settings by merging environment profile with env-var overrides."""
    app_env = os.getenv("APP_ENV", "dev")
    profile = _ENV_PROFILES.get(app_env, _ENV_PROFILES["dev"])

    return Settings(
        database_url=get_database_url(),
        app_env=app_env,
        log_level=os.getenv("LOG_LEVEL", profile.get("log_level", "INFO")),
        auth_jwt_secret=os.getenv("AUTH_JWT_SECRET", "jwt-change-me"),
        auth_jwt_algorithm=os.getenv("AUTH_JWT_ALGORITHM", "HS256"),
        auth_jwt_audience=os.getenv("AUTH_JWT_AUDIENCE", "authenticated"),
        openai_api_key=os.getenv("OPENAI_API_KEY", ""),
        openai_model=os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
        openai_base_url=os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1").rstrip("/"),
        chat_timeout_seconds=float(os.getenv("CHAT_TIMEOUT_SECONDS", "30")),
        cors_origins=_env_list("CORS_ORIGINS", ("http://localhost:3000",)),
        request_id_header_name=os.getenv("REQUEST_ID_HEADER", "X-Request-ID"),
        rate_limit_enabled=_env_bool("RATE_LIMIT_ENABLED", bool(profile.get("rate_limit_enabled", True))),
        rate_limit_storage_uri=os.getenv("RATE_LIMIT_STORAGE_URI", "memory://"),
        chat_rate_limit=os.getenv("CHAT_RATE_LIMIT", profile.get("chat_rate_limit", "20/minute")),
        session_fatigue_increment=int(os.getenv("SESSION_FATIGUE_INCREMENT", "5")),
        readiness_primed_threshold=int(os.getenv("READINESS_PRIMED_THRESHOLD", "65")),
    )
