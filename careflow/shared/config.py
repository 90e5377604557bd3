from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


load_dotenv()


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(name, default)


def _bool(name: str, default: bool) -> bool:
    value = _env(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    app_env: str
    log_level: str
    postgres_dsn: str
    db_create_schema: bool
    session_secret: str
    session_ttl_seconds: int
    session_cookie_name: str
    session_cookie_secure: bool
    google_client_id: str
    google_client_secret: str
    google_callback_url: str
    google_authorize_url: str
    google_token_url: str
    google_userinfo_url: str
    oauth_timeout_seconds: float
    chat_backend_url: str
    chat_timeout_seconds: float

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"


def get_settings() -> Settings:
    app_env = (_env("APP_ENV", "development") or "development").strip().lower()
    return Settings(
        app_env=app_env,
        log_level=(_env("LOG_LEVEL", "INFO") or "INFO").upper(),
        postgres_dsn=_env("POSTGRES_DSN", ""),
        db_create_schema=_bool("DB_CREATE_SCHEMA", True),
        session_secret=_env("SESSION_SECRET", ""),
        session_ttl_seconds=int(_env("SESSION_TTL_SECONDS", "86400")),
        session_cookie_name=_env("SESSION_COOKIE_NAME", "careflow_session"),
        session_cookie_secure=_bool("SESSION_COOKIE_SECURE", app_env == "production"),
        google_client_id=_env("GOOGLE_CLIENT_ID", ""),
        google_client_secret=_env("GOOGLE_CLIENT_SECRET", ""),
        google_callback_url=_env("GOOGLE_CALLBACK_URL", "http://localhost:3000/auth/google/callback"),
        google_authorize_url=_env("GOOGLE_AUTHORIZE_URL", "https://accounts.google.com/o/oauth2/v2/auth"),
        google_token_url=_env("GOOGLE_TOKEN_URL", "https://oauth2.googleapis.com/token"),
        google_userinfo_url=_env("GOOGLE_USERINFO_URL", "https://www.googleapis.com/oauth2/v3/userinfo"),
        oauth_timeout_seconds=float(_env("OAUTH_TIMEOUT_SECONDS", "10")),
        chat_backend_url=_env("CHAT_BACKEND_URL", ""),
        chat_timeout_seconds=float(_env("CHAT_TIMEOUT_SECONDS", "15")),
    )
