from __future__ import annotations

from urllib.parse import parse_qs, urlencode, urlparse

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from careflow.api.deps import get_oauth_provider
from careflow.application.dto.auth import OAuthProfile, OAuthTokens
from careflow.core.context import AppContext, build_app_context
from careflow.domain.exceptions import AuthProviderError
from careflow.infrastructure.db.engine import create_db_engine
from careflow.main import create_app
from careflow.shared.config import Settings


COOKIE_NAME = "careflow_session"


def make_settings(**overrides) -> Settings:
    values = {
        "app_env": "test",
        "log_level": "INFO",
        "postgres_dsn": "",
        "db_create_schema": True,
        "session_secret": "test-session-secret-with-enough-length",
        "session_ttl_seconds": 86400,
        "session_cookie_name": COOKIE_NAME,
        "session_cookie_secure": False,
        "google_client_id": "client-id",
        "google_client_secret": "client-secret",
        "google_callback_url": "http://testserver/auth/google/callback",
        "google_authorize_url": "https://accounts.example.test/auth",
        "google_token_url": "https://oauth.example.test/token",
        "google_userinfo_url": "https://oauth.example.test/userinfo",
        "oauth_timeout_seconds": 5.0,
        "chat_backend_url": "",
        "chat_timeout_seconds": 5.0,
    }
    values.update(overrides)
    return Settings(**values)


def make_sqlite_engine():
    return create_db_engine(
        "sqlite+pysqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )


def state_from_location(location: str) -> str:
    return parse_qs(urlparse(location).query)["state"][0]


class FakeOAuthProvider:
    name = "google"

    def __init__(self, profiles: dict[str, OAuthProfile] | None = None):
        self.profiles = profiles or {}
        self.used_codes: set[str] = set()
        self.exchange_calls = 0

    def build_authorization_url(self, *, state: str) -> str:
        return f"https://accounts.example.test/auth?{urlencode({'state': state})}"

    def exchange_code(self, *, code: str) -> OAuthTokens:
        self.exchange_calls += 1
        if code in self.used_codes or code not in self.profiles:
            raise AuthProviderError("invalid_grant", stage="code_exchange", provider=self.name)
        self.used_codes.add(code)
        return OAuthTokens(access_token=f"access::{code}", token_type="Bearer", expires_in=3600)

    def fetch_profile(self, *, access_token: str) -> OAuthProfile:
        code = access_token.split("::", 1)[1]
        return self.profiles[code]


def make_profile(external_id: str = "ext-123", **overrides) -> OAuthProfile:
    values = {
        "external_id": external_id,
        "email": "Ada.Lovelace@Example.com",
        "given_name": "Ada",
        "family_name": "Lovelace",
        "avatar_url": "https://images.example.test/ada.png",
    }
    values.update(overrides)
    return OAuthProfile(**values)


@pytest.fixture
def context() -> AppContext:
    ctx = build_app_context(make_settings(), engine=make_sqlite_engine())
    yield ctx
    ctx.close()


@pytest.fixture
def oauth_provider() -> FakeOAuthProvider:
    return FakeOAuthProvider(profiles={"good-code": make_profile()})


@pytest.fixture
def app(context: AppContext, oauth_provider: FakeOAuthProvider):
    application = create_app(context)
    application.dependency_overrides[get_oauth_provider] = lambda: oauth_provider
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    with TestClient(app) as test_client:
        yield test_client
