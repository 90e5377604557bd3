from __future__ import annotations

from dataclasses import dataclass
import logging

import httpx
from sqlalchemy.engine import Engine

from careflow.application.ports.chat_reply_port import ChatReplyPort
from careflow.application.ports.page_renderer_port import PageRendererPort
from careflow.infrastructure.clients.chat_reply_client import CannedChatReplyClient, HttpChatReplyClient
from careflow.infrastructure.db.engine import create_db_engine, create_schema
from careflow.infrastructure.rendering.page_renderer import HtmlPageRenderer
from careflow.infrastructure.sessions.memory_session_store import InMemorySessionStore
from careflow.shared.config import Settings


logger = logging.getLogger(__name__)


REQUIRED_SETTINGS = (
    ("postgres_dsn", "POSTGRES_DSN"),
    ("session_secret", "SESSION_SECRET"),
    ("google_client_id", "GOOGLE_CLIENT_ID"),
    ("google_client_secret", "GOOGLE_CLIENT_SECRET"),
)


@dataclass
class AppContext:
    """Process-wide resources, built on startup and closed on shutdown."""

    settings: Settings
    engine: Engine
    http_client: httpx.Client
    session_store: InMemorySessionStore
    chat_reply_client: ChatReplyPort
    page_renderer: PageRendererPort

    def close(self) -> None:
        self.http_client.close()
        self.engine.dispose()
        self.session_store.clear()
        logger.info("app_context: closed")


def build_app_context(settings: Settings, *, engine: Engine | None = None) -> AppContext:
    missing = [env_name for attr, env_name in REQUIRED_SETTINGS if not getattr(settings, attr)]
    if engine is not None and "POSTGRES_DSN" in missing:
        missing.remove("POSTGRES_DSN")
    if missing:
        raise RuntimeError(f"Missing required settings: {', '.join(missing)}.")

    if engine is None:
        engine = create_db_engine(settings.postgres_dsn)
    if settings.db_create_schema:
        create_schema(engine)

    http_client = httpx.Client(timeout=settings.oauth_timeout_seconds)
    if settings.chat_backend_url:
        chat_reply_client: ChatReplyPort = HttpChatReplyClient(
            backend_url=settings.chat_backend_url,
            http_client=http_client,
            timeout_seconds=settings.chat_timeout_seconds,
        )
    else:
        chat_reply_client = CannedChatReplyClient()

    logger.info(
        "app_context: built env=%s session_ttl_seconds=%s chat_backend=%s",
        settings.app_env,
        settings.session_ttl_seconds,
        "http" if settings.chat_backend_url else "canned",
    )
    return AppContext(
        settings=settings,
        engine=engine,
        http_client=http_client,
        session_store=InMemorySessionStore(),
        chat_reply_client=chat_reply_client,
        page_renderer=HtmlPageRenderer(),
    )
