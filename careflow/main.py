from __future__ import annotations

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from careflow.api.routers import auth, chat, me, pages
from careflow.api.session_middleware import BrowserSessionMiddleware
from careflow.core.context import AppContext, build_app_context
from careflow.domain.exceptions import PersistenceError
from careflow.shared.config import get_settings


logger = logging.getLogger(__name__)


def create_app(context: AppContext | None = None) -> FastAPI:
    """Build the application.

    A pre-built ``context`` is used as is (and left open on shutdown);
    otherwise one is built from the environment on startup and closed on
    shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = getattr(app.state, "context", None) is None
        if owned:
            settings = get_settings()
            logging.basicConfig(level=settings.log_level)
            app.state.context = build_app_context(settings)
        try:
            yield
        finally:
            if owned:
                app.state.context.close()

    app = FastAPI(title="CareFlow", lifespan=lifespan)
    if context is not None:
        app.state.context = context

    app.add_middleware(BrowserSessionMiddleware)
    app.include_router(pages.router)
    app.include_router(auth.router)
    app.include_router(chat.router)
    app.include_router(me.router)

    @app.exception_handler(PersistenceError)
    async def persistence_error_handler(request: Request, exc: PersistenceError):
        logger.error("main: persistence_error path=%s detail=%s", request.url.path, exc)
        return JSONResponse(status_code=500, content={"detail": "Internal server error."})

    return app


app = create_app()
