from __future__ import annotations

from datetime import datetime, timezone

from fastapi import Request, Response
from fastapi.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from careflow.api.deps import build_session_codec
from careflow.application.dto.session import BrowserSession
from careflow.core.context import AppContext


def session_cookie_kwargs(context: AppContext, session: BrowserSession) -> dict:
    now = datetime.now(timezone.utc)
    max_age = max(int((session.record.expires_at - now).total_seconds()), 0)
    return {
        "key": context.settings.session_cookie_name,
        "value": session.token,
        "max_age": max_age,
        "httponly": True,
        "secure": context.settings.session_cookie_secure,
        "samesite": "lax",
        "path": "/",
    }


def clear_session_cookie_kwargs(context: AppContext) -> dict:
    return {
        "key": context.settings.session_cookie_name,
        "httponly": True,
        "secure": context.settings.session_cookie_secure,
        "samesite": "lax",
        "path": "/",
    }


class BrowserSessionMiddleware(BaseHTTPMiddleware):
    """Loads the browser session before routing and writes the cookie back.

    Routes that rotate or destroy the session store the new value on
    ``request.state.browser_session``; the cookie follows whatever is there
    once the response is ready.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        context: AppContext = request.app.state.context
        presented_token = request.cookies.get(context.settings.session_cookie_name)
        codec = build_session_codec(context)
        session = await run_in_threadpool(codec.open, presented_token)
        request.state.browser_session = session
        response = await call_next(request)

        current: BrowserSession = request.state.browser_session
        if current.destroyed:
            response.delete_cookie(**clear_session_cookie_kwargs(context))
        elif current.token != presented_token:
            response.set_cookie(**session_cookie_kwargs(context, current))
        return response
