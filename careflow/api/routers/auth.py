from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse

from careflow.api.deps import (
    AUTHENTICATED_HOME_PATH,
    LOGIN_PATH,
    get_begin_oauth_login_use_case,
    get_browser_session,
    get_complete_oauth_login_use_case,
    get_logout_session_use_case,
)
from careflow.application.dto.auth import BeginOAuthLoginInput, CompleteOAuthLoginInput
from careflow.application.dto.session import BrowserSession
from careflow.application.use_cases.begin_oauth_login import BeginOAuthLoginUseCase
from careflow.application.use_cases.complete_oauth_login import CompleteOAuthLoginUseCase
from careflow.application.use_cases.logout_session import LogoutSessionUseCase
from careflow.domain.exceptions import AuthProviderError, PersistenceError


router = APIRouter(tags=["auth"])
logger = logging.getLogger(__name__)


@router.get("/auth/{provider}")
def begin_oauth_login(
    provider: str,
    session: BrowserSession = Depends(get_browser_session),
    use_case: BeginOAuthLoginUseCase = Depends(get_begin_oauth_login_use_case),
):
    output = use_case.execute(BeginOAuthLoginInput(provider=provider, session=session))
    return RedirectResponse(output.authorization_url, status_code=302)


@router.get("/auth/{provider}/callback")
def complete_oauth_login(
    provider: str,
    request: Request,
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
    session: BrowserSession = Depends(get_browser_session),
    use_case: CompleteOAuthLoginUseCase = Depends(get_complete_oauth_login_use_case),
):
    try:
        output = use_case.execute(
            CompleteOAuthLoginInput(
                provider=provider,
                session=session,
                code=code,
                state=state,
                error=error,
            )
        )
    except AuthProviderError as exc:
        logger.warning(
            "auth_router: login_failed provider=%s stage=%s detail=%s",
            provider,
            exc.stage,
            exc,
        )
        return RedirectResponse(LOGIN_PATH, status_code=302)
    except PersistenceError as exc:
        logger.error(
            "auth_router: login_failed provider=%s stage=account_resolution detail=%s",
            provider,
            exc,
        )
        return RedirectResponse(LOGIN_PATH, status_code=302)

    request.state.browser_session = output.session
    logger.info(
        "auth_router: login_succeeded provider=%s account_id=%s account_created=%s",
        provider,
        output.account.id,
        output.account_created,
    )
    return RedirectResponse(AUTHENTICATED_HOME_PATH, status_code=302)


@router.get("/logout")
def logout(
    request: Request,
    session: BrowserSession = Depends(get_browser_session),
    use_case: LogoutSessionUseCase = Depends(get_logout_session_use_case),
):
    request.state.browser_session = use_case.execute(session)
    return RedirectResponse("/", status_code=302)
