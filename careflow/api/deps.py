from __future__ import annotations

from fastapi import Depends, HTTPException, Request

from careflow.application.dto.session import BrowserSession
from careflow.application.ports.oauth_provider_port import OAuthProviderPort
from careflow.application.ports.page_renderer_port import PageRendererPort
from careflow.application.use_cases.begin_oauth_login import BeginOAuthLoginUseCase
from careflow.application.use_cases.complete_oauth_login import CompleteOAuthLoginUseCase
from careflow.application.use_cases.get_me import GetMeUseCase
from careflow.application.use_cases.logout_session import LogoutSessionUseCase
from careflow.application.use_cases.resolve_account import ResolveAccountUseCase
from careflow.application.use_cases.send_chat_message import SendChatMessageUseCase
from careflow.application.use_cases.session_codec import SessionCodec
from careflow.core.context import AppContext
from careflow.domain.entities.account import Account
from careflow.infrastructure.clients.google_oauth_client import GoogleOAuthClient, GoogleOAuthClientSettings
from careflow.infrastructure.db.repositories.accounts_repository import SqlAccountsRepository
from careflow.infrastructure.security.token_service import SessionTokenService


LOGIN_PATH = "/login"
AUTHENTICATED_HOME_PATH = "/dashboard"


def get_app_context(request: Request) -> AppContext:
    return request.app.state.context


def build_token_service(context: AppContext) -> SessionTokenService:
    return SessionTokenService(
        session_secret=context.settings.session_secret,
        session_ttl_seconds=context.settings.session_ttl_seconds,
    )


def build_session_codec(context: AppContext) -> SessionCodec:
    return SessionCodec(
        session_store=context.session_store,
        account_store=SqlAccountsRepository(context.engine),
        token_port=build_token_service(context),
    )


def get_session_codec(context: AppContext = Depends(get_app_context)) -> SessionCodec:
    return build_session_codec(context)


def get_page_renderer(context: AppContext = Depends(get_app_context)) -> PageRendererPort:
    return context.page_renderer


def get_oauth_provider(provider: str, context: AppContext = Depends(get_app_context)) -> OAuthProviderPort:
    if provider != GoogleOAuthClient.name:
        raise HTTPException(status_code=404, detail=f"Unknown identity provider '{provider}'.")
    settings = context.settings
    return GoogleOAuthClient(
        GoogleOAuthClientSettings(
            client_id=settings.google_client_id,
            client_secret=settings.google_client_secret,
            callback_url=settings.google_callback_url,
            authorize_url=settings.google_authorize_url,
            token_url=settings.google_token_url,
            userinfo_url=settings.google_userinfo_url,
        ),
        http_client=context.http_client,
    )


def get_begin_oauth_login_use_case(
    oauth_provider: OAuthProviderPort = Depends(get_oauth_provider),
    context: AppContext = Depends(get_app_context),
) -> BeginOAuthLoginUseCase:
    return BeginOAuthLoginUseCase(
        oauth_provider=oauth_provider,
        token_port=build_token_service(context),
    )


def get_complete_oauth_login_use_case(
    oauth_provider: OAuthProviderPort = Depends(get_oauth_provider),
    context: AppContext = Depends(get_app_context),
    session_codec: SessionCodec = Depends(get_session_codec),
) -> CompleteOAuthLoginUseCase:
    return CompleteOAuthLoginUseCase(
        oauth_provider=oauth_provider,
        token_port=build_token_service(context),
        resolve_account_use_case=ResolveAccountUseCase(
            account_store=SqlAccountsRepository(context.engine),
        ),
        session_codec=session_codec,
    )


def get_logout_session_use_case(
    session_codec: SessionCodec = Depends(get_session_codec),
) -> LogoutSessionUseCase:
    return LogoutSessionUseCase(session_codec=session_codec)


def get_get_me_use_case() -> GetMeUseCase:
    return GetMeUseCase()


def get_send_chat_message_use_case(
    context: AppContext = Depends(get_app_context),
) -> SendChatMessageUseCase:
    return SendChatMessageUseCase(chat_reply_port=context.chat_reply_client)


def get_browser_session(request: Request) -> BrowserSession:
    session = getattr(request.state, "browser_session", None)
    if session is None:
        raise HTTPException(status_code=500, detail="Session middleware is not installed.")
    return session


def get_current_account(
    session: BrowserSession = Depends(get_browser_session),
    session_codec: SessionCodec = Depends(get_session_codec),
) -> Account | None:
    return session_codec.resolve(session)


def require_account_page(account: Account | None = Depends(get_current_account)) -> Account:
    if account is None:
        raise HTTPException(
            status_code=303,
            detail="Login required.",
            headers={"Location": LOGIN_PATH},
        )
    return account


def require_account_api(account: Account | None = Depends(get_current_account)) -> Account:
    if account is None:
        raise HTTPException(status_code=401, detail="Login required.")
    return account


def require_anonymous(account: Account | None = Depends(get_current_account)) -> None:
    if account is not None:
        raise HTTPException(
            status_code=303,
            detail="Already logged in.",
            headers={"Location": AUTHENTICATED_HOME_PATH},
        )
