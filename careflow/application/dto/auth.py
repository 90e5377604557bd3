from __future__ import annotations

from dataclasses import dataclass

from careflow.application.dto.session import BrowserSession
from careflow.domain.entities.account import Account


@dataclass(frozen=True)
class OAuthTokens:
    access_token: str
    token_type: str
    expires_in: int | None


@dataclass(frozen=True)
class OAuthProfile:
    external_id: str
    email: str
    given_name: str
    family_name: str
    avatar_url: str


@dataclass(frozen=True)
class OAuthStatePayload:
    provider: str
    session_id: str


@dataclass(frozen=True)
class BeginOAuthLoginInput:
    provider: str
    session: BrowserSession


@dataclass(frozen=True)
class BeginOAuthLoginOutput:
    authorization_url: str


@dataclass(frozen=True)
class CompleteOAuthLoginInput:
    provider: str
    session: BrowserSession
    code: str | None
    state: str | None
    error: str | None


@dataclass(frozen=True)
class CompleteOAuthLoginOutput:
    account: Account
    session: BrowserSession
    account_created: bool


@dataclass(frozen=True)
class ResolveAccountOutput:
    account: Account
    created: bool
