from __future__ import annotations

from typing import Protocol

from careflow.application.dto.auth import OAuthProfile, OAuthTokens


class OAuthProviderPort(Protocol):
    name: str

    def build_authorization_url(self, *, state: str) -> str:
        ...

    def exchange_code(self, *, code: str) -> OAuthTokens:
        ...

    def fetch_profile(self, *, access_token: str) -> OAuthProfile:
        ...
