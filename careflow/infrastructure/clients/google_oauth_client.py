from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlencode

import httpx

from careflow.application.dto.auth import OAuthProfile, OAuthTokens
from careflow.application.ports.oauth_provider_port import OAuthProviderPort
from careflow.domain.exceptions import AuthProviderError


GOOGLE_SCOPES = ("profile", "email")


@dataclass(frozen=True)
class GoogleOAuthClientSettings:
    client_id: str
    client_secret: str
    callback_url: str
    authorize_url: str
    token_url: str
    userinfo_url: str


class GoogleOAuthClient(OAuthProviderPort):
    name = "google"

    def __init__(self, settings: GoogleOAuthClientSettings, *, http_client: httpx.Client):
        self._settings = settings
        self._http = http_client

    def build_authorization_url(self, *, state: str) -> str:
        params = {
            "client_id": self._settings.client_id,
            "redirect_uri": self._settings.callback_url,
            "response_type": "code",
            "scope": " ".join(GOOGLE_SCOPES),
            "state": state,
        }
        return f"{self._settings.authorize_url}?{urlencode(params)}"

    def exchange_code(self, *, code: str) -> OAuthTokens:
        payload = {
            "client_id": self._settings.client_id,
            "client_secret": self._settings.client_secret,
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": self._settings.callback_url,
        }
        try:
            response = self._http.post(
                self._settings.token_url,
                data=payload,
                headers={"Accept": "application/json"},
            )
        except httpx.HTTPError as exc:
            raise AuthProviderError(
                f"Token endpoint unreachable: {exc.__class__.__name__}.",
                stage="code_exchange",
                provider=self.name,
            ) from exc

        if response.status_code >= 400:
            # Reused or expired codes come back as 400 invalid_grant.
            raise AuthProviderError(
                f"Token exchange failed (status={response.status_code}).",
                stage="code_exchange",
                provider=self.name,
            )

        data = _json_object(response, stage="code_exchange")
        access_token = data.get("access_token")
        if not isinstance(access_token, str) or not access_token:
            raise AuthProviderError(
                "Token response missing access_token.",
                stage="code_exchange",
                provider=self.name,
            )

        expires_in = data.get("expires_in")
        return OAuthTokens(
            access_token=access_token,
            token_type=str(data.get("token_type") or "Bearer"),
            expires_in=int(expires_in) if isinstance(expires_in, (int, float)) else None,
        )

    def fetch_profile(self, *, access_token: str) -> OAuthProfile:
        try:
            response = self._http.get(
                self._settings.userinfo_url,
                headers={"Authorization": f"Bearer {access_token}"},
            )
        except httpx.HTTPError as exc:
            raise AuthProviderError(
                f"User-info endpoint unreachable: {exc.__class__.__name__}.",
                stage="profile_fetch",
                provider=self.name,
            ) from exc

        if response.status_code >= 400:
            raise AuthProviderError(
                f"Profile fetch failed (status={response.status_code}).",
                stage="profile_fetch",
                provider=self.name,
            )

        data = _json_object(response, stage="profile_fetch")
        return parse_google_profile(data)


def parse_google_profile(data: dict) -> OAuthProfile:
    fields = {
        "sub": data.get("sub"),
        "email": data.get("email"),
        "given_name": data.get("given_name"),
        "family_name": data.get("family_name"),
        "picture": data.get("picture"),
    }
    missing = sorted(name for name, value in fields.items() if not isinstance(value, str) or not value.strip())
    if missing:
        raise AuthProviderError(
            f"Google profile missing required fields: {', '.join(missing)}.",
            stage="profile_fetch",
            provider=GoogleOAuthClient.name,
        )

    return OAuthProfile(
        external_id=fields["sub"].strip(),
        email=fields["email"].strip(),
        given_name=fields["given_name"].strip(),
        family_name=fields["family_name"].strip(),
        avatar_url=fields["picture"].strip(),
    )


def _json_object(response: httpx.Response, *, stage: str) -> dict:
    try:
        data = response.json()
    except ValueError as exc:
        raise AuthProviderError("Provider returned invalid JSON.", stage=stage, provider=GoogleOAuthClient.name) from exc
    if not isinstance(data, dict):
        raise AuthProviderError("Provider returned unexpected payload.", stage=stage, provider=GoogleOAuthClient.name)
    return data
