from __future__ import annotations

from careflow.application.dto.auth import CompleteOAuthLoginInput, CompleteOAuthLoginOutput
from careflow.application.ports.oauth_provider_port import OAuthProviderPort
from careflow.application.ports.token_port import TokenPort
from careflow.domain.exceptions import AuthProviderError

from .resolve_account import ResolveAccountUseCase
from .session_codec import SessionCodec


class CompleteOAuthLoginUseCase:
    """Callback half of the authorization-code flow.

    Nothing is written to the session until the provider round trips and the
    account lookup have all succeeded.
    """

    def __init__(
        self,
        *,
        oauth_provider: OAuthProviderPort,
        token_port: TokenPort,
        resolve_account_use_case: ResolveAccountUseCase,
        session_codec: SessionCodec,
    ):
        self._oauth_provider = oauth_provider
        self._token_port = token_port
        self._resolve_account_use_case = resolve_account_use_case
        self._session_codec = session_codec

    def execute(self, command: CompleteOAuthLoginInput) -> CompleteOAuthLoginOutput:
        provider = command.provider
        if command.error:
            raise AuthProviderError(
                f"Provider returned error '{command.error}'.",
                stage="authorization",
                provider=provider,
            )
        code = (command.code or "").strip()
        if not code:
            raise AuthProviderError(
                "Authorization code is missing.",
                stage="authorization",
                provider=provider,
            )

        self._check_state(command)

        tokens = self._oauth_provider.exchange_code(code=code)
        profile = self._oauth_provider.fetch_profile(access_token=tokens.access_token)
        resolved = self._resolve_account_use_case.execute(provider=provider, profile=profile)

        session = self._session_codec.attach_account(command.session, resolved.account)
        return CompleteOAuthLoginOutput(
            account=resolved.account,
            session=session,
            account_created=resolved.created,
        )

    def _check_state(self, command: CompleteOAuthLoginInput) -> None:
        if not command.state:
            raise AuthProviderError("State parameter is missing.", stage="state", provider=command.provider)
        try:
            payload = self._token_port.decode_state_token(token=command.state)
        except ValueError as exc:
            raise AuthProviderError(str(exc), stage="state", provider=command.provider) from exc

        if payload.provider != command.provider:
            raise AuthProviderError("State was issued for another provider.", stage="state", provider=command.provider)
        if payload.session_id != command.session.record.id:
            raise AuthProviderError("State does not belong to this session.", stage="state", provider=command.provider)
