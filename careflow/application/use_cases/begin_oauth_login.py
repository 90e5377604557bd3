from __future__ import annotations

from careflow.application.dto.auth import BeginOAuthLoginInput, BeginOAuthLoginOutput
from careflow.application.ports.oauth_provider_port import OAuthProviderPort
from careflow.application.ports.token_port import TokenPort

from .auth_common import utcnow


class BeginOAuthLoginUseCase:
    def __init__(self, *, oauth_provider: OAuthProviderPort, token_port: TokenPort):
        self._oauth_provider = oauth_provider
        self._token_port = token_port

    def execute(self, command: BeginOAuthLoginInput) -> BeginOAuthLoginOutput:
        state = self._token_port.create_state_token(
            provider=command.provider,
            session_id=command.session.record.id,
            now=utcnow(),
        )
        return BeginOAuthLoginOutput(
            authorization_url=self._oauth_provider.build_authorization_url(state=state),
        )
