from __future__ import annotations

import hashlib
import secrets
from datetime import datetime, timedelta

import jwt

from careflow.application.dto.auth import OAuthStatePayload
from careflow.application.ports.token_port import TokenPort


STATE_TOKEN_TYPE = "oauth_state"


class SessionTokenService(TokenPort):
    def __init__(
        self,
        *,
        session_secret: str,
        session_ttl_seconds: int,
        state_ttl_seconds: int = 600,
    ):
        self._session_secret = session_secret
        self._session_ttl_seconds = session_ttl_seconds
        self._state_ttl_seconds = state_ttl_seconds

    def generate_session_token(self) -> str:
        return secrets.token_urlsafe(32)

    def hash_session_token(self, *, session_token: str) -> str:
        return hashlib.sha256(session_token.encode("utf-8")).hexdigest()

    def session_expires_at(self, *, now: datetime) -> datetime:
        return now + timedelta(seconds=self._session_ttl_seconds)

    def create_state_token(self, *, provider: str, session_id: str, now: datetime) -> str:
        exp = now + timedelta(seconds=self._state_ttl_seconds)
        payload = {
            "type": STATE_TOKEN_TYPE,
            "provider": provider,
            "sid": session_id,
            "nonce": secrets.token_urlsafe(16),
            "iat": int(now.timestamp()),
            "exp": int(exp.timestamp()),
        }
        return jwt.encode(payload, self._session_secret, algorithm="HS256")

    def decode_state_token(self, *, token: str) -> OAuthStatePayload:
        try:
            payload = jwt.decode(token, self._session_secret, algorithms=["HS256"])
        except jwt.ExpiredSignatureError as exc:
            raise ValueError("State token expired.") from exc
        except jwt.PyJWTError as exc:
            raise ValueError("Invalid state token.") from exc

        if payload.get("type") != STATE_TOKEN_TYPE:
            raise ValueError("Invalid state token type.")

        provider = payload.get("provider")
        session_id = payload.get("sid")
        if not isinstance(provider, str) or not isinstance(session_id, str) or not session_id:
            raise ValueError("State token missing required claims.")

        return OAuthStatePayload(provider=provider, session_id=session_id)
