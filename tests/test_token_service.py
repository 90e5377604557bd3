from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from careflow.infrastructure.security.token_service import SessionTokenService


SECRET = "state-test-secret-0123456789abcdef"


def _service() -> SessionTokenService:
    return SessionTokenService(session_secret=SECRET, session_ttl_seconds=86400)


def test_session_token_hash_is_stable_and_not_the_token():
    service = _service()
    token = service.generate_session_token()

    assert service.hash_session_token(session_token=token) == service.hash_session_token(session_token=token)
    assert service.hash_session_token(session_token=token) != token
    assert service.generate_session_token() != token


def test_state_token_binds_provider_and_session():
    service = _service()
    token = service.create_state_token(provider="google", session_id="sid-1", now=datetime.now(timezone.utc))

    payload = service.decode_state_token(token=token)

    assert payload.provider == "google"
    assert payload.session_id == "sid-1"


def test_expired_state_token_is_rejected():
    service = _service()
    issued = datetime.now(timezone.utc) - timedelta(hours=1)
    token = service.create_state_token(provider="google", session_id="sid-1", now=issued)

    with pytest.raises(ValueError, match="expired"):
        service.decode_state_token(token=token)


def test_state_token_signed_with_other_secret_is_rejected():
    token = SessionTokenService(
        session_secret="another-secret-0123456789abcdefgh",
        session_ttl_seconds=60,
    ).create_state_token(provider="google", session_id="sid-1", now=datetime.now(timezone.utc))

    with pytest.raises(ValueError):
        _service().decode_state_token(token=token)


def test_token_of_other_type_is_rejected():
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {"type": "access", "sid": "sid-1", "provider": "google", "exp": int((now + timedelta(minutes=5)).timestamp())},
        SECRET,
        algorithm="HS256",
    )

    with pytest.raises(ValueError, match="type"):
        _service().decode_state_token(token=token)
