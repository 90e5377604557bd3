from __future__ import annotations

import logging

from careflow.application.dto.session import BrowserSession

from .session_codec import SessionCodec


logger = logging.getLogger(__name__)


class LogoutSessionUseCase:
    def __init__(self, *, session_codec: SessionCodec):
        self._session_codec = session_codec

    def execute(self, session: BrowserSession) -> BrowserSession:
        if not session.is_anonymous:
            logger.info("logout_session: logout account_id=%s", session.account_id)
        return self._session_codec.destroy(session)
