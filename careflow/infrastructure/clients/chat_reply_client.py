from __future__ import annotations

import logging
import re

import httpx

from careflow.application.ports.chat_reply_port import ChatReplyPort
from careflow.domain.entities.account import Account
from careflow.domain.exceptions import ChatBackendError


logger = logging.getLogger(__name__)


CANNED_REPLIES = (
    (("appointment", "book", "schedule"), "You can book or move an appointment from your dashboard."),
    (("doctor", "specialist"), "Our doctors and their specialties are listed on the Doctors page."),
    (("service", "price", "cost"), "The Services page lists everything we offer, including pricing."),
    (("hello", "hi", "hey"), "Hello {name}! How can I help you today?"),
)

FALLBACK_REPLY = "Thanks {name}, a member of our care team will follow up on your message."


class CannedChatReplyClient(ChatReplyPort):
    """Keyword based replies used when no chat backend is configured."""

    def reply(self, *, account: Account, message: str) -> str:
        name = account.given_name or account.email
        words = set(re.findall(r"[a-z]+", message.lower()))
        for keywords, template in CANNED_REPLIES:
            if any(keyword in words or f"{keyword}s" in words for keyword in keywords):
                return template.format(name=name)
        return FALLBACK_REPLY.format(name=name)


class HttpChatReplyClient(ChatReplyPort):
    def __init__(self, *, backend_url: str, http_client: httpx.Client, timeout_seconds: float):
        self._backend_url = backend_url
        self._http = http_client
        self._timeout_seconds = timeout_seconds

    def reply(self, *, account: Account, message: str) -> str:
        try:
            response = self._http.post(
                self._backend_url,
                json={
                    "account_id": account.id,
                    "name": account.given_name,
                    "message": message,
                },
                timeout=self._timeout_seconds,
            )
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning(
                "chat_reply_client: backend_failed account_id=%s error=%s",
                account.id,
                exc.__class__.__name__,
            )
            raise ChatBackendError("Chat backend is unavailable.") from exc

        reply = payload.get("reply") if isinstance(payload, dict) else None
        if not isinstance(reply, str) or not reply:
            raise ChatBackendError("Chat backend returned no reply.")
        return reply
