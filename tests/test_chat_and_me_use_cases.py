from __future__ import annotations

from datetime import datetime, timezone
import json

import httpx
import pytest

from careflow.application.dto.chat import SendChatMessageInput
from careflow.application.use_cases.get_me import GetMeUseCase
from careflow.application.use_cases.send_chat_message import SendChatMessageUseCase
from careflow.domain.entities.account import Account
from careflow.domain.exceptions import ChatBackendError, ChatMessageInputError
from careflow.infrastructure.clients.chat_reply_client import CannedChatReplyClient, HttpChatReplyClient


class FakeChatReplyPort:
    def __init__(self):
        self.messages: list[str] = []

    def reply(self, *, account: Account, message: str) -> str:
        self.messages.append(message)
        return f"echo {message}"


def _fake_account() -> Account:
    return Account(
        id="account-1",
        provider="google",
        external_id="ext-123",
        email="ada@example.com",
        given_name="Ada",
        family_name="Lovelace",
        avatar_url="https://images.example.test/ada.png",
        created_at=datetime.now(timezone.utc),
    )


def test_get_me_returns_profile_fields():
    output = GetMeUseCase().execute(account=_fake_account())

    assert output.account_id == "account-1"
    assert output.email == "ada@example.com"
    assert output.given_name == "Ada"
    assert output.family_name == "Lovelace"
    assert "Ada" in output.name


def test_send_chat_message_strips_and_forwards():
    port = FakeChatReplyPort()

    output = SendChatMessageUseCase(chat_reply_port=port).execute(
        SendChatMessageInput(account=_fake_account(), message="  hello  ")
    )

    assert output.reply == "echo hello"
    assert port.messages == ["hello"]


def test_blank_chat_message_is_rejected():
    port = FakeChatReplyPort()

    with pytest.raises(ChatMessageInputError):
        SendChatMessageUseCase(chat_reply_port=port).execute(
            SendChatMessageInput(account=_fake_account(), message="   ")
        )

    assert port.messages == []


def test_canned_reply_matches_keywords_and_uses_name():
    client = CannedChatReplyClient()

    assert "dashboard" in client.reply(account=_fake_account(), message="Can I book appointments?")
    assert client.reply(account=_fake_account(), message="hi").startswith("Hello Ada")
    assert client.reply(account=_fake_account(), message="something else").startswith("Thanks Ada")


def test_http_chat_client_posts_message_and_returns_reply():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"reply": "See you soon."})

    client = HttpChatReplyClient(
        backend_url="https://chat.example.test/reply",
        http_client=httpx.Client(transport=httpx.MockTransport(handler)),
        timeout_seconds=5.0,
    )

    assert client.reply(account=_fake_account(), message="hello") == "See you soon."
    assert seen["body"] == {"account_id": "account-1", "name": "Ada", "message": "hello"}


def test_http_chat_client_failure_is_backend_error():
    client = HttpChatReplyClient(
        backend_url="https://chat.example.test/reply",
        http_client=httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(503))),
        timeout_seconds=5.0,
    )

    with pytest.raises(ChatBackendError):
        client.reply(account=_fake_account(), message="hello")
