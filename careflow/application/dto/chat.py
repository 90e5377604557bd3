from __future__ import annotations

from dataclasses import dataclass

from careflow.domain.entities.account import Account


@dataclass(frozen=True)
class SendChatMessageInput:
    account: Account
    message: str


@dataclass(frozen=True)
class SendChatMessageOutput:
    reply: str
