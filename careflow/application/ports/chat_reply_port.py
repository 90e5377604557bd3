from __future__ import annotations

from typing import Protocol

from careflow.domain.entities.account import Account


class ChatReplyPort(Protocol):
    def reply(self, *, account: Account, message: str) -> str:
        ...
