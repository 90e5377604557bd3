from __future__ import annotations

from typing import Protocol

from careflow.domain.entities.account import Account


class PageRendererPort(Protocol):
    def render(self, *, page: str, account: Account | None = None) -> str:
        ...
