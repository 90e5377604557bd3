from __future__ import annotations

from typing import Protocol

from careflow.domain.entities.session import SessionRecord


class SessionStorePort(Protocol):
    def get(self, *, session_id: str) -> SessionRecord | None:
        ...

    def save(self, record: SessionRecord) -> None:
        ...

    def delete(self, *, session_id: str) -> None:
        ...
