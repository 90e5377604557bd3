from __future__ import annotations

from dataclasses import dataclass, replace

from careflow.domain.entities.session import SessionRecord


@dataclass(frozen=True)
class BrowserSession:
    token: str
    record: SessionRecord
    destroyed: bool = False

    @property
    def account_id(self) -> str | None:
        if self.destroyed:
            return None
        return self.record.account_id

    @property
    def is_anonymous(self) -> bool:
        return self.account_id is None

    def mark_destroyed(self) -> BrowserSession:
        return replace(self, destroyed=True)
