from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class SessionRecord:
    id: str
    account_id: str | None
    created_at: datetime
    expires_at: datetime

    @property
    def is_anonymous(self) -> bool:
        return self.account_id is None

    def is_expired(self, *, now: datetime) -> bool:
        return self.expires_at <= now
