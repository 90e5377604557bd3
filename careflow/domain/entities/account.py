from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Literal


AuthProvider = Literal["google"]


@dataclass(frozen=True)
class Account:
    id: str
    provider: AuthProvider
    external_id: str
    email: str
    given_name: str
    family_name: str
    avatar_url: str
    created_at: datetime

    @property
    def display_name(self) -> str:
        return f"{self.given_name} {self.family_name}".strip()
