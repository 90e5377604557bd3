from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MeOutput:
    account_id: str
    name: str
    email: str
    given_name: str
    family_name: str
    avatar_url: str
