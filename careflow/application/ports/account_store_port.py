from __future__ import annotations

from datetime import datetime
from typing import Protocol

from careflow.domain.entities.account import Account, AuthProvider


class AccountStorePort(Protocol):
    def find_by_external_id(self, *, provider: AuthProvider, external_id: str) -> Account | None:
        ...

    def find_by_id(self, *, account_id: str) -> Account | None:
        ...

    def create_account(
        self,
        *,
        account_id: str,
        provider: AuthProvider,
        external_id: str,
        email: str,
        given_name: str,
        family_name: str,
        avatar_url: str,
        created_at: datetime,
    ) -> Account:
        ...
