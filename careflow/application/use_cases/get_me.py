from __future__ import annotations

from careflow.application.dto.me import MeOutput
from careflow.domain.entities.account import Account


class GetMeUseCase:
    def execute(self, *, account: Account) -> MeOutput:
        return MeOutput(
            account_id=account.id,
            name=account.display_name or account.email,
            email=account.email,
            given_name=account.given_name,
            family_name=account.family_name,
            avatar_url=account.avatar_url,
        )
