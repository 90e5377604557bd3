from __future__ import annotations

from fastapi import APIRouter, Depends

from careflow.api.deps import get_get_me_use_case, require_account_api
from careflow.api.schemas.me import MeResponse
from careflow.application.use_cases.get_me import GetMeUseCase
from careflow.domain.entities.account import Account


router = APIRouter(tags=["account"])


@router.get("/api/me", response_model=MeResponse)
def get_me(
    account: Account = Depends(require_account_api),
    use_case: GetMeUseCase = Depends(get_get_me_use_case),
):
    output = use_case.execute(account=account)
    return MeResponse(
        account={
            "id": output.account_id,
            "name": output.name,
            "email": output.email,
            "given_name": output.given_name,
            "family_name": output.family_name,
            "avatar_url": output.avatar_url,
        }
    )
