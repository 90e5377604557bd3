from __future__ import annotations

from pydantic import BaseModel


class MeAccountResponse(BaseModel):
    id: str
    name: str
    email: str
    given_name: str
    family_name: str
    avatar_url: str


class MeResponse(BaseModel):
    account: MeAccountResponse
