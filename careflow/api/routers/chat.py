from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from careflow.api.deps import get_send_chat_message_use_case, require_account_api
from careflow.api.schemas.chat import ChatRequest, ChatResponse
from careflow.application.dto.chat import SendChatMessageInput
from careflow.application.use_cases.send_chat_message import SendChatMessageUseCase
from careflow.domain.entities.account import Account
from careflow.domain.exceptions import ChatBackendError, ChatMessageInputError


router = APIRouter(tags=["chat"])
logger = logging.getLogger(__name__)


@router.post("/chat", response_model=ChatResponse)
def send_chat_message(
    req: ChatRequest,
    account: Account = Depends(require_account_api),
    use_case: SendChatMessageUseCase = Depends(get_send_chat_message_use_case),
):
    try:
        output = use_case.execute(SendChatMessageInput(account=account, message=req.message))
    except ChatMessageInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except ChatBackendError as exc:
        logger.warning("chat_router: backend_error account_id=%s detail=%s", account.id, exc)
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    return ChatResponse(reply=output.reply)
