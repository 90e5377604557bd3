from __future__ import annotations

from careflow.application.dto.chat import SendChatMessageInput, SendChatMessageOutput
from careflow.application.ports.chat_reply_port import ChatReplyPort
from careflow.domain.exceptions import ChatMessageInputError


class SendChatMessageUseCase:
    def __init__(self, *, chat_reply_port: ChatReplyPort):
        self._chat_reply_port = chat_reply_port

    def execute(self, command: SendChatMessageInput) -> SendChatMessageOutput:
        message = command.message.strip()
        if not message:
            raise ChatMessageInputError("Message must not be empty.")
        reply = self._chat_reply_port.reply(account=command.account, message=message)
        return SendChatMessageOutput(reply=reply)
