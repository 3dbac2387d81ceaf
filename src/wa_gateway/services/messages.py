"""Outgoing text messages."""

import logging
from dataclasses import dataclass
from typing import Protocol

from wa_gateway.domain.errors import OperationError, ValidationError
from wa_gateway.domain.jids import to_chat_jid
from wa_gateway.domain.messages import SendReceipt
from wa_gateway.services.chats import unix_seconds
from wa_gateway.services.sessions import SessionRepository

logger = logging.getLogger(__name__)

MAX_TEXT_LENGTH = 4096


class MessageSender(Protocol):
    """Message sending offered by the protocol bridge."""

    async def send_text_message(
        self, session_id: str, chat_jid: str, text: str
    ) -> SendReceipt:
        """Send a text message and return the bridge receipt."""


@dataclass(frozen=True)
class SendTextRequest:
    session_id: str
    phone: str
    text: str


@dataclass(frozen=True)
class SendTextResult:
    session_id: str
    chat_jid: str
    message_id: str
    timestamp: str


@dataclass
class MessageService:
    """Validates and forwards outgoing messages."""

    repository: SessionRepository
    message_sender: MessageSender

    async def send_text(self, request: SendTextRequest) -> SendTextResult:
        """Send a text message to a phone number or chat JID."""
        if not request.phone.strip():
            raise ValidationError("phone", "phone is required")
        if not request.text.strip():
            raise ValidationError("text", "message text is required")
        if len(request.text) > MAX_TEXT_LENGTH:
            raise ValidationError(
                "text", f"message text must not exceed {MAX_TEXT_LENGTH} characters"
            )

        chat_jid = to_chat_jid(request.phone.strip())
        try:
            receipt = await self.message_sender.send_text_message(
                request.session_id, chat_jid, request.text
            )
        except Exception as exc:
            logger.warning(
                "Text message send failed",
                extra={"session_id": request.session_id, "chat_jid": chat_jid},
            )
            raise OperationError("send text message", exc) from exc

        return SendTextResult(
            session_id=request.session_id,
            chat_jid=chat_jid,
            message_id=receipt.message_id,
            timestamp=unix_seconds(receipt.timestamp),
        )
