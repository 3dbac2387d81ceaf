"""Chat history and chat listing."""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from wa_gateway.domain.chats import ChatMessageRecord, ChatRecord
from wa_gateway.domain.errors import OperationError
from wa_gateway.domain.jids import to_chat_jid
from wa_gateway.services.pagination import clamp_limit
from wa_gateway.services.sessions import SessionRepository

DEFAULT_HISTORY_LIMIT = 50
DEFAULT_CHATS_LIMIT = 50


class ChatManager(Protocol):
    """Chat operations offered by the protocol bridge."""

    async def get_chat_history(
        self, session_id: str, chat_jid: str, limit: int, offset: int
    ) -> list[ChatMessageRecord]:
        """Return messages for a chat."""

    async def get_chats(
        self, session_id: str, limit: int, offset: int
    ) -> list[ChatRecord]:
        """Return chats known to the session."""


@dataclass(frozen=True)
class GetChatHistoryRequest:
    session_id: str
    phone: str
    limit: int = 0
    offset: int = 0


@dataclass(frozen=True)
class ChatMessageView:
    id: str
    chat_jid: str
    from_jid: str
    content: str
    type: str
    timestamp: str
    is_from_me: bool = False
    is_read: bool = False
    media_url: str = ""
    caption: str = ""


@dataclass(frozen=True)
class ChatHistory:
    session_id: str
    phone: str
    messages: list[ChatMessageView]
    count: int
    limit: int
    offset: int


@dataclass(frozen=True)
class ListChatsRequest:
    session_id: str
    limit: int = 0
    offset: int = 0


@dataclass(frozen=True)
class ChatView:
    jid: str
    name: str
    is_group: bool
    is_pinned: bool
    is_muted: bool
    is_archived: bool
    unread_count: int
    last_message: str
    last_message_at: str


@dataclass(frozen=True)
class ChatList:
    session_id: str
    chats: list[ChatView]
    count: int
    limit: int
    offset: int


def unix_seconds(value: datetime | None) -> str:
    """Format a timestamp as Unix seconds, or an empty string."""
    if value is None:
        return ""
    return str(int(value.timestamp()))


@dataclass
class ChatService:
    """Shapes chat data from the bridge into response views."""

    repository: SessionRepository
    chat_manager: ChatManager

    async def get_chat_history(self, request: GetChatHistoryRequest) -> ChatHistory:
        """Return a page of messages for a phone number or chat JID."""
        limit = clamp_limit(request.limit, DEFAULT_HISTORY_LIMIT)
        chat_jid = to_chat_jid(request.phone)
        try:
            records = await self.chat_manager.get_chat_history(
                request.session_id, chat_jid, limit, request.offset
            )
        except Exception as exc:
            raise OperationError("get chat history", exc) from exc

        messages = [
            ChatMessageView(
                id=record.id,
                chat_jid=record.chat_jid,
                from_jid=record.from_jid,
                content=record.content,
                type=record.type,
                timestamp=unix_seconds(record.timestamp),
            )
            for record in records
        ]
        return ChatHistory(
            session_id=request.session_id,
            phone=request.phone,
            messages=messages,
            count=len(messages),
            limit=limit,
            offset=request.offset,
        )

    async def list_chats(self, request: ListChatsRequest) -> ChatList:
        """Return a page of chats for the session."""
        limit = clamp_limit(request.limit, DEFAULT_CHATS_LIMIT)
        try:
            records = await self.chat_manager.get_chats(
                request.session_id, limit, request.offset
            )
        except Exception as exc:
            raise OperationError("list chats", exc) from exc

        chats = [
            ChatView(
                jid=record.jid,
                name=record.name,
                is_group=record.is_group,
                is_pinned=record.is_pinned,
                is_muted=record.is_muted,
                is_archived=record.is_archived,
                unread_count=record.unread_count,
                last_message=record.last_message,
                last_message_at=unix_seconds(record.last_message_at),
            )
            for record in records
        ]
        return ChatList(
            session_id=request.session_id,
            chats=chats,
            count=len(chats),
            limit=limit,
            offset=request.offset,
        )
