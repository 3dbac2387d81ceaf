"""Domain models for chats as reported by the protocol bridge."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ChatMessageRecord:
    """A single message in a chat's history."""

    id: str
    chat_jid: str
    from_jid: str
    content: str
    type: str
    timestamp: datetime | None = None


@dataclass(frozen=True)
class ChatRecord:
    """Summary of a chat known to the session."""

    jid: str
    name: str = ""
    is_group: bool = False
    is_pinned: bool = False
    is_muted: bool = False
    is_archived: bool = False
    unread_count: int = 0
    last_message: str = ""
    last_message_at: datetime | None = None
