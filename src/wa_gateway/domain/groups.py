"""Domain models for WhatsApp groups."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class GroupRecord:
    """Group metadata returned by the protocol bridge."""

    jid: str
    name: str
    description: str = ""
    participants: list[str] = field(default_factory=list)
    admins: list[str] = field(default_factory=list)
    owner: str = ""
    is_announce: bool = False
    is_locked: bool = False
    created_at: int = 0
