"""Domain models for newsletters (channels)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class NewsletterRecord:
    """Newsletter metadata returned by the protocol bridge."""

    id: str
    jid: str
    name: str
    description: str = ""
    subscriber_count: int = 0
    is_verified: bool = False
    is_subscribed: bool = False
    muted: bool = False
    created_at: int = 0
