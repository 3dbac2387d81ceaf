"""Domain models for outgoing messages."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class SendReceipt:
    """Acknowledgement returned after the bridge sends a message.

    ``timestamp`` is None when the bridge does not report one.
    """

    message_id: str
    timestamp: datetime | None = None
