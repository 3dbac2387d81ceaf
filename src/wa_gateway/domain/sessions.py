"""Domain model for WhatsApp sessions."""

import re
from dataclasses import dataclass, field
from datetime import UTC, datetime

from wa_gateway.domain.errors import ValidationError

STATUS_DISCONNECTED = "disconnected"
STATUS_CONNECTING = "connecting"
STATUS_CONNECTED = "connected"
STATUS_ERROR = "error"
SESSION_STATUSES = frozenset(
    {STATUS_DISCONNECTED, STATUS_CONNECTING, STATUS_CONNECTED, STATUS_ERROR}
)

_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9_-]+$")
_NAME_MIN_LENGTH = 3
_NAME_MAX_LENGTH = 100


def _now() -> datetime:
    return datetime.now(tz=UTC)


def validate_session_name(value: str) -> str:
    """Return the trimmed session name or raise ValidationError."""
    trimmed = value.strip()
    if not trimmed:
        raise ValidationError("name", "name cannot be empty")
    if len(trimmed) < _NAME_MIN_LENGTH:
        raise ValidationError(
            "name", f"name must be at least {_NAME_MIN_LENGTH} characters long"
        )
    if len(trimmed) > _NAME_MAX_LENGTH:
        raise ValidationError(
            "name", f"name cannot exceed {_NAME_MAX_LENGTH} characters"
        )
    if not _NAME_PATTERN.match(trimmed):
        raise ValidationError(
            "name", "name can only contain letters, numbers, hyphens, and underscores"
        )
    return trimmed


def validate_webhook_endpoint(value: str) -> str:
    """Return the trimmed webhook URL or raise ValidationError."""
    trimmed = value.strip()
    if not trimmed:
        raise ValidationError("webhook_url", "webhook URL cannot be empty")
    if not trimmed.startswith(("http://", "https://")):
        raise ValidationError(
            "webhook_url", "webhook URL must start with http:// or https://"
        )
    return trimmed


def parse_status(raw: object) -> str:
    """Map a stored status to a known one; unknown or empty means disconnected."""
    value = str(raw or "").strip().lower()
    if value in SESSION_STATUSES:
        return value
    return STATUS_DISCONNECTED


@dataclass
class Session:
    """A WhatsApp connection tracked by the gateway.

    Both ``id`` and ``name`` are lookup keys. ``id`` is blank until the
    repository assigns one. ``device_jid`` is set once a device has been
    linked and is what makes a session authenticated.
    """

    id: str
    name: str
    status: str = STATUS_DISCONNECTED
    device_jid: str = ""
    webhook_endpoint: str = ""
    webhook_events: list[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    @classmethod
    def new(cls, name: str) -> "Session":
        """Build an unsaved session with a validated name and no id."""
        return cls(id="", name=validate_session_name(name))

    def set_webhook_endpoint(self, url: str) -> None:
        """Validate and store the webhook endpoint."""
        self.webhook_endpoint = validate_webhook_endpoint(url)
        self.updated_at = _now()

    def set_webhook_events(self, events: list[str]) -> None:
        """Replace the subscribed event names."""
        self.webhook_events = list(events)
        self.updated_at = _now()

    def has_webhook(self) -> bool:
        return self.webhook_endpoint != ""

    def is_connected(self) -> bool:
        return self.status == STATUS_CONNECTED

    def is_disconnected(self) -> bool:
        return self.status == STATUS_DISCONNECTED

    def is_authenticated(self) -> bool:
        return self.device_jid != ""

    def can_connect(self) -> bool:
        """Only sessions that are not already connected may (re)connect."""
        return self.status in (STATUS_DISCONNECTED, STATUS_CONNECTING, STATUS_ERROR)

    def mark_connecting(self) -> None:
        self._set_status(STATUS_CONNECTING)

    def mark_disconnected(self) -> None:
        self._set_status(STATUS_DISCONNECTED)

    def mark_error(self) -> None:
        self._set_status(STATUS_ERROR)

    def unlink_device(self) -> None:
        """Forget the linked device; the next connect needs a new QR scan."""
        self.device_jid = ""
        self._set_status(STATUS_DISCONNECTED)

    def _set_status(self, status: str) -> None:
        if status not in SESSION_STATUSES:
            raise ValidationError("status", f"unknown session status: {status}")
        self.status = status
        self.updated_at = _now()
