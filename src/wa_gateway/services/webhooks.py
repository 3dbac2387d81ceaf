"""Webhook configuration for sessions."""

import logging
from dataclasses import dataclass

from wa_gateway.domain.events import EVENT_CATALOG
from wa_gateway.services.sessions import SessionRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WebhookConfig:
    """Webhook endpoint and subscribed events for one session."""

    url: str
    events: list[str]


@dataclass
class WebhookService:
    """Reads and writes a session's webhook configuration."""

    repository: SessionRepository

    def set_webhook(self, session_id: str, url: str, events: list[str]) -> None:
        """Set the endpoint and events, then persist with a single update.

        Event names are stored as given. A failed update leaves the stored
        session untouched.
        """
        session = self.repository.get_by_id(session_id)
        session.set_webhook_endpoint(url)
        session.set_webhook_events(events)
        self.repository.update(session)
        logger.info(
            "Webhook updated",
            extra={"session_id": session_id, "event_count": len(events)},
        )

    def get_webhook(self, session_id: str) -> WebhookConfig:
        """Return the session's webhook URL.

        The event list is always empty; stored subscriptions are not read back.
        """
        session = self.repository.get_by_id(session_id)
        return WebhookConfig(url=session.webhook_endpoint, events=[])

    def list_events(self) -> tuple[str, ...]:
        """Return every event name a webhook can subscribe to."""
        return EVENT_CATALOG
