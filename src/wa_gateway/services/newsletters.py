"""Newsletter (channel) listing and lookup."""

from dataclasses import dataclass
from typing import Protocol

from wa_gateway.domain.errors import OperationError, ValidationError
from wa_gateway.domain.jids import to_newsletter_jid
from wa_gateway.domain.newsletters import NewsletterRecord
from wa_gateway.services.sessions import SessionRepository


class NewsletterManager(Protocol):
    """Newsletter operations offered by the protocol bridge."""

    async def get_subscribed_newsletters(
        self, session_id: str
    ) -> list[NewsletterRecord]:
        """Return newsletters the session follows."""

    async def get_newsletter_info(
        self, session_id: str, newsletter_jid: str
    ) -> NewsletterRecord:
        """Return metadata for one newsletter."""


@dataclass(frozen=True)
class NewsletterView:
    jid: str
    name: str
    description: str
    subscriber_count: int
    is_verified: bool
    is_subscribed: bool
    muted: bool
    created_at: str


@dataclass(frozen=True)
class NewsletterList:
    session_id: str
    newsletters: list[NewsletterView]
    count: int


def _to_view(record: NewsletterRecord) -> NewsletterView:
    return NewsletterView(
        jid=record.jid or record.id,
        name=record.name,
        description=record.description,
        subscriber_count=record.subscriber_count,
        is_verified=record.is_verified,
        is_subscribed=record.is_subscribed,
        muted=record.muted,
        created_at=str(record.created_at),
    )


@dataclass
class NewsletterService:
    """Shapes newsletter data from the bridge into response views."""

    repository: SessionRepository
    newsletter_manager: NewsletterManager

    async def list_newsletters(self, session_id: str) -> NewsletterList:
        try:
            records = await self.newsletter_manager.get_subscribed_newsletters(
                session_id
            )
        except Exception as exc:
            raise OperationError("list newsletters", exc) from exc
        views = [_to_view(record) for record in records]
        return NewsletterList(session_id=session_id, newsletters=views, count=len(views))

    async def get_newsletter_info(
        self, session_id: str, newsletter_jid: str
    ) -> NewsletterView:
        if not newsletter_jid.strip():
            raise ValidationError("newsletter_jid", "newsletter JID is required")
        newsletter_jid = to_newsletter_jid(newsletter_jid.strip())
        try:
            record = await self.newsletter_manager.get_newsletter_info(
                session_id, newsletter_jid
            )
        except Exception as exc:
            raise OperationError("get newsletter info", exc) from exc
        return _to_view(record)
