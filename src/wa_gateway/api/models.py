"""Pydantic models for request bodies and session payloads."""

from datetime import datetime

from pydantic import BaseModel, Field

from wa_gateway.domain.sessions import Session


class CreateSessionBody(BaseModel):
    """Body for creating a session; the name rules live on ``Session.new``."""

    name: str


class PairPhoneBody(BaseModel):
    """Body for requesting a phone pairing code."""

    phone: str


class SetWebhookBody(BaseModel):
    """Body for configuring a session webhook."""

    url: str
    events: list[str] = Field(default_factory=list)


class CheckContactBody(BaseModel):
    """Body for checking phone numbers against WhatsApp."""

    phones: list[str] = Field(default_factory=list)


class SendTextBody(BaseModel):
    """Body for sending a text message."""

    phone: str
    text: str


class JoinGroupBody(BaseModel):
    invite_link: str


class LeaveGroupBody(BaseModel):
    group_jid: str


class UpdateParticipantsBody(BaseModel):
    """Body for adding or removing group participants."""

    group_jid: str
    action: str
    participants: list[str] = Field(default_factory=list)


class SessionInfo(BaseModel):
    """Public view of a session."""

    id: str
    name: str
    status: str
    device_jid: str
    webhook_url: str
    events: list[str]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_session(cls, session: Session) -> "SessionInfo":
        return cls(
            id=session.id,
            name=session.name,
            status=session.status,
            device_jid=session.device_jid,
            webhook_url=session.webhook_endpoint,
            events=list(session.webhook_events),
            created_at=session.created_at,
            updated_at=session.updated_at,
        )
