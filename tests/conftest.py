"""Shared test fixtures."""

import copy
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

import pytest

from wa_gateway.config import Settings
from wa_gateway.containers import AppContainer
from wa_gateway.domain.chats import ChatMessageRecord, ChatRecord
from wa_gateway.domain.contacts import ContactRecord, UserCheckRecord
from wa_gateway.domain.errors import SessionNotFoundError
from wa_gateway.domain.groups import GroupRecord
from wa_gateway.domain.messages import SendReceipt
from wa_gateway.domain.newsletters import NewsletterRecord
from wa_gateway.domain.sessions import Session
from wa_gateway.services.chats import ChatService
from wa_gateway.services.connections import ConnectionService
from wa_gateway.services.contacts import ContactService
from wa_gateway.services.groups import GroupService
from wa_gateway.services.messages import MessageService
from wa_gateway.services.newsletters import NewsletterService
from wa_gateway.services.sessions import SessionRepository, SessionService
from wa_gateway.services.webhooks import WebhookService


@dataclass
class InMemorySessionRepository(SessionRepository):
    """In-memory session repository that records every call.

    Lookups return copies, like a database-backed repository would.
    """

    sessions: dict[str, Session] = field(default_factory=dict)
    calls: list[tuple[str, str]] = field(default_factory=list)
    fail_update: Exception | None = None

    def add(self, name: str, session_id: str | None = None) -> Session:
        session = Session(id=session_id or str(uuid4()), name=name)
        self.sessions[session.id] = session
        return session

    def get_by_id(self, session_id: str) -> Session:
        self.calls.append(("get_by_id", session_id))
        session = self.sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return copy.deepcopy(session)

    def get_by_name(self, name: str) -> Session:
        self.calls.append(("get_by_name", name))
        for session in self.sessions.values():
            if session.name == name:
                return copy.deepcopy(session)
        raise SessionNotFoundError(name)

    def get_all(self) -> list[Session]:
        self.calls.append(("get_all", ""))
        return list(self.sessions.values())

    def create_with_generated_id(self, session: Session) -> str:
        self.calls.append(("create_with_generated_id", session.name))
        session.id = str(uuid4())
        self.sessions[session.id] = session
        return session.id

    def update(self, session: Session) -> None:
        self.calls.append(("update", session.id))
        if self.fail_update is not None:
            raise self.fail_update
        self.sessions[session.id] = copy.deepcopy(session)

    def delete(self, session_id: str) -> None:
        self.calls.append(("delete", session_id))
        if self.sessions.pop(session_id, None) is None:
            raise SessionNotFoundError(session_id)


@dataclass
class FakeBridgeClient:
    """Fake protocol bridge implementing every capability port."""

    messages: list[ChatMessageRecord] = field(default_factory=list)
    chats: list[ChatRecord] = field(default_factory=list)
    groups: list[GroupRecord] = field(default_factory=list)
    contacts: list[ContactRecord] = field(default_factory=list)
    newsletters: list[NewsletterRecord] = field(default_factory=list)
    calls: list[tuple[object, ...]] = field(default_factory=list)
    error: BaseException | None = None
    connect_qr_code: str = ""
    qr_code: str = "2@qr-payload"
    qr_error: Exception | None = None
    connected: bool = False
    receipt_timestamp: datetime | None = datetime(2024, 1, 1, tzinfo=UTC)

    def _record(self, *call: object) -> None:
        self.calls.append(call)
        if self.error is not None:
            raise self.error

    async def get_chat_history(
        self, session_id: str, chat_jid: str, limit: int, offset: int
    ) -> list[ChatMessageRecord]:
        self._record("get_chat_history", session_id, chat_jid, limit, offset)
        return self.messages

    async def get_chats(
        self, session_id: str, limit: int, offset: int
    ) -> list[ChatRecord]:
        self._record("get_chats", session_id, limit, offset)
        return self.chats

    async def list_groups(self, session_id: str) -> list[GroupRecord]:
        self._record("list_groups", session_id)
        return self.groups

    async def get_group_info(self, session_id: str, group_jid: str) -> GroupRecord:
        self._record("get_group_info", session_id, group_jid)
        for group in self.groups:
            if group.jid == group_jid:
                return group
        raise LookupError(group_jid)

    async def join_group(self, session_id: str, invite_link: str) -> GroupRecord:
        self._record("join_group", session_id, invite_link)
        return GroupRecord(jid="1203@g.us", name="Joined")

    async def leave_group(self, session_id: str, group_jid: str) -> None:
        self._record("leave_group", session_id, group_jid)

    async def update_participants(
        self, session_id: str, group_jid: str, action: str, participants: list[str]
    ) -> None:
        self._record(
            "update_participants", session_id, group_jid, action, tuple(participants)
        )

    async def connect_session(self, session_id: str) -> str:
        self._record("connect_session", session_id)
        return self.connect_qr_code

    async def get_qr_code(self, session_id: str) -> str:
        self.calls.append(("get_qr_code", session_id))
        if self.qr_error is not None:
            raise self.qr_error
        return self.qr_code

    async def pair_phone(self, session_id: str, phone: str) -> str:
        self._record("pair_phone", session_id, phone)
        return "ABCD-EFGH"

    async def is_client_connected(self, session_id: str) -> bool:
        self._record("is_client_connected", session_id)
        return self.connected

    async def disconnect_session(self, session_id: str) -> None:
        self._record("disconnect_session", session_id)

    async def logout_session(self, session_id: str) -> None:
        self._record("logout_session", session_id)

    async def get_contacts(
        self, session_id: str, limit: int, offset: int
    ) -> list[ContactRecord]:
        self._record("get_contacts", session_id, limit, offset)
        return self.contacts

    async def check_user(
        self, session_id: str, phones: list[str]
    ) -> list[UserCheckRecord]:
        self._record("check_user", session_id, tuple(phones))
        return [
            UserCheckRecord(
                query=phone,
                is_in_whatsapp=True,
                is_in_meow=False,
                jid=f"{phone}@s.whatsapp.net",
            )
            for phone in phones
        ]

    async def get_subscribed_newsletters(
        self, session_id: str
    ) -> list[NewsletterRecord]:
        self._record("get_subscribed_newsletters", session_id)
        return self.newsletters

    async def get_newsletter_info(
        self, session_id: str, newsletter_jid: str
    ) -> NewsletterRecord:
        self._record("get_newsletter_info", session_id, newsletter_jid)
        for newsletter in self.newsletters:
            if newsletter.jid == newsletter_jid:
                return newsletter
        raise LookupError(newsletter_jid)

    async def send_text_message(
        self, session_id: str, chat_jid: str, text: str
    ) -> SendReceipt:
        self._record("send_text_message", session_id, chat_jid, text)
        return SendReceipt(
            message_id="3EB0C767D26A",
            timestamp=self.receipt_timestamp,
        )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        api_key="api-key",
        bridge_base_url="http://bridge.local/",
    )


@pytest.fixture
def session_repository() -> InMemorySessionRepository:
    return InMemorySessionRepository()


@pytest.fixture
def bridge_client() -> FakeBridgeClient:
    return FakeBridgeClient()


@pytest.fixture
def container(
    settings: Settings,
    session_repository: InMemorySessionRepository,
    bridge_client: FakeBridgeClient,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        session_service=SessionService(session_repository),
        connection_service=ConnectionService(session_repository, bridge_client),
        webhook_service=WebhookService(session_repository),
        chat_service=ChatService(session_repository, bridge_client),
        group_service=GroupService(session_repository, bridge_client),
        contact_service=ContactService(session_repository, bridge_client),
        newsletter_service=NewsletterService(session_repository, bridge_client),
        message_service=MessageService(session_repository, bridge_client),
        close_resources=close_resources,
    )
