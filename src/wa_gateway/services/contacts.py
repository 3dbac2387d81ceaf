"""Contact listing and WhatsApp presence checks."""

from dataclasses import dataclass
from typing import Protocol

from wa_gateway.domain.contacts import ContactRecord, UserCheckRecord
from wa_gateway.domain.errors import OperationError, ValidationError
from wa_gateway.services.pagination import clamp_limit
from wa_gateway.services.sessions import SessionRepository

DEFAULT_CONTACTS_LIMIT = 100


class ContactManager(Protocol):
    """Contact operations offered by the protocol bridge."""

    async def get_contacts(
        self, session_id: str, limit: int, offset: int
    ) -> list[ContactRecord]:
        """Return stored contacts."""

    async def check_user(
        self, session_id: str, phones: list[str]
    ) -> list[UserCheckRecord]:
        """Check which phone numbers are registered on WhatsApp."""


@dataclass(frozen=True)
class GetContactsRequest:
    session_id: str
    limit: int = 0
    offset: int = 0


@dataclass(frozen=True)
class ContactView:
    jid: str
    name: str
    notify: str
    push_name: str
    business_name: str
    is_blocked: bool
    is_muted: bool
    is_contact: bool
    avatar: str


@dataclass(frozen=True)
class ContactList:
    session_id: str
    contacts: list[ContactView]
    total: int
    limit: int
    offset: int


@dataclass(frozen=True)
class CheckContactRequest:
    session_id: str
    phones: list[str]


@dataclass(frozen=True)
class ContactCheckView:
    query: str
    is_in_whatsapp: bool
    is_in_meow: bool
    jid: str
    verified_name: str


@dataclass(frozen=True)
class ContactCheck:
    session_id: str
    results: list[ContactCheckView]


@dataclass
class ContactService:
    """Shapes contact data from the bridge into response views."""

    repository: SessionRepository
    contact_manager: ContactManager

    async def get_contacts(self, request: GetContactsRequest) -> ContactList:
        """Return a page of contacts."""
        limit = clamp_limit(request.limit, DEFAULT_CONTACTS_LIMIT)
        try:
            records = await self.contact_manager.get_contacts(
                request.session_id, limit, request.offset
            )
        except Exception as exc:
            raise OperationError("get contacts", exc) from exc

        contacts = [
            ContactView(
                jid=record.jid,
                name=record.name,
                notify=record.notify,
                push_name=record.push_name,
                business_name=record.business_name,
                is_blocked=record.is_blocked,
                is_muted=record.is_muted,
                is_contact=record.is_contact,
                avatar=record.avatar,
            )
            for record in records
        ]
        return ContactList(
            session_id=request.session_id,
            contacts=contacts,
            total=len(contacts),
            limit=limit,
            offset=request.offset,
        )

    async def check_contact(self, request: CheckContactRequest) -> ContactCheck:
        """Check a batch of phone numbers; all results or an error."""
        if not request.phones:
            raise ValidationError("phones", "at least one phone number is required")
        try:
            records = await self.contact_manager.check_user(
                request.session_id, list(request.phones)
            )
        except Exception as exc:
            raise OperationError("check contacts", exc) from exc

        return ContactCheck(
            session_id=request.session_id,
            results=[
                ContactCheckView(
                    query=record.query,
                    is_in_whatsapp=record.is_in_whatsapp,
                    is_in_meow=record.is_in_meow,
                    jid=record.jid,
                    verified_name=record.verified_name,
                )
                for record in records
            ],
        )
