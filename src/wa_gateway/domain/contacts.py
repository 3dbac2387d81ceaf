"""Domain models for contacts."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ContactRecord:
    """A contact stored on the linked device."""

    jid: str
    name: str = ""
    notify: str = ""
    push_name: str = ""
    business_name: str = ""
    is_blocked: bool = False
    is_muted: bool = False
    is_contact: bool = False
    avatar: str = ""


@dataclass(frozen=True)
class UserCheckRecord:
    """Result of checking whether a phone number is on WhatsApp."""

    query: str
    is_in_whatsapp: bool
    is_in_meow: bool
    jid: str
    verified_name: str = ""
