"""HTTP client for the WhatsApp protocol bridge."""

from dataclasses import dataclass
from datetime import UTC, datetime
from urllib.parse import quote

import httpx

from wa_gateway.config import normalize_base_url
from wa_gateway.domain.chats import ChatMessageRecord, ChatRecord
from wa_gateway.domain.contacts import ContactRecord, UserCheckRecord
from wa_gateway.domain.groups import GroupRecord
from wa_gateway.domain.messages import SendReceipt
from wa_gateway.domain.newsletters import NewsletterRecord


def _parse_time(raw: object) -> datetime | None:
    if raw is None or raw == "":
        return None
    if isinstance(raw, int | float):
        return datetime.fromtimestamp(raw, tz=UTC)
    parsed = datetime.fromisoformat(str(raw).replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _segment(value: str) -> str:
    return quote(value, safe="")


def _group_from_payload(item: dict[str, object]) -> GroupRecord:
    return GroupRecord(
        jid=str(item.get("jid", "")),
        name=str(item.get("name", "")),
        description=str(item.get("description") or item.get("topic") or ""),
        participants=[str(p) for p in item.get("participants") or []],
        admins=[str(a) for a in item.get("admins") or []],
        owner=str(item.get("owner") or ""),
        is_announce=bool(item.get("is_announce", False)),
        is_locked=bool(item.get("is_locked", False)),
        created_at=int(item.get("created_at") or 0),
    )


def _newsletter_from_payload(item: dict[str, object]) -> NewsletterRecord:
    return NewsletterRecord(
        id=str(item.get("id", "")),
        jid=str(item.get("jid", "")),
        name=str(item.get("name", "")),
        description=str(item.get("description") or ""),
        subscriber_count=int(
            item.get("subscriber_count") or item.get("subscribers") or 0
        ),
        is_verified=bool(item.get("is_verified") or item.get("verified")),
        is_subscribed=bool(item.get("is_subscribed", False)),
        muted=bool(item.get("muted", False)),
        created_at=int(item.get("created_at") or 0),
    )


@dataclass
class HttpxBridgeClient:
    """Capability ports implemented against the bridge's JSON API."""

    base_url: str
    http_client: httpx.AsyncClient
    timeout: float = 15.0

    @classmethod
    def create(
        cls, base_url: str, token: str | None = None, timeout: float = 15.0
    ) -> "HttpxBridgeClient":
        """Create a bridge client with a managed httpx session."""
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        return cls(
            base_url=normalize_base_url(base_url),
            http_client=httpx.AsyncClient(headers=headers),
            timeout=timeout,
        )

    def _url(self, session_id: str, path: str) -> str:
        return f"{self.base_url}/sessions/{_segment(session_id)}{path}"

    async def _get(self, url: str, params: dict[str, object] | None = None) -> dict:
        response = await self.http_client.get(url, params=params, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    async def _post(self, url: str, payload: dict[str, object]) -> dict:
        response = await self.http_client.post(url, json=payload, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    async def _send(self, url: str, payload: dict[str, object]) -> None:
        response = await self.http_client.post(url, json=payload, timeout=self.timeout)
        response.raise_for_status()

    async def get_chat_history(
        self, session_id: str, chat_jid: str, limit: int, offset: int
    ) -> list[ChatMessageRecord]:
        """Fetch a page of chat messages."""
        data = await self._get(
            self._url(session_id, f"/chats/{_segment(chat_jid)}/messages"),
            params={"limit": limit, "offset": offset},
        )
        return [
            ChatMessageRecord(
                id=str(item.get("id", "")),
                chat_jid=str(item.get("chat_jid", chat_jid)),
                from_jid=str(item.get("from_jid", "")),
                content=str(item.get("content") or item.get("text") or ""),
                type=str(item.get("type", "text")),
                timestamp=_parse_time(item.get("timestamp")),
            )
            for item in data.get("messages", [])
        ]

    async def get_chats(
        self, session_id: str, limit: int, offset: int
    ) -> list[ChatRecord]:
        """Fetch a page of chats."""
        data = await self._get(
            self._url(session_id, "/chats"),
            params={"limit": limit, "offset": offset},
        )
        return [
            ChatRecord(
                jid=str(item.get("jid", "")),
                name=str(item.get("name") or ""),
                is_group=bool(item.get("is_group", False)),
                is_pinned=bool(item.get("is_pinned", False)),
                is_muted=bool(item.get("is_muted", False)),
                is_archived=bool(item.get("is_archived", False)),
                unread_count=int(item.get("unread_count") or 0),
                last_message=str(item.get("last_message") or ""),
                last_message_at=_parse_time(item.get("last_message_at")),
            )
            for item in data.get("chats", [])
        ]

    async def list_groups(self, session_id: str) -> list[GroupRecord]:
        """Fetch the groups the session belongs to."""
        data = await self._get(self._url(session_id, "/groups"))
        return [_group_from_payload(item) for item in data.get("groups", [])]

    async def get_group_info(self, session_id: str, group_jid: str) -> GroupRecord:
        """Fetch one group's metadata."""
        data = await self._get(
            self._url(session_id, f"/groups/{_segment(group_jid)}")
        )
        return _group_from_payload(data)

    async def get_contacts(
        self, session_id: str, limit: int, offset: int
    ) -> list[ContactRecord]:
        """Fetch a page of contacts."""
        data = await self._get(
            self._url(session_id, "/contacts"),
            params={"limit": limit, "offset": offset},
        )
        return [
            ContactRecord(
                jid=str(item.get("jid", "")),
                name=str(item.get("name") or ""),
                notify=str(item.get("notify") or ""),
                push_name=str(item.get("push_name") or ""),
                business_name=str(item.get("business_name") or ""),
                is_blocked=bool(item.get("is_blocked", False)),
                is_muted=bool(item.get("is_muted", False)),
                is_contact=bool(item.get("is_contact", False)),
                avatar=str(item.get("avatar") or ""),
            )
            for item in data.get("contacts", [])
        ]

    async def check_user(
        self, session_id: str, phones: list[str]
    ) -> list[UserCheckRecord]:
        """Check which phone numbers are on WhatsApp."""
        data = await self._post(
            self._url(session_id, "/contacts/check"), {"phones": phones}
        )
        return [
            UserCheckRecord(
                query=str(item.get("query", "")),
                is_in_whatsapp=bool(item.get("is_in_whatsapp", False)),
                is_in_meow=bool(item.get("is_in_meow", False)),
                jid=str(item.get("jid") or ""),
                verified_name=str(item.get("verified_name") or ""),
            )
            for item in data.get("results", [])
        ]

    async def get_subscribed_newsletters(
        self, session_id: str
    ) -> list[NewsletterRecord]:
        """Fetch newsletters the session follows."""
        data = await self._get(self._url(session_id, "/newsletters"))
        return [_newsletter_from_payload(item) for item in data.get("newsletters", [])]

    async def get_newsletter_info(
        self, session_id: str, newsletter_jid: str
    ) -> NewsletterRecord:
        """Fetch one newsletter's metadata."""
        data = await self._get(
            self._url(session_id, f"/newsletters/{_segment(newsletter_jid)}")
        )
        return _newsletter_from_payload(data)

    async def send_text_message(
        self, session_id: str, chat_jid: str, text: str
    ) -> SendReceipt:
        """Send a text message through the bridge."""
        data = await self._post(
            self._url(session_id, "/messages/text"),
            {"chat_jid": chat_jid, "text": text},
        )
        return SendReceipt(
            message_id=str(data.get("message_id") or data.get("id") or ""),
            timestamp=_parse_time(data.get("timestamp")),
        )

    async def connect_session(self, session_id: str) -> str:
        """Start the session's client; returns a QR code when pairing is needed."""
        data = await self._post(self._url(session_id, "/connect"), {})
        return str(data.get("qr_code") or "")

    async def get_qr_code(self, session_id: str) -> str:
        data = await self._get(self._url(session_id, "/qr"))
        return str(data.get("qr_code") or "")

    async def pair_phone(self, session_id: str, phone: str) -> str:
        """Request a phone pairing code."""
        data = await self._post(self._url(session_id, "/pair"), {"phone": phone})
        return str(data.get("code") or "")

    async def is_client_connected(self, session_id: str) -> bool:
        data = await self._get(self._url(session_id, "/status"))
        return bool(data.get("connected", False))

    async def disconnect_session(self, session_id: str) -> None:
        await self._send(self._url(session_id, "/disconnect"), {})

    async def logout_session(self, session_id: str) -> None:
        await self._send(self._url(session_id, "/logout"), {})

    async def join_group(self, session_id: str, invite_link: str) -> GroupRecord:
        """Join a group through an invite link."""
        data = await self._post(
            self._url(session_id, "/groups/join"), {"invite_link": invite_link}
        )
        return _group_from_payload(data)

    async def leave_group(self, session_id: str, group_jid: str) -> None:
        await self._send(
            self._url(session_id, f"/groups/{_segment(group_jid)}/leave"), {}
        )

    async def update_participants(
        self, session_id: str, group_jid: str, action: str, participants: list[str]
    ) -> None:
        """Add or remove group participants."""
        await self._send(
            self._url(session_id, f"/groups/{_segment(group_jid)}/participants"),
            {"action": action, "participants": participants},
        )

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
