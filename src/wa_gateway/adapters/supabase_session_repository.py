"""Supabase-backed session repository."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from wa_gateway.domain.errors import SessionNotFoundError
from wa_gateway.domain.sessions import Session, parse_status
from wa_gateway.services.sessions import SessionRepository

_TABLE = "sessions"
_COLUMNS = (
    "id, name, status, device_jid, webhook_url, webhook_events, "
    "created_at, updated_at"
)


def _parse_events(raw: object) -> list[str]:
    if not raw:
        return []
    if isinstance(raw, list):
        return [str(event) for event in raw]
    return [event.strip() for event in str(raw).split(",") if event.strip()]


def _parse_timestamp(raw: object) -> datetime:
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw.replace("Z", "+00:00"))
    return datetime.now(tz=UTC)


def _row_to_session(row: dict[str, object]) -> Session:
    return Session(
        id=str(row["id"]),
        name=str(row["name"]),
        status=parse_status(row.get("status")),
        device_jid=str(row.get("device_jid") or ""),
        webhook_endpoint=str(row.get("webhook_url") or ""),
        webhook_events=_parse_events(row.get("webhook_events")),
        created_at=_parse_timestamp(row.get("created_at")),
        updated_at=_parse_timestamp(row.get("updated_at")),
    )


@dataclass
class SupabaseSessionRepository(SessionRepository):
    """Supabase implementation for WhatsApp sessions."""

    client: Client

    def get_by_id(self, session_id: str) -> Session:
        """Return a session by id."""
        response = (
            self.client.table(_TABLE)
            .select(_COLUMNS)
            .eq("id", session_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            raise SessionNotFoundError(session_id)
        return _row_to_session(response.data[0])

    def get_by_name(self, name: str) -> Session:
        """Return a session by name."""
        response = (
            self.client.table(_TABLE)
            .select(_COLUMNS)
            .eq("name", name)
            .limit(1)
            .execute()
        )
        if not response.data:
            raise SessionNotFoundError(name)
        return _row_to_session(response.data[0])

    def get_all(self) -> list[Session]:
        """Return every session row."""
        response = self.client.table(_TABLE).select(_COLUMNS).execute()
        return [_row_to_session(row) for row in response.data or []]

    def create_with_generated_id(self, session: Session) -> str:
        """Insert a session row and return the database-generated id."""
        response = (
            self.client.table(_TABLE)
            .insert(
                {
                    "name": session.name,
                    "status": session.status,
                    "device_jid": session.device_jid or None,
                    "webhook_url": session.webhook_endpoint or None,
                    "webhook_events": ",".join(session.webhook_events),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create session")
        return str(response.data[0]["id"])

    def update(self, session: Session) -> None:
        """Write the mutable session fields back to the row."""
        self.client.table(_TABLE).update(
            {
                "name": session.name,
                "status": session.status,
                "device_jid": session.device_jid or None,
                "webhook_url": session.webhook_endpoint or None,
                "webhook_events": ",".join(session.webhook_events),
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).eq("id", session.id).execute()

    def delete(self, session_id: str) -> None:
        """Delete a session row."""
        response = self.client.table(_TABLE).delete().eq("id", session_id).execute()
        if not response.data:
            raise SessionNotFoundError(session_id)
