"""Session lookup and lifecycle orchestration."""

import logging
import re
from dataclasses import dataclass
from typing import Protocol

from wa_gateway.domain.errors import FeatureNotImplementedError
from wa_gateway.domain.sessions import Session

logger = logging.getLogger(__name__)

_UUID_PATTERN = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
)


class SessionRepository(Protocol):
    """Persistence interface for sessions."""

    def get_by_id(self, session_id: str) -> Session:
        """Return the session with this id or raise SessionNotFoundError."""

    def get_by_name(self, name: str) -> Session:
        """Return the session with this name or raise SessionNotFoundError."""

    def get_all(self) -> list[Session]:
        """Return every stored session."""

    def create_with_generated_id(self, session: Session) -> str:
        """Persist a new session and return the id assigned to it."""

    def update(self, session: Session) -> None:
        """Persist changes to an existing session."""

    def delete(self, session_id: str) -> None:
        """Delete a session by id."""


@dataclass(frozen=True)
class CreateSessionRequest:
    """Input for creating a session."""

    name: str
    session_id: str = ""


def looks_like_uuid(value: str) -> bool:
    """Return True for canonical 8-4-4-4-12 hex identifiers."""
    return _UUID_PATTERN.match(value) is not None


@dataclass
class SessionService:
    """Resolves sessions by id or name and manages their lifecycle."""

    repository: SessionRepository

    def get_session(self, identifier: str) -> Session:
        """Resolve an id or a name to a session.

        UUID-shaped identifiers are tried as ids first, everything else as
        names first. When the first lookup fails for any reason the other
        namespace is tried, and its error is the one that propagates.
        """
        if looks_like_uuid(identifier):
            primary, fallback = self.repository.get_by_id, self.repository.get_by_name
        else:
            primary, fallback = self.repository.get_by_name, self.repository.get_by_id
        try:
            return primary(identifier)
        except Exception:
            logger.debug(
                "Primary session lookup failed, trying fallback",
                extra={"identifier": identifier},
            )
        return fallback(identifier)

    def get_all_sessions(self) -> list[Session]:
        """Return all sessions in repository order."""
        return self.repository.get_all()

    def create_session(self, request: CreateSessionRequest) -> Session:
        """Create a session and return the stored record."""
        session = Session.new(request.name)
        generated_id = self.repository.create_with_generated_id(session)
        created = self.repository.get_by_id(generated_id)
        logger.info(
            "Session created",
            extra={"session_id": created.id, "session_name": created.name},
        )
        return created

    def delete_session(self, session_id: str) -> None:
        """Delete a session by id."""
        self.repository.delete(session_id)
        logger.info("Session deleted", extra={"session_id": session_id})

    def get_session_by_device_jid(self, device_jid: str) -> Session:
        """Lookup by device JID has no backing index."""
        raise FeatureNotImplementedError("get_session_by_device_jid")
