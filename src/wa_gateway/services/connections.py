"""Session connection lifecycle: connect, QR pairing, status, disconnect."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from wa_gateway.domain.errors import (
    OperationError,
    SessionStateError,
    ValidationError,
)
from wa_gateway.domain.sessions import Session
from wa_gateway.services.sessions import SessionRepository

logger = logging.getLogger(__name__)

_PAIR_PHONE_MIN_LENGTH = 10
_PAIR_PHONE_MAX_LENGTH = 15


class SessionManager(Protocol):
    """Client lifecycle operations offered by the protocol bridge."""

    async def connect_session(self, session_id: str) -> str:
        """Start the client and return a QR code, or "" when already paired."""

    async def get_qr_code(self, session_id: str) -> str:
        """Return the current pairing QR code."""

    async def pair_phone(self, session_id: str, phone: str) -> str:
        """Return a pairing code for linking by phone number."""

    async def is_client_connected(self, session_id: str) -> bool:
        """Return True when the client holds a live connection."""

    async def disconnect_session(self, session_id: str) -> None:
        """Stop the client but keep the linked device."""

    async def logout_session(self, session_id: str) -> None:
        """Stop the client and unlink the device."""


@dataclass(frozen=True)
class ConnectResult:
    session_id: str
    status: str
    qr_code: str


@dataclass(frozen=True)
class PairPhoneResult:
    session_id: str
    phone: str
    code: str


@dataclass(frozen=True)
class SessionStatusView:
    session_id: str
    name: str
    session_status: str
    client_status: str
    is_connected: bool
    is_authenticated: bool
    has_webhook: bool
    device_jid: str
    qr_code: str
    created_at: datetime
    updated_at: datetime


@dataclass
class ConnectionService:
    """Drives a session's client through the bridge and records its status.

    Bridge failures during connect and pair mark the session as errored
    before the wrapped error propagates.
    """

    repository: SessionRepository
    session_manager: SessionManager

    async def connect(self, session_id: str) -> ConnectResult:
        session = self.repository.get_by_id(session_id)
        if not session.can_connect():
            raise SessionStateError(session.id, session.status, "connect")
        try:
            qr_code = await self.session_manager.connect_session(session.id)
        except Exception as exc:
            self._record_failure(session)
            raise OperationError("connect session", exc) from exc

        session.mark_connecting()
        if not qr_code and not session.is_authenticated():
            qr_code = await self._current_qr_code(session.id)
        self.repository.update(session)
        logger.info(
            "Session connection started",
            extra={"session_id": session.id, "has_qr_code": bool(qr_code)},
        )
        return ConnectResult(session_id=session.id, status=session.status, qr_code=qr_code)

    async def get_qr_code(self, session_id: str) -> str:
        """Return the pairing QR code for a session that is not yet linked."""
        session = self.repository.get_by_id(session_id)
        if session.is_authenticated():
            raise SessionStateError(session.id, session.status, "show a QR code")
        try:
            return await self.session_manager.get_qr_code(session.id)
        except Exception as exc:
            raise OperationError("get QR code", exc) from exc

    async def pair_phone(self, session_id: str, phone: str) -> PairPhoneResult:
        """Request a phone pairing code as an alternative to scanning a QR code."""
        phone = phone.strip()
        if not phone:
            raise ValidationError("phone", "phone number is required")
        if not _PAIR_PHONE_MIN_LENGTH <= len(phone) <= _PAIR_PHONE_MAX_LENGTH:
            raise ValidationError(
                "phone",
                f"phone number must be between {_PAIR_PHONE_MIN_LENGTH} and "
                f"{_PAIR_PHONE_MAX_LENGTH} digits",
            )
        session = self.repository.get_by_id(session_id)
        if not session.can_connect():
            raise SessionStateError(session.id, session.status, "pair")
        try:
            code = await self.session_manager.pair_phone(session.id, phone)
        except Exception as exc:
            self._record_failure(session)
            raise OperationError("pair phone", exc) from exc
        logger.info("Phone pairing requested", extra={"session_id": session.id})
        return PairPhoneResult(session_id=session.id, phone=phone, code=code)

    async def get_status(self, session_id: str) -> SessionStatusView:
        session = self.repository.get_by_id(session_id)
        try:
            live = await self.session_manager.is_client_connected(session.id)
        except Exception as exc:
            raise OperationError("get session status", exc) from exc

        qr_code = ""
        if not live and not session.is_authenticated() and session.can_connect():
            qr_code = await self._current_qr_code(session.id)
        return SessionStatusView(
            session_id=session.id,
            name=session.name,
            session_status=session.status,
            client_status="connected" if live else "disconnected",
            is_connected=session.is_connected(),
            is_authenticated=session.is_authenticated(),
            has_webhook=session.has_webhook(),
            device_jid=session.device_jid,
            qr_code=qr_code,
            created_at=session.created_at,
            updated_at=session.updated_at,
        )

    async def disconnect(self, session_id: str) -> Session:
        """Stop the client; already-disconnected sessions are returned unchanged."""
        session = self.repository.get_by_id(session_id)
        if session.is_disconnected():
            return session
        try:
            await self.session_manager.disconnect_session(session.id)
        except Exception as exc:
            raise OperationError("disconnect session", exc) from exc
        session.mark_disconnected()
        self.repository.update(session)
        logger.info("Session disconnected", extra={"session_id": session.id})
        return session

    async def logout(self, session_id: str) -> Session:
        """Stop the client and unlink its device."""
        session = self.repository.get_by_id(session_id)
        try:
            await self.session_manager.logout_session(session.id)
        except Exception as exc:
            raise OperationError("logout session", exc) from exc
        session.unlink_device()
        self.repository.update(session)
        logger.info("Session logged out", extra={"session_id": session.id})
        return session

    async def _current_qr_code(self, session_id: str) -> str:
        try:
            return await self.session_manager.get_qr_code(session_id)
        except Exception:
            logger.warning("QR code lookup failed", extra={"session_id": session_id})
            return ""

    def _record_failure(self, session: Session) -> None:
        session.mark_error()
        try:
            self.repository.update(session)
        except Exception:
            logger.exception(
                "Failed to record session error", extra={"session_id": session.id}
            )
