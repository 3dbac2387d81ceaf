"""Session management endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request, status

from wa_gateway.api.dependencies import require_api_key, resolve_session
from wa_gateway.api.envelopes import (
    QRCode,
    SessionList,
    SingleSession,
    session_response,
    success_response,
)
from wa_gateway.api.models import CreateSessionBody, PairPhoneBody, SessionInfo
from wa_gateway.domain.sessions import Session
from wa_gateway.services.sessions import CreateSessionRequest

if TYPE_CHECKING:
    from wa_gateway.containers import AppContainer

router = APIRouter(
    prefix="/sessions", tags=["sessions"], dependencies=[Depends(require_api_key)]
)


@router.post("/create", status_code=status.HTTP_201_CREATED)
async def create_session(body: CreateSessionBody, request: Request) -> dict[str, object]:
    """Create a session and return the stored record."""
    container: AppContainer = request.app.state.container
    session = container.session_service.create_session(
        CreateSessionRequest(name=body.name)
    )
    return session_response(
        session.id,
        "create",
        SingleSession(SessionInfo.from_session(session)),
        code=status.HTTP_201_CREATED,
    )


@router.get("/list")
async def list_sessions(request: Request) -> dict[str, object]:
    """Return every session."""
    container: AppContainer = request.app.state.container
    sessions = container.session_service.get_all_sessions()
    return session_response(
        "",
        "list",
        SessionList([SessionInfo.from_session(session) for session in sessions]),
    )


@router.get("/{session}/info")
async def session_info(
    session: Session = Depends(resolve_session),
) -> dict[str, object]:
    """Return one session resolved by id or name."""
    return session_response(
        session.id, "info", SingleSession(SessionInfo.from_session(session))
    )


@router.delete("/{session}")
async def delete_session(
    request: Request, session: Session = Depends(resolve_session)
) -> dict[str, object]:
    """Delete a session resolved by id or name."""
    container: AppContainer = request.app.state.container
    container.session_service.delete_session(session.id)
    return session_response(
        session.id, "delete", SingleSession(SessionInfo.from_session(session))
    )


@router.post("/{session}/connect")
async def connect_session(
    request: Request, session: Session = Depends(resolve_session)
) -> dict[str, object]:
    """Start the session's client; the response carries a QR code when unpaired."""
    container: AppContainer = request.app.state.container
    result = await container.connection_service.connect(session.id)
    return success_response(result)


@router.get("/{session}/qr")
async def session_qr_code(
    request: Request, session: Session = Depends(resolve_session)
) -> dict[str, object]:
    """Return the pairing QR code."""
    container: AppContainer = request.app.state.container
    code = await container.connection_service.get_qr_code(session.id)
    return session_response(session.id, "qr", QRCode(code))


@router.post("/{session}/pair")
async def pair_phone(
    body: PairPhoneBody,
    request: Request,
    session: Session = Depends(resolve_session),
) -> dict[str, object]:
    """Request a pairing code for linking by phone number."""
    container: AppContainer = request.app.state.container
    result = await container.connection_service.pair_phone(session.id, body.phone)
    return success_response(result)


@router.get("/{session}/status")
async def session_status(
    request: Request, session: Session = Depends(resolve_session)
) -> dict[str, object]:
    """Return stored and live connection status."""
    container: AppContainer = request.app.state.container
    view = await container.connection_service.get_status(session.id)
    return success_response(view)


@router.post("/{session}/disconnect")
async def disconnect_session(
    request: Request, session: Session = Depends(resolve_session)
) -> dict[str, object]:
    """Stop the session's client, keeping the linked device."""
    container: AppContainer = request.app.state.container
    updated = await container.connection_service.disconnect(session.id)
    return session_response(
        updated.id, "disconnect", SingleSession(SessionInfo.from_session(updated))
    )


@router.post("/{session}/logout")
async def logout_session(
    request: Request, session: Session = Depends(resolve_session)
) -> dict[str, object]:
    """Stop the session's client and unlink its device."""
    container: AppContainer = request.app.state.container
    updated = await container.connection_service.logout(session.id)
    return session_response(
        updated.id, "logout", SingleSession(SessionInfo.from_session(updated))
    )
