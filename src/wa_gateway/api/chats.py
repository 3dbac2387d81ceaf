"""Chat endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request

from wa_gateway.api.dependencies import require_api_key, resolve_session
from wa_gateway.api.envelopes import success_response
from wa_gateway.domain.sessions import Session
from wa_gateway.services.chats import GetChatHistoryRequest, ListChatsRequest

if TYPE_CHECKING:
    from wa_gateway.containers import AppContainer

router = APIRouter(
    prefix="/chat", tags=["chats"], dependencies=[Depends(require_api_key)]
)


@router.get("/{session}/history")
async def chat_history(
    request: Request,
    phone: str,
    limit: int = 0,
    offset: int = 0,
    session: Session = Depends(resolve_session),
) -> dict[str, object]:
    """Return message history for a phone number or chat JID."""
    container: AppContainer = request.app.state.container
    history = await container.chat_service.get_chat_history(
        GetChatHistoryRequest(
            session_id=session.id, phone=phone, limit=limit, offset=offset
        )
    )
    return success_response(history)


@router.get("/{session}/list")
async def list_chats(
    request: Request,
    limit: int = 0,
    offset: int = 0,
    session: Session = Depends(resolve_session),
) -> dict[str, object]:
    """Return a page of chats."""
    container: AppContainer = request.app.state.container
    chats = await container.chat_service.list_chats(
        ListChatsRequest(session_id=session.id, limit=limit, offset=offset)
    )
    return success_response(chats)
