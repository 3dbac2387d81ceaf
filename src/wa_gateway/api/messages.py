"""Message sending endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request

from wa_gateway.api.dependencies import require_api_key, resolve_session
from wa_gateway.api.envelopes import success_response
from wa_gateway.api.models import SendTextBody
from wa_gateway.domain.sessions import Session
from wa_gateway.services.messages import SendTextRequest

if TYPE_CHECKING:
    from wa_gateway.containers import AppContainer

router = APIRouter(
    prefix="/message", tags=["messages"], dependencies=[Depends(require_api_key)]
)


@router.post("/{session}/send/text")
async def send_text(
    body: SendTextBody,
    request: Request,
    session: Session = Depends(resolve_session),
) -> dict[str, object]:
    """Send a text message to a phone number or chat JID."""
    container: AppContainer = request.app.state.container
    result = await container.message_service.send_text(
        SendTextRequest(session_id=session.id, phone=body.phone, text=body.text)
    )
    return success_response(result)
