"""Contact endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request

from wa_gateway.api.dependencies import require_api_key, resolve_session
from wa_gateway.api.envelopes import success_response
from wa_gateway.api.models import CheckContactBody
from wa_gateway.domain.sessions import Session
from wa_gateway.services.contacts import CheckContactRequest, GetContactsRequest

if TYPE_CHECKING:
    from wa_gateway.containers import AppContainer

router = APIRouter(
    prefix="/contact", tags=["contacts"], dependencies=[Depends(require_api_key)]
)


@router.get("/{session}/list")
async def list_contacts(
    request: Request,
    limit: int = 0,
    offset: int = 0,
    session: Session = Depends(resolve_session),
) -> dict[str, object]:
    """Return a page of contacts."""
    container: AppContainer = request.app.state.container
    contacts = await container.contact_service.get_contacts(
        GetContactsRequest(session_id=session.id, limit=limit, offset=offset)
    )
    return success_response(contacts)


@router.post("/{session}/check")
async def check_contacts(
    body: CheckContactBody,
    request: Request,
    session: Session = Depends(resolve_session),
) -> dict[str, object]:
    """Check which phone numbers are registered on WhatsApp."""
    container: AppContainer = request.app.state.container
    result = await container.contact_service.check_contact(
        CheckContactRequest(session_id=session.id, phones=body.phones)
    )
    return success_response(result)
