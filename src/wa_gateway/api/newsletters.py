"""Newsletter endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request

from wa_gateway.api.dependencies import require_api_key, resolve_session
from wa_gateway.api.envelopes import success_response
from wa_gateway.domain.sessions import Session

if TYPE_CHECKING:
    from wa_gateway.containers import AppContainer

router = APIRouter(
    prefix="/newsletter", tags=["newsletters"], dependencies=[Depends(require_api_key)]
)


@router.get("/{session}/list")
async def list_newsletters(
    request: Request, session: Session = Depends(resolve_session)
) -> dict[str, object]:
    """Return newsletters the session follows."""
    container: AppContainer = request.app.state.container
    newsletters = await container.newsletter_service.list_newsletters(session.id)
    return success_response(newsletters)


@router.get("/{session}/info")
async def newsletter_info(
    request: Request,
    newsletter_jid: str,
    session: Session = Depends(resolve_session),
) -> dict[str, object]:
    """Return metadata for one newsletter."""
    container: AppContainer = request.app.state.container
    newsletter = await container.newsletter_service.get_newsletter_info(
        session.id, newsletter_jid
    )
    return success_response(newsletter)
