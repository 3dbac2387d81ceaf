"""Webhook configuration endpoints."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from wa_gateway.api.dependencies import require_api_key, resolve_session
from wa_gateway.api.envelopes import error_response, success_response
from wa_gateway.api.models import SetWebhookBody
from wa_gateway.domain.events import is_known_event
from wa_gateway.domain.sessions import Session

if TYPE_CHECKING:
    from wa_gateway.containers import AppContainer

router = APIRouter(tags=["webhooks"], dependencies=[Depends(require_api_key)])


@router.post(
    "/session/{session}/webhook",
    status_code=status.HTTP_201_CREATED,
    response_model=None,
)
async def set_webhook(
    body: SetWebhookBody,
    request: Request,
    session: Session = Depends(resolve_session),
) -> JSONResponse | dict[str, object]:
    """Set the webhook URL and subscribed events for a session."""
    container: AppContainer = request.app.state.container
    for event in body.events:
        if not is_known_event(event):
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content=error_response(
                    status.HTTP_400_BAD_REQUEST,
                    "INVALID_EVENT",
                    f"Invalid event type: {event}",
                ),
            )
    if not body.events:
        catalog = ", ".join(container.webhook_service.list_events())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_response(
                status.HTTP_400_BAD_REQUEST,
                "INVALID_EVENTS",
                f"No valid events provided. Valid events include: {catalog}",
            ),
        )

    container.webhook_service.set_webhook(session.id, body.url, body.events)
    return success_response(
        {
            "session_id": session.id,
            "url": body.url.strip(),
            "events": body.events,
            "status": "active",
            "created_at": datetime.now(tz=UTC).isoformat(),
        },
        code=status.HTTP_201_CREATED,
    )


@router.get("/session/{session}/webhook")
async def get_webhook(
    request: Request, session: Session = Depends(resolve_session)
) -> dict[str, object]:
    """Return the webhook configuration for a session."""
    container: AppContainer = request.app.state.container
    config = container.webhook_service.get_webhook(session.id)
    return success_response(
        {
            "session_id": session.id,
            "webhook_url": config.url,
            "events": config.events,
        }
    )


@router.get("/webhook/events")
async def list_events(request: Request) -> dict[str, object]:
    """Return every event name a webhook may subscribe to."""
    container: AppContainer = request.app.state.container
    events = list(container.webhook_service.list_events())
    return success_response({"events": events, "count": len(events)})
