"""Group endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request

from wa_gateway.api.dependencies import require_api_key, resolve_session
from wa_gateway.api.envelopes import success_response
from wa_gateway.api.models import JoinGroupBody, LeaveGroupBody, UpdateParticipantsBody
from wa_gateway.domain.sessions import Session
from wa_gateway.services.groups import ListGroupsRequest, UpdateParticipantsRequest

if TYPE_CHECKING:
    from wa_gateway.containers import AppContainer

router = APIRouter(
    prefix="/group", tags=["groups"], dependencies=[Depends(require_api_key)]
)


@router.get("/{session}/list")
async def list_groups(
    request: Request, session: Session = Depends(resolve_session)
) -> dict[str, object]:
    """Return the groups the session belongs to."""
    container: AppContainer = request.app.state.container
    groups = await container.group_service.list_groups(
        ListGroupsRequest(session_id=session.id)
    )
    return success_response(groups)


@router.get("/{session}/info")
async def group_info(
    request: Request,
    group_jid: str,
    session: Session = Depends(resolve_session),
) -> dict[str, object]:
    """Return metadata for one group."""
    container: AppContainer = request.app.state.container
    group = await container.group_service.get_group_info(session.id, group_jid)
    return success_response(group)


@router.post("/{session}/join")
async def join_group(
    body: JoinGroupBody,
    request: Request,
    session: Session = Depends(resolve_session),
) -> dict[str, object]:
    """Join a group through an invite link."""
    container: AppContainer = request.app.state.container
    group = await container.group_service.join_group(session.id, body.invite_link)
    return success_response(group)


@router.post("/{session}/leave")
async def leave_group(
    body: LeaveGroupBody,
    request: Request,
    session: Session = Depends(resolve_session),
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    await container.group_service.leave_group(session.id, body.group_jid)
    return success_response({"session_id": session.id, "group_jid": body.group_jid})


@router.post("/{session}/participants/update")
async def update_participants(
    body: UpdateParticipantsBody,
    request: Request,
    session: Session = Depends(resolve_session),
) -> dict[str, object]:
    """Add or remove group participants."""
    container: AppContainer = request.app.state.container
    result = await container.group_service.update_participants(
        UpdateParticipantsRequest(
            session_id=session.id,
            group_jid=body.group_jid,
            action=body.action,
            participants=body.participants,
        )
    )
    return success_response(result)
