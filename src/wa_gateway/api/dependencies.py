"""Shared FastAPI dependencies."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Depends, Header, HTTPException, Request, status

from wa_gateway.domain.sessions import Session

if TYPE_CHECKING:
    from wa_gateway.containers import AppContainer


def _get_api_key(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.api_key


async def require_api_key(
    x_api_key: str | None = Header(default=None),
    api_key: str = Depends(_get_api_key),
) -> None:
    """Ensure requests include the configured API key."""
    if not x_api_key or x_api_key != api_key:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


def resolve_session(session: str, request: Request) -> Session:
    """Resolve the ``{session}`` path parameter by id or name."""
    container: AppContainer = request.app.state.container
    return container.session_service.get_session(session)
