"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from wa_gateway.api.chats import router as chats_router
from wa_gateway.api.contacts import router as contacts_router
from wa_gateway.api.envelopes import error_response
from wa_gateway.api.groups import router as groups_router
from wa_gateway.api.messages import router as messages_router
from wa_gateway.api.newsletters import router as newsletters_router
from wa_gateway.api.sessions import router as sessions_router
from wa_gateway.api.webhooks import router as webhooks_router
from wa_gateway.app_logging import configure_logging
from wa_gateway.containers import AppContainer
from wa_gateway.domain.errors import (
    FeatureNotImplementedError,
    GatewayError,
    OperationError,
    SessionNotFoundError,
    SessionStateError,
    ValidationError,
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(sessions_router)
    app.include_router(webhooks_router)
    app.include_router(chats_router)
    app.include_router(groups_router)
    app.include_router(contacts_router)
    app.include_router(newsletters_router)
    app.include_router(messages_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.exception_handler(SessionNotFoundError)
    async def session_not_found(
        request: Request, exc: SessionNotFoundError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=error_response(
                status.HTTP_404_NOT_FOUND, "SESSION_NOT_FOUND", str(exc)
            ),
        )

    @app.exception_handler(ValidationError)
    async def validation_failed(request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_response(
                status.HTTP_400_BAD_REQUEST,
                "VALIDATION_FAILED",
                exc.message,
                details=exc.field,
            ),
        )

    @app.exception_handler(RequestValidationError)
    async def invalid_request(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_response(
                status.HTTP_400_BAD_REQUEST,
                "INVALID_REQUEST",
                "Invalid request",
                details=details,
            ),
        )

    @app.exception_handler(SessionStateError)
    async def session_state_conflict(
        request: Request, exc: SessionStateError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content=error_response(
                status.HTTP_409_CONFLICT, "SESSION_STATE_CONFLICT", str(exc)
            ),
        )

    @app.exception_handler(FeatureNotImplementedError)
    async def not_implemented(
        request: Request, exc: FeatureNotImplementedError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_501_NOT_IMPLEMENTED,
            content=error_response(
                status.HTTP_501_NOT_IMPLEMENTED, "NOT_IMPLEMENTED", str(exc)
            ),
        )

    @app.exception_handler(OperationError)
    async def operation_failed(request: Request, exc: OperationError) -> JSONResponse:
        logger.warning(
            "Bridge operation failed",
            extra={"operation": exc.operation, "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content=error_response(
                status.HTTP_502_BAD_GATEWAY, "OPERATION_FAILED", str(exc)
            ),
        )

    @app.exception_handler(GatewayError)
    async def gateway_error(request: Request, exc: GatewayError) -> JSONResponse:
        logger.exception("Unhandled gateway error", extra={"path": request.url.path})
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_ERROR", str(exc)
            ),
        )

    return app
