"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from eventify_registration.api.auth import router as auth_router
from eventify_registration.api.payments import router as payments_router
from eventify_registration.api.registrations import router as registrations_router
from eventify_registration.app_logging import configure_logging
from eventify_registration.containers import AppContainer
from eventify_registration.domain.errors import DomainError, ErrorCode

_STATUS_BY_CODE = {
    ErrorCode.AUTH_REQUIRED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.FLOW_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.EVENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.INVALID_TRANSACTION_ID: status.HTTP_404_NOT_FOUND,
    ErrorCode.CONTROLS_LOCKED: status.HTTP_409_CONFLICT,
    ErrorCode.DISMISSAL_REFUSED: status.HTTP_409_CONFLICT,
    ErrorCode.INVALID_TRANSITION: status.HTTP_409_CONFLICT,
    ErrorCode.INVALID_FIELD_VALUE: 422,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(auth_router)
    app.include_router(registrations_router)
    app.include_router(payments_router)

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
        status_code = _STATUS_BY_CODE.get(exc.code, status.HTTP_400_BAD_REQUEST)
        logger.info(
            "Request rejected: %s",
            exc.code.value,
            extra={"path": request.url.path},
        )
        return JSONResponse(
            status_code=status_code,
            content={"code": exc.code.value, "message": exc.message},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
