"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from supabase import AuthError, PostgrestAPIError

from meal_scan.api.food_log import router as food_log_router
from meal_scan.api.scans import router as scans_router
from meal_scan.app_logging import configure_logging
from meal_scan.containers import AppContainer
from meal_scan.errors import (
    AIConnectionError,
    AIResponseParseError,
    EmptyAIResponseError,
    ImageUploadError,
    MealScanError,
    StoreWriteError,
    UnauthenticatedError,
)

_STATUS_BY_ERROR: dict[type[MealScanError], int] = {
    UnauthenticatedError: status.HTTP_401_UNAUTHORIZED,
    EmptyAIResponseError: status.HTTP_502_BAD_GATEWAY,
    AIResponseParseError: status.HTTP_502_BAD_GATEWAY,
    AIConnectionError: status.HTTP_503_SERVICE_UNAVAILABLE,
    ImageUploadError: status.HTTP_502_BAD_GATEWAY,
    StoreWriteError: status.HTTP_502_BAD_GATEWAY,
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

    app.include_router(scans_router)
    app.include_router(food_log_router)

    @app.exception_handler(MealScanError)
    async def handle_meal_scan_error(
        request: Request, exc: MealScanError
    ) -> JSONResponse:
        status_code = _STATUS_BY_ERROR.get(
            type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR
        )
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    @app.exception_handler(AuthError)
    async def handle_auth_error(request: Request, exc: AuthError) -> JSONResponse:
        logger.warning("Auth lookup failed: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"detail": "Invalid or expired session"},
        )

    @app.exception_handler(PostgrestAPIError)
    async def handle_store_error(
        request: Request, exc: PostgrestAPIError
    ) -> JSONResponse:
        logger.warning("Database request failed: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"detail": exc.message or "Database request failed"},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
