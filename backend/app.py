"""FastAPI application factory."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from api.v1 import api_router
from core import configure_logging, settings
from db.session import async_engine
from services.errors import NotFoundError, StoreError, ValidationError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    logger.info("Starting thoughts API", extra={"app_env": settings.app_env})
    yield
    await async_engine.dispose()


async def _handle_not_found(_: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": str(exc)},
    )


async def _handle_validation_error(_: Request, exc: Exception) -> JSONResponse:
    errors = exc.errors if isinstance(exc, ValidationError) else {}
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Validation failed", "errors": errors},
    )


async def _handle_request_validation_error(_: Request, exc: Exception) -> JSONResponse:
    errors: dict[str, str] = {}
    if isinstance(exc, RequestValidationError):
        for error in exc.errors():
            location = [str(part) for part in error.get("loc", ())]
            field = ".".join(location[1:]) or (location[0] if location else "body")
            errors.setdefault(field, str(error.get("msg", "Invalid value")))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Validation failed", "errors": errors},
    )


async def _handle_store_error(_: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": str(exc) or "Internal server error"},
    )


def create_app() -> FastAPI:
    """Build the application with routes and error mapping installed."""
    configure_logging()
    application = FastAPI(title="Social Thoughts API", lifespan=lifespan)

    application.add_exception_handler(NotFoundError, _handle_not_found)
    application.add_exception_handler(ValidationError, _handle_validation_error)
    application.add_exception_handler(RequestValidationError, _handle_request_validation_error)
    application.add_exception_handler(StoreError, _handle_store_error)

    application.include_router(api_router, prefix=settings.api_prefix)

    @application.get("/health", tags=["health"])
    async def health_check() -> dict[str, str]:
        return {"status": "ok"}

    return application
