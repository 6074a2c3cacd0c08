"""
FastAPI application factory for the Holiday Planner API.

Usage:
    uvicorn api.app:app --port 8080
    python run.py                        # same app, host/port from settings
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from http import HTTPStatus
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.routers import holidays
from api.schemas import ErrorResponse
from config.settings import Settings
from models.domain import UpstreamRejected, UpstreamUnavailable, ValidationFailed

logger = logging.getLogger("holidays.api")


def _error(request: Request, status: int, message: str) -> JSONResponse:
    body = ErrorResponse.build(
        status=status,
        error=HTTPStatus(status).phrase,
        message=message,
        path=request.url.path,
    )
    return JSONResponse(status_code=status, content=body.model_dump())


def _register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    """Map the error taxonomy onto HTTP statuses with a uniform ErrorResponse body."""

    async def bad_request(request: Request, exc: Exception) -> JSONResponse:
        logger.warning("400 on %s: %s", request.url.path, exc)
        return _error(request, 400, str(exc))

    async def request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        parts = []
        for err in exc.errors():
            name = err.get("loc", ["", ""])[-1]
            parts.append(f"{name}: {err.get('msg', 'invalid value')}")
        message = ", ".join(parts) or "invalid request"
        logger.warning("400 on %s: %s", request.url.path, message)
        return _error(request, 400, message)

    async def upstream_unavailable(request: Request, exc: UpstreamUnavailable) -> JSONResponse:
        message = (
            f"{exc} - possible network issue or north bound Nager Date service might be down, "
            f"please check this URL from web browser {settings.available_countries_url}"
        )
        logger.error("500 on %s: %s", request.url.path, message)
        return _error(request, 500, message)

    async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        message = exc.detail if exc.status_code != 404 else f"No resource found for {request.url.path}"
        return _error(request, exc.status_code, str(message))

    async def unhandled(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("500 on %s", request.url.path)
        return _error(request, 500, str(exc) or type(exc).__name__)

    app.add_exception_handler(ValidationFailed, bad_request)
    app.add_exception_handler(UpstreamRejected, bad_request)
    app.add_exception_handler(RequestValidationError, request_validation)
    app.add_exception_handler(UpstreamUnavailable, upstream_unavailable)
    app.add_exception_handler(StarletteHTTPException, http_error)
    app.add_exception_handler(Exception, unhandled)


def create_app(holiday_service, settings: Settings, lifespan=None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    The HolidayService instance is stored on app.state so routers can
    retrieve it via request.app.state.holiday_service.
    """
    app = FastAPI(
        title="Holiday Information API",
        version="2.0.0",
        description="API for retrieving holiday information using the Nager Date API",
        contact={
            "name": "Holiday Planner Team",
            "email": "support@holidayplanner.example.com",
            "url": "https://holidayplanner.example.com",
        },
        license_info={
            "name": "Apache 2 License",
            "url": "https://www.apache.org/licenses/LICENSE-2.0",
        },
        lifespan=lifespan,
    )

    app.state.holiday_service = holiday_service
    app.state.settings        = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    _register_exception_handlers(app, settings)

    app.include_router(holidays.router, prefix="/api")

    @app.get("/management/health", tags=["health"])
    def health() -> dict[str, str]:
        return {"status": "UP"}

    return app


# ── Module-level app for `uvicorn api.app:app` ────────────────────────────────

def _make_default_app() -> FastAPI:
    """Wire cache → Nager client → validator → service from the global settings."""
    from config.settings import settings
    from data.nager_client import NagerDateClient
    from services.cache import HolidayCache
    from services.holiday_service import HolidayService
    from services.validator import HolidayRequestValidator

    cache     = HolidayCache(ttl_seconds=settings.cache_ttl_seconds)
    client    = NagerDateClient(cache, settings)
    validator = HolidayRequestValidator(client, settings)
    service   = HolidayService(validator, client, settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info(
            "holiday api ready upstream=%s cache_ttl=%s",
            settings.available_countries_url, settings.cache_ttl_seconds or "none",
        )
        yield
        client.close()
        logger.info("upstream client closed")

    return create_app(service, settings, lifespan=lifespan)


app = _make_default_app()
