"""FastAPI application factory for the product catalog API."""

from __future__ import annotations

import time
import uuid

import structlog
from fastapi import FastAPI, Request

from catalog.application.product_service import ProductService
from catalog.infrastructure.bootstrap import product_service
from catalog.infrastructure.config import Settings, get_settings
from catalog.infrastructure.http import responses
from catalog.infrastructure.http.errors import (
    register_exception_handlers,
    unhandled_exception_handler,
)
from catalog.infrastructure.http.routes import router

logger = structlog.get_logger(__name__)

APP_NAME = "Product Catalog API"
APP_VERSION = "1.0.0"
REQUEST_ID_HEADER = "X-Request-ID"


def create_app(
    service: ProductService | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Build the application.

    ``service`` defaults to one backed by the JSON document store from
    ``settings``; tests pass their own.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=APP_NAME,
        version=APP_VERSION,
        docs_url="/docs" if settings.environment != "production" else None,
        redoc_url="/redoc" if settings.environment != "production" else None,
    )
    app.state.product_service = service or product_service(settings)

    register_exception_handlers(app)
    app.include_router(router, prefix=settings.api_prefix)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Tag every request with an id and log it with timing and status."""
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            response = await unhandled_exception_handler(request, exc)
        duration_ms = (time.perf_counter() - start_time) * 1000

        logger.info(
            "http.request",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round(duration_ms, 1),
        )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    @app.get("/health", tags=["Health"])
    def health() -> dict:
        return responses.success({"service": APP_NAME, "version": APP_VERSION})

    return app
