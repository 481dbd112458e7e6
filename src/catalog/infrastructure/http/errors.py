"""Exception handlers translating failures into JSend responses.

Domain errors are client errors, split by ``ErrorKind`` into 400/404/409.
Request-body validation errors are 400 with per-field messages.
Everything else is an internal failure: logged with its traceback and
reported as a generic 500, never dressed up as a business error.
"""

from __future__ import annotations

from datetime import datetime, timezone

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from catalog.domain.exceptions import DomainException, ErrorKind
from catalog.infrastructure.http import responses

logger = structlog.get_logger(__name__)

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.BAD_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
}

INTERNAL_ERROR_CODE = 5001


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    status_code = STATUS_BY_KIND[exc.kind]
    logger.info(
        "http.domain_error",
        error_type=type(exc).__name__,
        code=exc.code,
        status_code=status_code,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=status_code,
        content=responses.fail(
            {
                "message": str(exc),
                "code": exc.code,
                "timestamp": _timestamp(),
                "path": request.url.path,
                "statusCode": status_code,
            }
        ),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors: dict[str, list[str]] = {}
    for err in exc.errors():
        # loc looks like ("body", "price") or ("query", "min_price")
        location = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(location) or "general"
        errors.setdefault(field, []).append(err.get("msg", "Invalid value"))

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=responses.fail(
            {"errors": errors, "timestamp": _timestamp(), "path": request.url.path}
        ),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "http.internal_error",
        method=request.method,
        path=request.url.path,
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=responses.error(
            "Internal server error occurred.",
            code=INTERNAL_ERROR_CODE,
            data={
                "timestamp": _timestamp(),
                "path": request.url.path,
                "method": request.method,
            },
        ),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
