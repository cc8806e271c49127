"""Global error handler: every failure leaves as `{"error": ...}` JSON."""

from collections.abc import Sequence
from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = structlog.get_logger()

# Location prefixes FastAPI adds in front of the offending field name
_LOCATION_ROOTS = frozenset({"body", "query", "path", "header", "cookie"})


def flatten_validation_errors(errors: Sequence[Any]) -> dict[str, Any]:
    """Collapse pydantic errors into `{formErrors: [...], fieldErrors: {field: [...]}}`."""
    form_errors: list[str] = []
    field_errors: dict[str, list[str]] = {}

    for error in errors:
        message = str(error.get("msg", "Invalid value"))
        loc = [part for part in error.get("loc", ()) if part not in _LOCATION_ROOTS]
        if error.get("type") == "json_invalid" or not loc or not isinstance(loc[0], str):
            form_errors.append(message)
            continue
        field_errors.setdefault(loc[0], []).append(message)

    return {"formErrors": form_errors, "fieldErrors": field_errors}


def upstream_message(exc: SQLAlchemyError) -> str:
    """Best available message from a failed storage call."""
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


def setup_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
        """Auth, role and routing failures: message surfaced verbatim."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
        """Schema mismatches: 400 with structured field errors."""
        return JSONResponse(
            status_code=400,
            content={"error": flatten_validation_errors(exc.errors())},
        )

    @app.exception_handler(SQLAlchemyError)
    async def upstream_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        """Storage failures: 500 with the driver's message passed through."""
        message = upstream_message(exc)
        logger.error(
            "upstream_error",
            path=request.url.path,
            method=request.method,
            error=message,
        )
        return JSONResponse(status_code=500, content={"error": message})

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all for unhandled exceptions: always return JSON."""
        logger.error(
            "unhandled_exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            exc_info=exc,
        )
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error"},
        )
