"""Error Handlers — global exception handlers for the CRM API.

Invariants:
    - CrmError → its http_status and envelope {error, details?, errors?}
    - RequestValidationError → 400 with field-level {param, msg, value} entries
    - Exception (catch-all) → 500 {error: "Internal Server Error"}; details only
      outside production, never a traceback

Design Decisions:
    - Three-layer handler: domain (CrmError), validation (Pydantic), catch-all (Exception)
    - Extracted from main.py to keep the entry point import fan-out small
    - jsonable_encoder on every envelope: violation values may be datetimes or UUIDs
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from crm.config import get_settings
from crm.core.errors import CrmError

logger = logging.getLogger(__name__)

_REQUEST_PARTS = ("body", "query", "path", "header")


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_crm_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_crm_error_handler(app: FastAPI) -> None:
    """Register CRM domain/infrastructure error handler."""

    @app.exception_handler(CrmError)
    async def crm_error_handler(request: Request, exc: CrmError):
        """Handle all CRM domain/infrastructure errors."""
        log = logger.error if exc.http_status >= 500 else logger.warning
        log(
            f"CrmError: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "request_id": getattr(request.state, "request_id", None),
            },
        )
        return JSONResponse(
            status_code=exc.http_status,
            content=jsonable_encoder(exc.to_response()),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors (query params, malformed JSON)."""
        logger.warning(
            f"Validation error on {request.url.path}",
            extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=jsonable_encoder(_build_validation_error_response(exc)),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all; the message is exposed only outside production."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        content = {"error": "Internal Server Error"}
        if not get_settings().is_production:
            content["details"] = str(exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=content,
        )


def _param(loc: tuple) -> str:
    parts = [str(part) for part in loc]
    if len(parts) > 1 and parts[0] in _REQUEST_PARTS:
        parts = parts[1:]
    return ".".join(parts)


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build the failure envelope for request-level validation errors."""
    return {
        "error": "Validation failed",
        "errors": [
            {
                "param": _param(e["loc"]),
                "msg": e["msg"],
                "value": e.get("input"),
            }
            for e in exc.errors()
        ],
    }
