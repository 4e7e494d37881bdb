"""Error Handlers — global exception handlers for the newsletter API.

Invariants:
    - NewsletterError → status from the error class; body from to_response()
      (None → empty body), headers from response_headers (e.g. WWW-Authenticate)
    - Client-fault errors logged at WARNING without traceback; server faults at
      ERROR with the full causal chain (exc_info)
    - RequestValidationError → 400 with field-level error details
    - Exception (catch-all) → never leaks internal details

Design Decisions:
    - Three-layer handler: domain (NewsletterError), validation (Pydantic), catch-all (Exception)
    - Extracted from main.py (ADR: ExMA import fan-out < 10)
"""

import logging

from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from newsletter.core.errors import (
    INTERNAL_ERROR_RESPONSE, NewsletterError, ErrorSeverity,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_newsletter_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_newsletter_error_handler(app: FastAPI) -> None:
    """Register domain/infrastructure error handler."""

    @app.exception_handler(NewsletterError)
    async def newsletter_error_handler(request: Request, exc: NewsletterError):
        """Handle all newsletter domain/infrastructure errors."""
        extra = {
            "error_code": exc.code,
            "path": request.url.path,
            "request_id": exc.context.request_id,
            "operation": exc.context.operation,
        }
        if exc.is_client_fault:
            logger.warning(f"{type(exc).__name__}: {exc.message}", extra=extra)
        else:
            logger.error(
                f"{type(exc).__name__}: {exc.message}", extra=extra, exc_info=exc,
            )
        body = exc.to_response()
        if body is None:
            return Response(
                status_code=exc.http_status, headers=exc.response_headers,
            )
        return JSONResponse(
            status_code=exc.http_status, content=body, headers=exc.response_headers,
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=exc,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=INTERNAL_ERROR_RESPONSE,
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": "validation",
            "severity": ErrorSeverity.ERROR.value,
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        },
    }
