"""Error Handlers — global exception handlers mapping failures to bare status codes.

Invariants:
    - NewsletterError → its http_status, empty body
    - RequestValidationError → DecodeFailureError → 400, empty body
    - Starlette 404/405 → RouteNotFoundError → 404, empty body
    - Exception (catch-all) → 500, empty body, never leaks internal details

Design Decisions:
    - Four-layer handler: domain, validation, routing, catch-all
    - Details are logged with structured extra fields, never sent to the client
"""

import logging

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from newsletter.core.errors import (
    DecodeFailureError, ErrorSeverity, NewsletterError, RouteNotFoundError,
)

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.ERROR: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.ERROR,
}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_newsletter_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_exception_handler(app)
    _register_generic_error_handler(app)


def error_response(request: Request, exc: NewsletterError) -> Response:
    """Log a domain error and turn it into an empty-bodied response."""
    logger.log(
        _LOG_LEVELS[exc.severity],
        f"{exc.code}: {exc.message}",
        extra={**exc.to_log_extra(), "method": request.method, "path": request.url.path},
    )
    return Response(status_code=exc.http_status)


def _register_newsletter_error_handler(app: FastAPI) -> None:
    """Register domain/infrastructure error handler."""

    @app.exception_handler(NewsletterError)
    async def newsletter_error_handler(request: Request, exc: NewsletterError):
        return error_response(request, exc)


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        return error_response(request, _to_decode_failure(exc))


def _register_http_exception_handler(app: FastAPI) -> None:
    """Register routing error handler (unmatched path or method)."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException,
    ):
        if exc.status_code in (
            status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED,
        ):
            return error_response(
                request, RouteNotFoundError(request.method, request.url.path),
            )
        return Response(status_code=exc.status_code, headers=exc.headers)


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


def _to_decode_failure(exc: RequestValidationError) -> DecodeFailureError:
    """Collapse Pydantic errors into a single DecodeFailureError."""
    errors = exc.errors()
    fields = [
        ".".join(str(loc) for loc in e["loc"] if loc != "body")
        for e in errors
    ]
    summary = "; ".join(f"{f or 'body'}: {e['msg']}" for f, e in zip(fields, errors))
    return DecodeFailureError(f"Invalid request data ({summary})", fields)
