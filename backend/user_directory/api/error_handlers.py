"""Error Handlers — global exception handlers that always answer with an envelope.

Invariants:
    - UserDirectoryError → its own envelope and http_status
    - RequestValidationError → 400 "Validation failed" with field-level `errors`
    - Unmatched route (404) or unsupported method (405) → 404 "Route not found"
    - Exception (catch-all) → 500 envelope; raw detail only in development mode
    - The catch-all is rendered inside the middleware stack
      (UnhandledErrorMiddleware), so 500s get the same headers as any response;
      the Exception handler only sees faults raised by middleware itself

Design Decisions:
    - Four handler layers: domain, validation, HTTP, catch-all
    - Detail exposure read from app.state.settings so each app instance
      carries its own operating mode
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from user_directory.core.errors import (
    ErrorSeverity,
    InternalServerError,
    PayloadValidationError,
    RouteNotFoundError,
    UserDirectoryError,
)
from user_directory.core.validate_user import field_errors_from_pydantic

logger = logging.getLogger(__name__)

_SEVERITY_LOG_LEVEL = {
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.ERROR: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.ERROR,
}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _expose_detail(request: Request) -> bool:
    settings = getattr(request.app.state, "settings", None)
    return bool(settings and settings.is_development)


def error_response(request: Request, exc: UserDirectoryError) -> JSONResponse:
    """Log the error at its severity and render its envelope."""
    logger.log(
        _SEVERITY_LOG_LEVEL[exc.severity],
        f"{exc.code}: {exc.message}",
        extra={
            "error_code": exc.code,
            "method": request.method,
            "path": request.url.path,
            "user_id": exc.context.user_id,
        },
    )
    return JSONResponse(
        status_code=exc.http_status,
        content=exc.to_response(expose_detail=_expose_detail(request)),
    )


def unhandled_error_response(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all: the client never sees a stack trace."""
    logger.error(
        f"Unhandled exception on {request.url.path}: {exc}",
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=InternalServerError(str(exc)).to_response(
            expose_detail=_expose_detail(request),
        ),
    )


def _register_domain_error_handler(app: FastAPI) -> None:
    """Register User Directory domain/infrastructure error handler."""

    @app.exception_handler(UserDirectoryError)
    async def domain_error_handler(request: Request, exc: UserDirectoryError):
        return error_response(request, exc)


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic request validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        return error_response(
            request, PayloadValidationError(field_errors_from_pydantic(exc.errors())),
        )


def _register_http_error_handler(app: FastAPI) -> None:
    """Register handler for routing-level HTTP errors raised by Starlette."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (
            status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED,
        ):
            return error_response(
                request, RouteNotFoundError(request.method, request.url.path),
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        return unhandled_error_response(request, exc)
