"""Error Handlers — global exception handlers for the product API.

Invariants:
    - ApiError → its own envelope: {"error": str} or {"errors": [...]}
    - RequestValidationError (query parameters) → 400 with field-level errors
    - Framework HTTP errors (unknown route, wrong method) → {"error": detail}
    - Exception (catch-all) → 500, never leaks internal details

Design Decisions:
    - Layered handlers: domain (ApiError), validation (Pydantic), framework HTTP, catch-all (Exception)
    - Extracted from main.py to keep the app factory short
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from product_api.core.errors import ApiError, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_api_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _register_api_error_handler(app: FastAPI) -> None:

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        """Handle all domain/infrastructure errors."""
        log = (
            logger.error if exc.severity == ErrorSeverity.CRITICAL
            else logger.info
        )
        log(
            f"ApiError: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "method": request.method,
                "status_code": exc.http_status,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

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


def _register_http_error_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        """Routing errors raised by the framework itself."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "internal server error"},
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response. The location prefix
    (query/path/body) is dropped so fields read like the pipeline's."""
    return {
        "errors": [
            {
                "field": ".".join(str(loc) for loc in e["loc"][1:]) or None,
                "message": e["msg"],
            }
            for e in exc.errors()
        ],
    }
