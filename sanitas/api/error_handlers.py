"""Error Handlers — global exception handlers for routes outside the request pipeline.

Invariants:
    - SanitasError → its http_status with the shared error body shape
    - Exception (catch-all) → 500, never leaks internal details
    - Responses carry the same CORS headers as pipeline responses
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from sanitas.core.errors import ErrorSeverity, SanitasError
from sanitas.core.responses import cors_headers

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_sanitas_error_handler(app)
    _register_generic_error_handler(app)


def _register_sanitas_error_handler(app: FastAPI) -> None:

    @app.exception_handler(SanitasError)
    async def sanitas_error_handler(request: Request, exc: SanitasError):
        """Handle all Sanitas domain/infrastructure errors."""
        logger.error(
            f"SanitasError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status,
            content=exc.to_response(),
            headers=cors_headers(),
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
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
            headers=cors_headers(),
        )
