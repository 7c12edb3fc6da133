"""Request Pipeline — the one connect/query/map/respond skeleton shared by every endpoint.

Invariants:
    - Method check and parameter parsing happen before a DB session is opened
    - The DB session is released on every exit path (DatabaseSessionManager.session)
    - SanitasError → its http_status with SanitasError.to_response() body
    - Any other exception → 500; nothing escapes dispatch()
    - Every response carries the same CORS headers

Design Decisions:
    - Endpoint = parse (pure, event → params) + run (session, params → payload);
      handlers differ only in query and mapping
    - OPTIONS answered here with 204 so Lambda deployments handle preflight without API Gateway mocks
"""

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from sqlalchemy.ext.asyncio import AsyncSession

from sanitas.core.errors import ErrorSeverity, MethodNotAllowedError, SanitasError
from sanitas.core.events import ApiEvent
from sanitas.core.responses import ApiResponse, create_response
from sanitas.infrastructure.database import DatabaseSessionManager
from sanitas.infrastructure.observability import request_extra

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Endpoint:
    """One resource/action: which method it accepts, how it parses, what it runs."""
    name: str
    method: str
    route: str
    parse: Callable[[ApiEvent], Any]
    run: Callable[[AsyncSession, Any], Awaitable[Any]]
    success_status: int = 200


def error_response(exc: SanitasError) -> ApiResponse:
    return (
        create_response()
        .set_status_code(exc.http_status)
        .add_cors_headers()
        .set_body(exc.to_response())
        .build()
    )


def internal_error_response(exc: Exception) -> ApiResponse:
    return (
        create_response()
        .set_status_code(500)
        .add_cors_headers()
        .set_body({
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
                "category": "internal",
                "severity": ErrorSeverity.CRITICAL.value,
                "type": type(exc).__name__,
            },
        })
        .build()
    )


async def dispatch(
    endpoint: Endpoint, event: ApiEvent, db: DatabaseSessionManager,
) -> ApiResponse:
    """Run one request through method check → parse → query → map → respond."""
    extra = request_extra(
        event.request_id, endpoint.name,
        method=event.http_method, path=event.path,
    )
    if event.http_method == "OPTIONS":
        return create_response().set_status_code(204).add_cors_headers().build()

    try:
        if event.http_method != endpoint.method:
            raise MethodNotAllowedError(
                endpoint.route, endpoint.method, event.http_method,
            )
        logger.info("Checking if received all parameters...", extra=extra)
        params = endpoint.parse(event)

        logger.info("Querying DB...", extra=extra)
        async with db.session() as session:
            payload = await endpoint.run(session, params)
    except SanitasError as e:
        log = logger.error if e.http_status >= 500 else logger.warning
        log(
            f"{endpoint.name} failed: {e.message}",
            extra={**extra, "error_code": e.code, "status_code": e.http_status},
        )
        return error_response(e)
    except Exception as e:
        logger.error(
            f"Unhandled exception in {endpoint.name}: {e}",
            exc_info=True, extra={**extra, "status_code": 500},
        )
        return internal_error_response(e)

    logger.info(
        "Responding",
        extra={**extra, "status_code": endpoint.success_status},
    )
    return (
        create_response()
        .set_status_code(endpoint.success_status)
        .add_cors_headers()
        .set_body(payload)
        .build()
    )
