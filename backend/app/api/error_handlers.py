"""Error Handlers - last-resort exception handler for operational routes.

Invariants:
    - Materialized schema routes convert their own failures; this handler only
      sees failures from routes registered by hand (health checks, document
      route) and middleware
    - Body has the same Error shape as dispatch failures (failure_payload)
    - LampError keeps its own http_status; anything else is 500
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from app.core.errors import LampError, failure_payload

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=exc,
            extra={"path": request.url.path, "error_kind": type(exc).__name__},
        )
        status_code = (
            exc.http_status if isinstance(exc, LampError)
            else status.HTTP_500_INTERNAL_SERVER_ERROR
        )
        return JSONResponse(
            status_code=status_code,
            content=failure_payload(exc),
        )
