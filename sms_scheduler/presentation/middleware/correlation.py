"""
Request correlation middleware.

Each request runs under one correlation id, taken from ``X-Request-ID`` or
``X-Correlation-ID`` when the caller supplies a usable one and generated
otherwise. The id is bound into the structlog context, prefixed onto SQL
statements by the database hook, and echoed back in both response headers.
"""

import re
from uuid import uuid4

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from ...infrastructure.logging import Timer, set_correlation_id

logger = structlog.get_logger()

_ACCEPTED_ID = re.compile(r"^[A-Za-z0-9._:-]{1,64}$")
_QUIET_PATHS = ("/health",)


def _incoming_id(request: Request) -> str | None:
    for header in ("X-Request-ID", "X-Correlation-ID"):
        value = request.headers.get(header)
        if value and _ACCEPTED_ID.match(value):
            return value
    return None


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Binds a correlation id and logs request start and completion."""

    async def dispatch(self, request: Request, call_next) -> Response:
        cid = _incoming_id(request) or str(uuid4())
        set_correlation_id(cid)

        # Probes hit these every few seconds
        log = logger.debug if request.url.path.startswith(_QUIET_PATHS) else logger.info

        with structlog.contextvars.bound_contextvars(
            correlation_id=cid,
            method=request.method,
            path=request.url.path,
        ):
            log("Request started", client_ip=request.client.host if request.client else None)

            with Timer() as t:
                response = await call_next(request)

            log("Request completed", status_code=response.status_code, duration_ms=t.duration_ms)

        response.headers["X-Request-ID"] = cid
        response.headers["X-Correlation-ID"] = cid
        return response
