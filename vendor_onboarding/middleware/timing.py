"""Request timing middleware — stamps the start of every request and logs writes."""


import logging
import time
from collections.abc import Callable
from datetime import datetime, timezone

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

# Methods that mutate state
_WRITE_METHODS = {"POST", "PUT", "PATCH", "DELETE"}

class RequestTimingMiddleware(BaseHTTPMiddleware):
    """Records when each request started.

    The response envelope reads ``request.state.started_at`` and
    ``request.state.started_monotonic`` to fill ``startDT`` and ``tat``.
    State-changing requests are logged with their status and duration.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request.state.started_at = datetime.now(timezone.utc)
        request.state.started_monotonic = start = time.monotonic()

        response = await call_next(request)

        if request.method in _WRITE_METHODS:
            duration_ms = round((time.monotonic() - start) * 1000)
            logger.info(
                "%s %s -> %s (%dms)",
                request.method, request.url.path, response.status_code, duration_ms,
            )
        return response
