"""API middleware for request logging."""

import logging
import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

# Liveness probes hit these every few seconds; keep them out of INFO logs.
QUIET_PATH_PREFIXES = ("/health",)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each request with its status and timing.

    Health checks log at DEBUG; note and CPT traffic logs at INFO.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        path = request.url.path
        level = logging.DEBUG if path.startswith(QUIET_PATH_PREFIXES) else logging.INFO
        start_time = time.time()

        logger.log(
            level,
            f"Request: {request.method} {path} "
            f"client={request.client.host if request.client else 'unknown'}",
        )

        response = await call_next(request)

        duration = time.time() - start_time
        logger.log(
            level,
            f"Response: {request.method} {path} "
            f"status={response.status_code} duration={duration:.3f}s",
        )

        response.headers["X-Process-Time"] = f"{duration:.3f}"
        return response
