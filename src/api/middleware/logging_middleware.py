"""
Request Logging Middleware

Logs every API request with its status and duration.
"""

import logging
import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

logger = logging.getLogger(__name__)

QUIET_PATHS = frozenset({"/api/health", "/api/ping"})


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Request logging middleware.

    Logs method, path, status code and processing time. Client and server
    errors are logged at WARNING; health probes only at DEBUG.
    """

    async def dispatch(self, request: Request, call_next):
        start_time = time.perf_counter()

        response: Response = await call_next(request)

        process_time = time.perf_counter() - start_time
        line = f"{request.method} {request.url.path} [{response.status_code}] {process_time:.3f}s"

        if response.status_code >= 400:
            logger.warning(line)
        elif request.url.path in QUIET_PATHS:
            logger.debug(line)
        else:
            logger.info(line)

        response.headers["X-Process-Time"] = f"{process_time:.6f}"
        return response
