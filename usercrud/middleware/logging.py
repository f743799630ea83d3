"""
UserCRUD - Request Logging Middleware
======================================

What:  One access-log line per page or form request:
       `<method> <path> <status> <duration>ms [<request id>]`.
How:   Times the downstream call and logs at a level chosen by the status
       class (5xx ERROR, 4xx WARNING, otherwise INFO).

Two kinds of traffic are kept out of the INFO stream: /health probes are not
logged at all, and successful stylesheet/image hits from usercrud/public are
logged at DEBUG since every page load triggers them. Request bodies are never
logged; they carry names, emails and phone numbers.
"""

import logging
import time
from pathlib import PurePosixPath

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from usercrud.middleware.request_id import request_id_var

logger = logging.getLogger("usercrud.access")

UNLOGGED_PATHS = frozenset({"/health"})
STATIC_SUFFIXES = frozenset({".css", ".js", ".ico", ".png", ".jpg", ".svg", ".woff2"})


def access_log_level(path: str, status: int) -> int:
    """Pick the level for one access line."""
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    if PurePosixPath(path).suffix.lower() in STATIC_SUFFIXES:
        return logging.DEBUG
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each HTTP request with its outcome and duration."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in UNLOGGED_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        logger.log(
            access_log_level(path, response.status_code),
            "%s %s %d %.1fms [%s]",
            request.method,
            path,
            response.status_code,
            duration_ms,
            request_id_var.get(""),
        )
        return response
