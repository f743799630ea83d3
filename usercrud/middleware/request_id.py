"""
UserCRUD - Request ID Middleware
=================================

What:  Tags each request with a short correlation id and returns it in the
       X-Request-ID response header.
How:   A client-supplied X-Request-ID is reused only when it is a short token
       of letters, digits, '-' and '_'; anything else (empty, too long, or
       carrying spaces or control characters that would forge log lines) is
       replaced by the first eight characters of a fresh UUID. The id lives
       in a ContextVar so the access log and the exception handlers can
       include it.
"""

import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

_SAFE_REQUEST_ID = re.compile(r"^[A-Za-z0-9_-]{1,64}$")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def resolve_request_id(client_value: str | None) -> str:
    """Return the client's id if it is safe to log, otherwise a new one."""
    if client_value and _SAFE_REQUEST_ID.match(client_value):
        return client_value
    return str(uuid.uuid4())[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Assigns a request id and echoes it back to the client."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        token = request_id_var.set(rid)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
