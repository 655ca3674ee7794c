"""
Request logging middleware.

For every request it:
  1. reuses an incoming `X-Request-ID` (when it looks sane) or generates a UUID4
     and stores it in the request-id contextvar so every log line carries it
  2. times the request
  3. logs `http.request.failed` at ERROR for responses with status >= 400, and
     `http.request.completed` at DEBUG otherwise
  4. echoes the id back in the `X-Request-ID` response header
"""

import logging
import re
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from .filters import reset_request_id, set_request_id

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9._-]{1,128}$")


def _client_ip(request: Request) -> str | None:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else None


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(self, request: Request, call_next):
        incoming = request.headers.get(REQUEST_ID_HEADER)
        # untrusted header: only accept short opaque ids, never arbitrary text
        request_id = incoming if incoming and _VALID_REQUEST_ID.match(incoming) else str(uuid.uuid4())

        token = set_request_id(request_id)
        start = time.perf_counter()
        try:
            response = await call_next(request)

            elapsed_ms = round((time.perf_counter() - start) * 1000, 2)
            details = {
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "elapsed_ms": elapsed_ms,
                "client_ip": _client_ip(request),
            }
            if response.status_code >= 400:
                logger.error("http.request.failed", extra=details)
            else:
                logger.debug("http.request.completed", extra=details)

            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            reset_request_id(token)
