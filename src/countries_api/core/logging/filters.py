"""
Logging filters.

`RequestIdFilter` guarantees every record has a `request_id` attribute (the id
set by the request middleware, or "-" outside a request) so formatters can
reference `%(request_id)s` safely. `RedactFilter` masks sensitive attributes
passed through `extra={...}`.
"""

import contextvars
import logging
from logging import LogRecord

_request_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)

REDACTED = "***REDACTED***"


def set_request_id(request_id: str | None) -> contextvars.Token:
    """Set the request id for the current context; keep the token for `reset_request_id()`."""
    return _request_id_ctx.set(request_id)


def reset_request_id(token: contextvars.Token) -> None:
    _request_id_ctx.reset(token)


def get_request_id() -> str | None:
    return _request_id_ctx.get()


class RequestIdFilter(logging.Filter):
    """
    Attach `record.request_id`, in order of preference:
      - an explicit `extra={"request_id": ...}`
      - the id stored by the middleware for the current request
      - the sentinel "-"
    """

    def filter(self, record: LogRecord) -> bool:
        record.request_id = (
            getattr(record, "request_id", None) or get_request_id() or "-"
        )
        return True


class RedactFilter(logging.Filter):
    SENSITIVE = {
        "password",
        "secret",
        "token",
        "access_token",
        "refresh_token",
        "authorization",
        "jwt_secret",
    }

    def filter(self, record: LogRecord) -> bool:
        for key in list(record.__dict__.keys()):
            if key.lower() in self.SENSITIVE:
                record.__dict__[key] = REDACTED
        return True
