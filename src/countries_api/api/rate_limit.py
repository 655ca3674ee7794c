"""
Rate limiting.

The limiter lives on `app.state.limiter` and is enforced by `enforce_rate_limit`,
a dependency of every business router. The check runs against the endpoint
Starlette matched, which is on the request scope however the routers are
nested, so it does not depend on how the application lays out its routes.
"""

from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response

from countries_api.config import Settings

RATE_LIMIT_MESSAGE = "Too many requests. Please try again later."


def build_limiter(settings: Settings) -> Limiter:
    """Fixed-window limiter keyed by client address, one window per request path."""
    return Limiter(
        key_func=get_remote_address,
        default_limits=[settings.RATE_LIMIT],
        enabled=settings.RATE_LIMIT_ENABLED,
        key_style="url",
    )


async def enforce_rate_limit(request: Request) -> None:
    """Count the request against the default limits; raises RateLimitExceeded when over."""
    limiter: Limiter = request.app.state.limiter
    limiter._check_request_limit(request, request.scope.get("endpoint"), True)


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> Response:
    return PlainTextResponse(RATE_LIMIT_MESSAGE, status_code=429)
