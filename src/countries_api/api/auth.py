"""
Bearer-token authentication.

Every business route depends on `get_current_principal`. The token is a JWT
verified with PyJWT against the configured secret (plus audience/issuer when
those are configured). Missing or invalid tokens are answered with 401.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

import jwt
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from countries_api.config import Settings

logger = logging.getLogger(__name__)

# auto_error=False: a missing header must give 401, not FastAPI's default response
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Principal:
    subject: str
    claims: dict[str, Any] = field(default_factory=dict)


ANONYMOUS = Principal(subject="anonymous")


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def decode_token(token: str, settings: Settings) -> dict[str, Any]:
    """Verify signature and expiry (and aud/iss when configured). Raises jwt.InvalidTokenError."""
    options = {"require": ["exp"]}
    if settings.JWT_AUDIENCE is None:
        options["verify_aud"] = False
    return jwt.decode(
        token,
        settings.JWT_SECRET,
        algorithms=[settings.JWT_ALGORITHM],
        audience=settings.JWT_AUDIENCE,
        issuer=settings.JWT_ISSUER,
        options=options,
    )


async def get_current_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    settings: Settings = Depends(get_app_settings),
) -> Principal:
    if not settings.AUTH_ENABLED:
        return ANONYMOUS

    if credentials is None:
        raise _unauthorized("Not authenticated")

    if not settings.JWT_SECRET:
        logger.error("auth.misconfigured", extra={"reason": "JWT_SECRET is not set"})
        raise _unauthorized("Not authenticated")

    try:
        claims = decode_token(credentials.credentials, settings)
    except jwt.ExpiredSignatureError:
        logger.info("auth.token_expired")
        raise _unauthorized("Token has expired")
    except jwt.InvalidTokenError as exc:
        logger.info("auth.token_invalid", extra={"reason": type(exc).__name__})
        raise _unauthorized("Invalid token")

    return Principal(subject=str(claims.get("sub", "")), claims=claims)
