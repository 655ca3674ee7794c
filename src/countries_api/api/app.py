"""
FastAPI application factory.

    app = create_app()                      # settings from the environment
    app = create_app(settings, engine=...)  # tests inject their own engine
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from slowapi.errors import RateLimitExceeded
from sqlalchemy.ext.asyncio import AsyncEngine

from countries_api.config import Settings, get_settings
from countries_api.core.logging import RequestLoggingMiddleware, setup_logging
from countries_api.database import build_engine, build_session_factory, create_schema

from .error_handlers import register_exception_handlers
from .rate_limit import build_limiter, rate_limit_exceeded_handler
from .v1 import api_router

logger = logging.getLogger(__name__)


async def health() -> dict[str, str]:
    return {"status": "ok"}


def create_app(
    settings: Settings | None = None,
    *,
    engine: AsyncEngine | None = None,
    configure_logging: bool = True,
) -> FastAPI:
    settings = settings or get_settings()
    if configure_logging:
        setup_logging(settings)

    owns_engine = engine is None
    engine = engine or build_engine(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await create_schema(engine)
        logger.info("app.startup", extra={"env": settings.ENV})
        yield
        if owns_engine:
            await engine.dispose()
        logger.info("app.shutdown")

    app = FastAPI(title="Countries API", lifespan=lifespan)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.limiter = build_limiter(settings)

    # sees every response, rate-limited and unauthorized ones included
    app.add_middleware(RequestLoggingMiddleware)

    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    register_exception_handlers(app)

    app.add_api_route("/health", health, methods=["GET"], tags=["health"])
    app.include_router(api_router)
    return app
