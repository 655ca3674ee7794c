"""
Core pytest configuration for the whole suite.

Only the database setup shared by every kind of test lives here. Domain
fixtures are defined in `tests/test_fixtures/*` and imported at the bottom of
this module so they are available everywhere:

- repository_fixtures.py: repositories bound to the test session, entity factories
- service_fixtures.py: services wired to `AsyncMock` repositories
- api_fixtures.py: settings, application and HTTP client
"""

from __future__ import annotations

import logging
from typing import AsyncGenerator

# Silence noisy third-party loggers before anything imports them.
NOISY_LOGGERS = (
    "faker",
    "faker.factory",
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.engine.Engine",
    "asyncio",
    "httpx",
    "aiosqlite",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

import pytest
from pytest import FixtureRequest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from sqlalchemy.pool import StaticPool

from countries_api.config import Settings
from countries_api.core.logging.builder import setup_logging
from countries_api.database import build_engine, build_session_factory, create_schema

# A private in-memory database; StaticPool keeps the single connection (and its data) alive.
TEST_DATABASE_URL = "sqlite+aiosqlite://"


def make_settings(**overrides) -> Settings:
    """Settings for tests: never read a developer's .env file."""
    values = {
        "ENV": "testing",
        "LOG_FORMAT": "text",
        "LOG_LEVEL": "INFO",
        "AUTH_ENABLED": True,
        "JWT_SECRET": "test-secret-key-for-the-countries-api-suite",
        "RATE_LIMIT_ENABLED": False,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture(scope="session", autouse=True)
def configure_logging(request: FixtureRequest):
    """
    Install the application's logging configuration once for the session.

    dictConfig replaces the root handlers, so pytest's capture handler is
    re-attached afterwards (best effort) to keep `caplog` working.
    """
    setup_logging(make_settings())

    caplog_plugin = request.config.pluginmanager.getplugin("logging-plugin")
    handler = getattr(caplog_plugin, "caplog_handler", None)
    if handler is not None:
        logging.getLogger().addHandler(handler)

    yield


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
async def async_engine(settings: Settings) -> AsyncGenerator[AsyncEngine, None]:
    """A fresh, empty database per test."""
    engine = build_engine(
        settings,
        url=TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await create_schema(engine)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """
    Session bound to the per-test engine.

    Repositories commit, so isolation comes from the engine being thrown away
    after each test rather than from a rolled-back outer transaction.
    """
    session_factory = build_session_factory(async_engine)
    async with session_factory() as session:
        yield session


# Domain fixtures (imported here to make them global)
from .test_fixtures.repository_fixtures import (  # noqa: E402
    country_repository,
    city_repository,
    create_country,
    create_city,
    country_with_cities,
)
from .test_fixtures.service_fixtures import (  # noqa: E402
    mock_country_repository,
    mock_city_repository,
    country_service,
    city_service,
)
from .test_fixtures.api_fixtures import (  # noqa: E402
    make_token,
    auth_headers,
    app,
    client,
)
