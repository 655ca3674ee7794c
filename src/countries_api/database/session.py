from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    create_async_engine,
    async_sessionmaker,
    AsyncSession,
)

from countries_api.config import Settings
from countries_api.database.base import Base


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(settings: Settings, url: str | None = None, **engine_kwargs) -> AsyncEngine:
    """Create the AsyncEngine for the configured database (or an explicit `url`)."""
    url = url or settings.DATABASE_URL
    kwargs = {
        "echo": settings.SQLALCHEMY_ECHO,   # Set to False in production
        "future": True,
    }
    if url.startswith("postgresql"):
        kwargs["pool_pre_ping"] = True      # Enables connection health checks
    kwargs.update(engine_kwargs)

    engine = create_async_engine(url, **kwargs)
    if url.startswith("sqlite"):
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False keeps entities readable after the repository commits.
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def create_schema(engine: AsyncEngine) -> None:
    """Create every mapped table that does not exist yet."""
    # Importing the models registers them on Base.metadata.
    import countries_api.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# Dependency to get DB session
async def get_async_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency. Yields a session and ensures it's closed after the request.

    The session factory is created by the application factory and stored on
    `app.state.session_factory`.

    Usage:
        async def endpoint(db: AsyncSession = Depends(get_async_session)):
            await db.execute(...)
    """
    session_factory: async_sessionmaker[AsyncSession] = request.app.state.session_factory
    async with session_factory() as session:
        yield session
