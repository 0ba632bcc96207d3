from collections.abc import AsyncIterator
from typing import Any

from fastapi import Request
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from expense_tracker.config import Settings


def _engine_options(settings: Settings) -> dict[str, Any]:
    """Pool and driver options that bound every outbound database call."""
    url = make_url(settings.database_url)
    timeout = settings.db_timeout_seconds

    if url.get_backend_name() == "sqlite":
        return {"connect_args": {"timeout": timeout}}

    options: dict[str, Any] = {"pool_timeout": timeout, "pool_pre_ping": True}
    if url.get_driver_name() == "asyncpg":
        options["connect_args"] = {"timeout": timeout, "command_timeout": timeout}
    return options


def create_engine(settings: Settings) -> AsyncEngine:
    # Do not log SQL statement parameters outside development; they can
    # contain password hashes.
    return create_async_engine(
        settings.database_url,
        echo=(settings.db_echo if settings.app_env.lower() == "development" else False),
        **_engine_options(settings),
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    async with request.app.state.session_factory() as session:
        yield session
