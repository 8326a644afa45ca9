"""Async engine ownership for the user store."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import pool
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)


def uses_async_driver(database_url: str) -> bool:
    """Return whether the URL names an asyncio DBAPI driver such as aiosqlite or asyncpg."""

    return bool(make_url(database_url).get_dialect().is_async)


@dataclass(frozen=True)
class Database:
    """One async engine plus the session factory repositories draw from."""

    engine: AsyncEngine
    session_factory: async_sessionmaker[AsyncSession]

    async def dispose(self) -> None:
        """Close every pooled connection held by the engine."""

        await self.engine.dispose()


def create_database(database_url: str, *, pooled: bool = True) -> Database:
    """Create the engine for an async database URL.

    `pooled=False` opens one connection per checkout, which is what one-shot
    callers such as migrations want.
    """

    if not uses_async_driver(database_url):
        raise ValueError(f"database url must use an async driver: {make_url(database_url).drivername}")

    if pooled:
        engine = create_async_engine(database_url)
    else:
        engine = create_async_engine(database_url, poolclass=pool.NullPool)
    return Database(
        engine=engine,
        session_factory=async_sessionmaker(engine, expire_on_commit=False),
    )
