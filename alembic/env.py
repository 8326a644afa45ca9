"""Alembic environment for the users schema.

Async URLs migrate through the same `Database` helper the API uses; sync URLs
(the `sqlite+pysqlite` files in tests) use a plain engine.
"""

from __future__ import annotations

import asyncio
import os
from logging.config import fileConfig
from pathlib import Path

from dotenv import load_dotenv
from sqlalchemy import create_engine, pool
from sqlalchemy.engine import Connection

from alembic import context
from credential_auth.infrastructure.db.metadata import metadata
from credential_auth.infrastructure.db.session import create_database, uses_async_driver

_INI_PLACEHOLDER_URL = "sqlite:///./credential_auth.db"

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)


def _migration_url() -> str:
    """Prefer a caller-set URL, then DATABASE_URL (.env included), then the ini value."""

    configured = config.get_main_option("sqlalchemy.url") or _INI_PLACEHOLDER_URL
    if configured != _INI_PLACEHOLDER_URL:
        return configured

    load_dotenv(Path(__file__).resolve().parents[1] / ".env")
    return os.getenv("DATABASE_URL") or configured


def _apply(connection: Connection) -> None:
    context.configure(connection=connection, target_metadata=metadata)
    with context.begin_transaction():
        context.run_migrations()


async def _apply_async(url: str) -> None:
    database = create_database(url, pooled=False)
    try:
        async with database.engine.connect() as connection:
            await connection.run_sync(_apply)
    finally:
        await database.dispose()


def _apply_sync(url: str) -> None:
    engine = create_engine(url, poolclass=pool.NullPool)
    try:
        with engine.connect() as connection:
            _apply(connection)
    finally:
        engine.dispose()


url = _migration_url()
if context.is_offline_mode():
    context.configure(
        url=url,
        target_metadata=metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()
elif uses_async_driver(url):
    asyncio.run(_apply_async(url))
else:
    _apply_sync(url)
