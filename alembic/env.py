from __future__ import annotations

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from work_scheduler.core.config import get_settings
from work_scheduler.core.logging import configure_logging
from work_scheduler.db.base import Base
from work_scheduler.db import models  # noqa: F401  # registers tables on Base.metadata

config = context.config
settings = get_settings()

if config.config_file_name is not None:
    fileConfig(config.config_file_name)
else:
    configure_logging(settings)

target_metadata = Base.metadata


def _database_url(*, async_driver: bool) -> str:
    url = config.get_main_option("sqlalchemy.url") or settings.database_url
    if async_driver:
        return url
    # Offline mode renders SQL with a synchronous driver.
    return url.replace("+asyncpg", "").replace("+aiosqlite", "")


def _configure_options(url: str) -> dict:
    return {
        "target_metadata": target_metadata,
        "compare_type": True,
        # SQLite needs table rebuilds for ALTER.
        "render_as_batch": url.startswith("sqlite"),
    }


def run_migrations_offline() -> None:
    """Emit the migration SQL without a live connection."""
    url = _database_url(async_driver=False)
    context.configure(
        url=url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_configure_options(url),
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    context.configure(connection=connection, **_configure_options(str(connection.engine.url)))

    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    """Apply migrations through the async engine."""
    engine: AsyncEngine = create_async_engine(
        _database_url(async_driver=True), poolclass=pool.NullPool
    )

    async with engine.begin() as connection:
        await connection.run_sync(do_run_migrations)

    await engine.dispose()


def run_migrations() -> None:
    if context.is_offline_mode():
        run_migrations_offline()
    else:
        asyncio.run(run_migrations_online())


run_migrations()
