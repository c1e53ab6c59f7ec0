"""Alembic environment - runs coupon exchange migrations on the async engine.

The target URL is the application's own `Settings.database_url` (so hosted
postgresql:// URLs get the same asyncpg rewrite), unless overridden with
`alembic -x url=...`.
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine

from alembic import context

import coupon_exchange.models  # noqa: F401
from coupon_exchange.config import get_settings
from coupon_exchange.db.base import Base

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _migration_url() -> str:
    override = context.get_x_argument(as_dictionary=True).get("url")
    return override or get_settings().database_url


def _configure_and_run(**configure_kwargs) -> None:
    context.configure(target_metadata=target_metadata, **configure_kwargs)
    with context.begin_transaction():
        context.run_migrations()


def _run_on_connection(connection: Connection) -> None:
    # SQLite cannot ALTER constraints in place; batch mode rebuilds the table
    _configure_and_run(
        connection=connection,
        render_as_batch=connection.dialect.name == "sqlite",
    )


async def _run_online() -> None:
    engine = create_async_engine(_migration_url(), poolclass=pool.NullPool)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_run_on_connection)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    _configure_and_run(
        url=_migration_url(),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
else:
    asyncio.run(_run_online())
