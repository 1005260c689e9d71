"""Alembic environment for the qanda store.

The database URL comes from ``sqlalchemy.url`` when set (``-x`` or a
programmatic Config), otherwise from the qanda configuration, so
``alembic upgrade head`` migrates the same database ``qanda serve`` uses.
"""

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool
from sqlalchemy.ext.asyncio import async_engine_from_config

from qanda.config.loader import load_config
from qanda.store.database import _expand_url
from qanda.store.models import Base

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

target_metadata = Base.metadata

_ASYNC_DRIVERS = ("+aiosqlite", "+asyncpg")


def _database_url() -> str:
    url = config.get_main_option("sqlalchemy.url") or load_config().database.url
    return _expand_url(url)


def _engine_options() -> dict[str, str]:
    section = config.get_section(config.config_ini_section, {})
    section["sqlalchemy.url"] = _database_url()
    return section


def run_migrations_offline() -> None:
    """Emit SQL to stdout without connecting."""
    context.configure(
        url=_database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def _migrate(connection) -> None:  # type: ignore[no-untyped-def]
    context.configure(connection=connection, target_metadata=target_metadata)

    with context.begin_transaction():
        context.run_migrations()


async def _migrate_async(options: dict[str, str]) -> None:
    engine = async_engine_from_config(
        options, prefix="sqlalchemy.", poolclass=pool.NullPool
    )
    async with engine.connect() as connection:
        await connection.run_sync(_migrate)
    await engine.dispose()


def run_migrations_online() -> None:
    """Migrate over a live connection, async drivers included."""
    options = _engine_options()
    if any(d in options["sqlalchemy.url"] for d in _ASYNC_DRIVERS):
        asyncio.run(_migrate_async(options))
        return

    engine = engine_from_config(options, prefix="sqlalchemy.", poolclass=pool.NullPool)
    with engine.connect() as connection:
        _migrate(connection)
    engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
