"""Alembic environment — migrations for the database storage backend.

Invariants:
    - The URL always comes from classroom Settings (DATABASE_URL or its default)
    - target_metadata is classroom's Base.metadata with every model registered

Design Decisions:
    - Settings reused instead of re-reading os.environ: the postgresql:// →
      postgresql+asyncpg:// rewrite lives in one place (config.py)
    - NullPool: a migration run is one short-lived connection
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from alembic import context

import classroom.models  # noqa: F401  (registers every table on Base.metadata)
from classroom.config import get_settings
from classroom.db.base import Base

alembic_config = context.config
if alembic_config.config_file_name is not None:
    fileConfig(alembic_config.config_file_name)

alembic_config.set_main_option("sqlalchemy.url", get_settings().database_url)


def _configure(**kwargs) -> None:
    context.configure(
        target_metadata=Base.metadata,
        compare_type=True,
        render_as_batch=alembic_config.get_main_option("sqlalchemy.url").startswith("sqlite"),
        **kwargs,
    )


def migrate_offline() -> None:
    """Emit SQL to stdout instead of connecting."""
    _configure(
        url=alembic_config.get_main_option("sqlalchemy.url"),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def _migrate_sync(connection: Connection) -> None:
    _configure(connection=connection)
    with context.begin_transaction():
        context.run_migrations()


async def migrate_online() -> None:
    engine = async_engine_from_config(
        alembic_config.get_section(alembic_config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    async with engine.connect() as connection:
        await connection.run_sync(_migrate_sync)
    await engine.dispose()


if context.is_offline_mode():
    migrate_offline()
else:
    asyncio.run(migrate_online())
