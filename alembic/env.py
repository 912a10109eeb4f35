"""
Alembic environment running migrations through the async engine
"""
import asyncio
from logging.config import fileConfig

from sqlalchemy import Connection
from sqlmodel import SQLModel

from alembic import context

# Import models so they register with SQLModel.metadata
import parts_catalog.models  # noqa: F401
from parts_catalog.core.database import DatabaseSessionManager

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = SQLModel.metadata


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode (emit SQL)"""
    context.configure(
        url=DatabaseSessionManager().config.async_url,
        target_metadata=target_metadata,
        literal_binds=True,
        compare_type=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    context.configure(connection=connection, target_metadata=target_metadata, compare_type=True)

    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    """Run migrations against a live database"""
    manager = DatabaseSessionManager()
    async with manager.engine.connect() as connection:
        await connection.run_sync(do_run_migrations)
    await manager.close()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
