# alembic/env.py
from __future__ import annotations
import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy.ext.asyncio import create_async_engine

# --- Same settings source as the service (env + .env)
from dotenv import load_dotenv
load_dotenv()

from menudujour.core.config import get_settings

DATABASE_URL = get_settings().database_url
if not DATABASE_URL:
    raise RuntimeError("DATABASE_URL not set for Alembic")

# --- Metadata of every menu table
from menudujour.models.base import Base
import menudujour.models  # registers restaurants, catalog, daily menus, invites

target_metadata = Base.metadata

# Type changes (e.g. Numeric precision on prices) show up in autogenerate
COMPARE_TYPE = True

config = context.config
if config.config_file_name:
    fileConfig(config.config_file_name)


def run_migrations_offline() -> None:
    """Emit SQL for the menu schema without a live connection."""
    context.configure(
        url=DATABASE_URL,
        target_metadata=target_metadata,
        literal_binds=True,
        compare_type=COMPARE_TYPE,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection):
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        compare_type=COMPARE_TYPE,
    )
    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    engine = create_async_engine(DATABASE_URL, pool_pre_ping=True)
    async with engine.connect() as conn:
        await conn.run_sync(do_run_migrations)
    await engine.dispose()


def run_migrations_online() -> None:
    """Run against the async DATABASE_URL (asyncpg in production)."""
    asyncio.run(run_async_migrations())


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
