# alembic/env.py
from logging.config import fileConfig
from sqlalchemy import pool
from sqlalchemy.ext.asyncio import create_async_engine
from alembic import context
import asyncio

# Import the base and ALL model classes so the metadata is complete
from idcard_api.core.config import get_settings
from idcard_api.models import Base  # noqa: F401

config = context.config

# Get the database URL from the app settings (env / .env), else the .ini
config.set_main_option(
    "sqlalchemy.url",
    get_settings().database_url or config.get_main_option("sqlalchemy.url"),
)

# Setup logging config from ini file
if config.config_file_name:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline():
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def do_sync_migrations(connection):
    context.configure(connection=connection, target_metadata=target_metadata)
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    connectable = create_async_engine(
        config.get_main_option("sqlalchemy.url"),
        poolclass=pool.NullPool,
    )

    async def run_async():
        async with connectable.connect() as connection:
            await connection.run_sync(do_sync_migrations)
        await connectable.dispose()

    asyncio.run(run_async())


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
