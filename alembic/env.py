"""Alembic environment for the tracking record store.

The URL comes from liftlog settings, never from alembic.ini. SQLite (via
DATABASE_URL_OVERRIDE) cannot ALTER most constraints, so its migrations run in
batch mode.
"""

import logging
from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool
from sqlalchemy.engine import Connection

from liftlog.core.config import get_settings
from liftlog.db.base import Base
from liftlog.models import *  # noqa: F401, F403 - register all models

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

logger = logging.getLogger("alembic.env")

settings = get_settings()
record_store_url = settings.database_url
config.set_main_option("sqlalchemy.url", record_store_url.replace("%", "%%"))

target_metadata = Base.metadata


def _configure_options(is_sqlite: bool) -> dict:
    return {
        "target_metadata": target_metadata,
        "compare_type": True,
        "render_as_batch": is_sqlite,
    }


def run_migrations_offline() -> None:
    """Emit the migration SQL without connecting."""
    context.configure(
        url=record_store_url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_configure_options(record_store_url.startswith("sqlite")),
    )
    with context.begin_transaction():
        context.run_migrations()


def apply_migrations(connection: Connection) -> None:
    is_sqlite = connection.dialect.name == "sqlite"
    context.configure(connection=connection, **_configure_options(is_sqlite))
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Connect to the record store and upgrade it in place."""
    connectable = create_engine(record_store_url, poolclass=pool.NullPool)
    logger.info("Migrating record store (%s)", connectable.dialect.name)
    try:
        with connectable.connect() as connection:
            apply_migrations(connection)
    finally:
        connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
