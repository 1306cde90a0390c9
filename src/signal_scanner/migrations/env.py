"""Alembic environment for the signals database.

The URL comes from the scanner config (``SCANNER_CONFIG`` path, then the
``SCANNER_DATABASE_URL`` override) and falls back to ``sqlalchemy.url`` in
alembic.ini when neither is set.
"""

from __future__ import annotations

import os
from logging.config import fileConfig

from alembic import context
from sqlalchemy.pool import NullPool

from signal_scanner.config.loader import load_config
from signal_scanner.db.base import Base
from signal_scanner.db.engine import create_db_engine, ensure_psycopg_driver

# Registers the signals table on Base.metadata
import signal_scanner.db.tables  # noqa: F401

alembic_cfg = context.config

if alembic_cfg.config_file_name is not None:
    fileConfig(alembic_cfg.config_file_name, disable_existing_loggers=False)

target_metadata = Base.metadata


def database_url() -> str:
    config_path = os.environ.get("SCANNER_CONFIG")
    if config_path or os.environ.get("SCANNER_DATABASE_URL"):
        return load_config(config_path).store.url
    return alembic_cfg.get_main_option("sqlalchemy.url")


def run_migrations_offline() -> None:
    """Emit SQL to stdout instead of connecting."""
    context.configure(
        url=ensure_psycopg_driver(database_url()),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    engine = create_db_engine(database_url(), poolclass=NullPool)
    with engine.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            render_as_batch=connection.dialect.name == "sqlite",
        )
        with context.begin_transaction():
            context.run_migrations()
    engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
