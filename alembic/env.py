import os
import sys
from logging.config import fileConfig
from sqlalchemy import pool, create_engine
from alembic import context

# Make the project packages importable when alembic runs from the repo root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config.app_config import DATABASE_URL  # noqa: E402  loads .env
from database.models import Base  # noqa: E402
from database import marketplace_models  # noqa: E402,F401  registers promotional tables

config = context.config

# Interpret the config file for Python logging.
if config.config_file_name:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _database_url():
    # Environment wins over alembic.ini so deployments only set DATABASE_URL
    return os.getenv("DATABASE_URL") or DATABASE_URL or config.get_main_option("sqlalchemy.url")


def run_migrations_offline():
    """Emit SQL to stdout without a live connection."""
    context.configure(
        url=_database_url(), target_metadata=target_metadata, literal_binds=True, dialect_opts={"paramstyle": "named"}
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    """Apply migrations against the configured database."""
    connectable = create_engine(_database_url(), poolclass=pool.NullPool)

    with connectable.connect() as connection:
        context.configure(
            connection=connection, target_metadata=target_metadata
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
