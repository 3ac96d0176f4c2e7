"""
Alembic env for petspotter. Migrations run on a sync driver: psycopg2 for
PostgreSQL, the stdlib sqlite3 module for SQLite.
"""

from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.pool import NullPool

from petspotter.config import get_settings
from petspotter.db.base import Base
from petspotter.db.models import PetPost, User  # noqa: F401 - registers the tables

SYNC_DRIVERS = {"postgresql": "postgresql+psycopg2", "sqlite": "sqlite"}

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)


def migration_url() -> str:
    """The app's async URL (or an explicit sqlalchemy.url) with its sync driver."""
    url = make_url(config.get_main_option("sqlalchemy.url") or get_settings().database_url)
    return url.set(drivername=SYNC_DRIVERS.get(url.get_backend_name(), url.drivername)).render_as_string(
        hide_password=False
    )


def run() -> None:
    url = migration_url()
    # SQLite cannot ALTER most constraints in place
    options = {"target_metadata": Base.metadata, "render_as_batch": url.startswith("sqlite")}
    if context.is_offline_mode():
        context.configure(url=url, literal_binds=True, **options)
        with context.begin_transaction():
            context.run_migrations()
        return

    engine = create_engine(url, poolclass=NullPool)
    with engine.connect() as connection:
        context.configure(connection=connection, **options)
        with context.begin_transaction():
            context.run_migrations()
    engine.dispose()


run()
