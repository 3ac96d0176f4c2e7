"""
Migration tests - the Alembic history builds the same tables as the models.
"""

from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

ALEMBIC_DIR = Path(__file__).resolve().parents[1] / "alembic"


def _config(database_url: str) -> Config:
    config = Config()
    config.set_main_option("script_location", str(ALEMBIC_DIR))
    config.set_main_option("sqlalchemy.url", database_url)
    return config


def test_upgrade_and_downgrade_on_async_url(tmp_path):
    db_file = tmp_path / "migrated.db"
    # The app's async URL; migrations switch to the sync driver themselves
    config = _config(f"sqlite+aiosqlite:///{db_file}")

    command.upgrade(config, "head")
    engine = create_engine(f"sqlite:///{db_file}")
    inspector = inspect(engine)
    assert {"users", "pet_posts", "alembic_version"} <= set(inspector.get_table_names())
    assert {c["name"] for c in inspector.get_columns("pet_posts")} >= {"status", "species", "owner_id", "image_url"}

    command.downgrade(config, "base")
    assert set(inspect(engine).get_table_names()) == {"alembic_version"}
    engine.dispose()
