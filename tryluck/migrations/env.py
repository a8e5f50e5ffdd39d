"""Alembic runtime for tryluck.

The database URL always comes from the app config (``tryluck_env`` in
alembic.ini picks the config class), so `flask db upgrade`, plain `alembic`
and the test suite all migrate the same database the app will open.
"""

from __future__ import annotations

import sys
from logging.config import fileConfig
from pathlib import Path

from alembic import context
from sqlalchemy import engine_from_config, pool

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from tryluck import create_app  # noqa: E402
from tryluck.extensions import db  # noqa: E402

alembic_cfg = context.config
if alembic_cfg.config_file_name and Path(alembic_cfg.config_file_name).exists():
    fileConfig(alembic_cfg.config_file_name, disable_existing_loggers=False)

target_metadata = db.metadata


def _database_url() -> str:
    env_name = alembic_cfg.get_main_option("tryluck_env", "development")
    return create_app(env_name).config["SQLALCHEMY_DATABASE_URI"]


def _migrate_offline() -> None:
    """Emit SQL to stdout instead of executing it."""
    context.configure(
        url=_database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def _migrate_online() -> None:
    section = alembic_cfg.get_section(alembic_cfg.config_ini_section) or {}
    section["sqlalchemy.url"] = _database_url()
    engine = engine_from_config(section, prefix="sqlalchemy.", poolclass=pool.NullPool)

    with engine.connect() as connection:
        # SQLite cannot ALTER most constraints in place; batch mode rebuilds the table.
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            render_as_batch=connection.dialect.name == "sqlite",
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    _migrate_offline()
else:
    _migrate_online()
