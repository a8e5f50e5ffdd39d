import os
import sys
from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config as AlembicConfig

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from tryluck import create_app  # noqa: E402
from tryluck.core.auth.auth_service import issue_user_token  # noqa: E402
from tryluck.core.users.models import User  # noqa: E402
from tryluck.extensions import db  # noqa: E402


# ==================== Pytest Markers ====================
def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (database, API)")


def _alembic_config() -> AlembicConfig:
    cfg = AlembicConfig(str(ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(ROOT / "tryluck" / "migrations"))
    cfg.set_main_option("tryluck_env", "testing")
    return cfg


@pytest.fixture(scope="session", autouse=True)
def migrated_db():
    """Apply migrations once per session to mirror production schema."""
    os.environ.setdefault("APP_ENV", "testing")
    test_db = ROOT / "instance" / "test.db"
    if test_db.exists() and not os.environ.get("TEST_DATABASE_URL"):
        test_db.unlink()
    cfg = _alembic_config()
    command.upgrade(cfg, "head")
    yield
    command.downgrade(cfg, "base")


@pytest.fixture()
def app(migrated_db):
    """Per-test app; every table is emptied afterwards so tests stay independent."""
    app = create_app("testing")
    ctx = app.app_context()
    ctx.push()
    try:
        yield app
    finally:
        db.session.rollback()
        for table in reversed(db.metadata.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()
        db.session.remove()
        ctx.pop()


@pytest.fixture()
def client(app):
    return app.test_client()


def make_user(email: str = "user@example.com", **fields) -> User:
    user = User(
        email=email,
        display_name=fields.pop("display_name", "Test User"),
        auth_method=fields.pop("auth_method", "email"),
        **fields,
    )
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture()
def user(app) -> User:
    return make_user()


@pytest.fixture()
def other_user(app) -> User:
    return make_user("other@example.com", display_name="Other User")


@pytest.fixture()
def auth_headers(user):
    return {"Authorization": f"Bearer {issue_user_token(user)}"}


@pytest.fixture()
def user_factory(app):
    return make_user
