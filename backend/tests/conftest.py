"""
Shared fixtures: per-test settings and a throwaway SQLite database.
"""

import os
from datetime import datetime, timezone

import pytest
from sqlalchemy import func, select

# Required settings must exist before app modules build anything at import
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("AUTH_SECRET", "import-time-secret")

from app.core.config import get_settings  # noqa: E402
from app.db.database import close_db, get_db_session, init_db  # noqa: E402
from app.db.schema import create_tables  # noqa: E402
from app.models.domain import User  # noqa: E402

TEST_SECRET = "test-secret-key"


@pytest.fixture(autouse=True)
def settings_env(tmp_path, monkeypatch):
    """Point settings at a fresh database file for every test."""
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    monkeypatch.setenv("AUTH_SECRET", TEST_SECRET)
    monkeypatch.setenv("AUTH_COOKIE_SECURE", "false")
    monkeypatch.setenv("AUTH_GUEST_ENABLED", "true")

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
async def db():
    """Initialized engine with all tables created."""
    await init_db()
    await create_tables()
    yield
    await close_db()


async def count_rows(model) -> int:
    async with get_db_session() as session:
        result = await session.execute(select(func.count()).select_from(model))
        return result.scalar() or 0


async def count_users() -> int:
    return await count_rows(User)


def at(minute: int) -> datetime:
    """Fixed UTC timestamp, ``minute`` minutes past a reference hour."""
    return datetime(2024, 5, 1, 12, minute, tzinfo=timezone.utc)
