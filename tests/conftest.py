"""Shared test fixtures for Badge-Ledger."""

import pytest
from httpx import ASGITransport, AsyncClient


@pytest.fixture
def app(monkeypatch):
    """Create a test app with in-memory DB."""
    monkeypatch.setenv("BADGE_DB_URL", "sqlite+aiosqlite://")
    monkeypatch.setenv("BADGE_ENVIRONMENT", "development")

    # Clear caches and singletons so new env vars take effect
    from badge_ledger.common.config import get_settings
    get_settings.cache_clear()

    from badge_ledger.deps import reset_singletons
    reset_singletons()

    from badge_ledger.app import create_app
    return create_app()


@pytest.fixture
async def client(app):
    # Manually init DB since ASGITransport doesn't run lifespan
    from badge_ledger.deps import get_db
    db = get_db()
    await db.init()
    await db.create_all()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    await db.close()
