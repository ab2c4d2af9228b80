"""Integration-test fixtures.

Requires PostgreSQL with `alembic upgrade head` applied (including the dev
agent seed) and a running Redis. Skipped unless RUN_INTEGRATION_TESTS=1.

All integration tests share a single event-loop so that the module-level
SQLAlchemy async engine pool and Redis pool remain valid across the session.
"""

import os

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

if not os.environ.get("RUN_INTEGRATION_TESTS"):
    collect_ignore_glob = ["test_*.py"]


@pytest_asyncio.fixture(loop_scope="session", scope="session")
async def client() -> AsyncClient:  # type: ignore[override]
    """Session-scoped async HTTP client, keeps the engine pool alive."""
    from src.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
