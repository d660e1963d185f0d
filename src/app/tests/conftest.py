"""
Core pytest configuration for the entire test suite.

Database setup, logging and the HTTP client live here; domain fixtures (services,
factories, OSM payloads) live in tests/test_fixtures/ and are imported at the bottom so
every test module can use them without imports.

Tests run against SQLite (aiosqlite) in a temporary directory unless
`TEST_DATABASE_URL` points somewhere else (e.g. a PostgreSQL service in CI).
"""

from __future__ import annotations

import os
import logging
from urllib.parse import urlparse
from typing import AsyncGenerator

# Settings are validated on first use; provide what a test run needs before any app import.
os.environ.setdefault("POSTGRES_USERNAME", "campus")
os.environ.setdefault("POSTGRES_PASSWORD", "campus")
os.environ.setdefault("POSTGRES_HOST", "localhost")
os.environ.setdefault("POSTGRES_PORT", "5432")
os.environ.setdefault("POSTGRES_DB", "campus_coffee_test")
os.environ.setdefault("APPROVAL_MIN_COUNT", "3")
os.environ.setdefault("ENV", "testing")
os.environ.setdefault("LOG_TO_STDOUT", "true")

NOISY_LOGGERS = (
    "faker",
    "faker.factory",
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.engine.Engine",
    "asyncio",
    "httpx",
    "aiosqlite",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)


import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, AsyncSession

from app.config import get_settings
from app.core.logging.builder import setup_logging
from app.database.base import Base
from app.database.session import build_engine
from app import models  # noqa: F401  registers the tables with Base.metadata

settings = get_settings()
logger = logging.getLogger(__name__)


@pytest.fixture(scope="session", autouse=True)
def configure_logging():
    """
    Install application logging for the test session.

    pytest attaches its capture handler to the root logger per test phase, after this
    runs, so `caplog` still sees every record.
    """
    setup_logging(settings)
    yield


def safe_log_db_url(db_url: str) -> str:
    """Scheme, host, port and database only; credentials stay out of the logs."""
    parsed = urlparse(db_url)
    return f"{parsed.scheme}://{parsed.hostname or ''}:{parsed.port or ''}/{parsed.path.lstrip('/')}"


@pytest.fixture(scope="session")
def test_database_url(tmp_path_factory) -> str:
    if test_url := os.getenv("TEST_DATABASE_URL"):
        return test_url
    db_file = tmp_path_factory.mktemp("db") / "campus_coffee_test.db"
    return f"sqlite+aiosqlite:///{db_file}"


@pytest.fixture(scope="session")
async def async_engine(test_database_url: str) -> AsyncGenerator[AsyncEngine, None]:
    logger.info(f"Using test DB: {safe_log_db_url(test_database_url)}")
    engine = build_engine(test_database_url)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture()
async def db_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """
    One outer transaction per test, rolled back at the end.

    The session joins the outer transaction through a SAVEPOINT
    (`join_transaction_mode="create_savepoint"`), so code under test may flush, use
    `begin_nested()` or even commit without anything surviving the test.
    """
    async with async_engine.connect() as connection:
        connection: AsyncConnection
        await connection.begin()

        session = AsyncSession(
            bind=connection,
            join_transaction_mode="create_savepoint",
            expire_on_commit=False,
        )
        try:
            yield session
        finally:
            await session.close()
            await connection.rollback()


@pytest.fixture()
async def api_client(db_session: AsyncSession, osm_transport) -> AsyncGenerator[httpx.AsyncClient, None]:
    """
    HTTP client for the FastAPI app, in-process over ASGI.

    Requests share the test session; OSM calls go to `osm_transport`.
    """
    from app.clients.osm_client import OsmClient
    from app.core.dependencies import get_osm_client
    from app.database.session import get_async_session
    from app.main import app

    async def _session_override():
        yield db_session

    app.dependency_overrides[get_async_session] = _session_override
    app.dependency_overrides[get_osm_client] = lambda: OsmClient(
        "https://osm.test/api/0.6", transport=osm_transport
    )
    try:
        async with httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app), base_url="http://testserver"
        ) as client:
            yield client
    finally:
        app.dependency_overrides.clear()


from app.tests.test_fixtures.service_fixtures import (  # noqa: E402
    pos_service,
    user_service,
    review_service,
    approval_configuration,
    pos_factory,
    user_factory,
    create_pos,
    create_user,
    create_review,
)
from app.tests.test_fixtures.osm_fixtures import (  # noqa: E402
    osm_node_xml,
    osm_tags,
    osm_transport,
    osm_requests,
    osm_client,
)
