"""
Async engine and session factory.

    async with get_sessionmaker()() as session:
        ...

The engine is created on first use from `get_settings().DATABASE_URL`, so importing this
module never opens a connection or requires configuration.
"""

from functools import lru_cache
from typing import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    create_async_engine,
    async_sessionmaker,
    AsyncSession,
)

from app.config.settings import get_settings


def enable_sqlite_savepoints(sync_engine: Engine) -> None:
    """
    Let SQLAlchemy own transaction boundaries on SQLite and turn on foreign keys.

    pysqlite/aiosqlite begin transactions lazily on their own, which breaks SAVEPOINT
    (`begin_nested`); with `isolation_level=None` the driver stays out of the way and
    the "begin" listener emits BEGIN itself. SQLite ignores foreign keys unless the
    pragma is set per connection.
    """

    @event.listens_for(sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")


def build_engine(url: str, *, echo: bool = False) -> AsyncEngine:
    if url.startswith("sqlite"):
        engine = create_async_engine(url, echo=echo)
        enable_sqlite_savepoints(engine.sync_engine)
        return engine

    return create_async_engine(
        url,
        echo=echo,
        pool_pre_ping=True,  # connection health checks
    )


@lru_cache()
def get_engine() -> AsyncEngine:
    settings = get_settings()
    return build_engine(settings.DATABASE_URL, echo=settings.SQLALCHEMY_ECHO)


@lru_cache()
def get_sessionmaker() -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency: one session per request.

    Commits when the request handler returns, rolls back when it raises.
    """
    async with get_sessionmaker()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
