"""
Storefront Backend: Database Engine Management
===============================================

What:  Async SQLAlchemy engine, session factory, and declarative base.
How:   One engine per process. Every request shares it; each gateway
       operation borrows a session (and therefore a connection) for the
       duration of its statements and gives it back afterwards.
When:  Engine is created at module import; disposed on application shutdown.

Concurrency:
    Requests run as coroutines on a single event loop. A request suspends at
    each `await` on a query and other requests progress meanwhile. There is no
    application-level lock around the engine; conflicting writes are left to
    the database's own row-level concurrency control.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from storefront.config import settings


def build_engine(database_url: str) -> AsyncEngine:
    """Create an async engine for *database_url* with the configured pool checks."""
    return create_async_engine(
        database_url,
        # Why pre-ping: a pooled connection the server dropped while idle is
        # replaced before use instead of failing the first query of a request
        pool_pre_ping=settings.db_pool_pre_ping,
        # SQL echo only when debugging; it is very noisy otherwise
        echo=settings.log_level == "DEBUG",
    )


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False: rows read in a session stay usable after commit
    # Why: insert_order commits once per statement and keeps using the same
    # session; expiring after each commit would force a reload round trip
    return async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False)


# ── Process-wide engine ───────────────────────────────────────────────────
engine = build_engine(settings.database_url)
async_session_factory = build_session_factory(engine)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    The schema itself is owned by the database (no migrations are shipped);
    the metadata here describes the existing tables and lets the test suite
    create them in a throwaway SQLite file.
    """
    pass


async def dispose_engine() -> None:
    """Close all pooled connections. Called during application shutdown."""
    await engine.dispose()
