"""
Precisely Documents: Database Engine and Session Factory
=========================================================

What:  Builds the async SQLAlchemy engine and session factory, and hosts the
       declarative `Base` every ORM model registers with.
How:   `build_engine()` is called once by the application factory; the engine
       is the single shared handle to the store and its pool serves
       concurrent requests. Repositories receive the session factory, open
       one session per operation, and never touch module-level state.
Who:   `precisely.main`, the repository layer, Alembic and the test suite.
"""

import logging

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from precisely.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object, which Alembic reads for autogeneration
    and `create_schema()` uses to emit DDL.
    """
    pass


# ── Engine & Sessions ─────────────────────────────────────────────────────
def build_engine(settings: Settings) -> AsyncEngine:
    """
    What:  Creates the async engine for the configured database URL.
    When:  Once per application, inside `create_app()`.

    No connection is opened here; the pool connects lazily on first use.
    SQL echo follows DEBUG logging.
    """
    return create_async_engine(
        settings.sqlalchemy_url,
        pool_pre_ping=settings.db_pool_pre_ping,
        echo=settings.log_level == "DEBUG",
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Session factory bound to `engine`.

    expire_on_commit=False keeps loaded attributes readable after the
    transaction closes, which the repository relies on when converting rows.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def create_schema(engine: AsyncEngine) -> None:
    """
    Creates every table registered on `Base.metadata` if it is missing.

    Used by the tests and for local SQLite runs; deployments apply the
    Alembic revisions instead.
    """
    # Registers DocumentRecord on Base.metadata
    from precisely.models import document  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine(engine: AsyncEngine) -> None:
    """
    What:  Closes every pooled connection.
    When:  Application shutdown (lifespan handler).
    """
    await engine.dispose()
    logger.info("Database engine disposed")
