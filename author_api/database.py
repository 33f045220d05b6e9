"""
Author API: Database Session Management
=========================================

What:  Async SQLAlchemy engine, session factory, and the declarative base.
How:   ``Database`` owns one pooled async engine per application. Its
       ``session()`` context manager yields one session per request, rolls back
       whatever is left uncommitted on error, and always closes. Writes are
       committed by the repository inside the storage call.
Who:   Built by ``create_app()`` and stored on ``app.state.database``;
       route dependencies reach it through the request.
When:  Engine is created with the app; sessions are created per request.

Connection Pooling:
    pool_size=20:      Persistent connections for normal load
    max_overflow=10:   Temporary connections for traffic spikes (total max = 30)
    pool_pre_ping:     Validates connections before use
    pool_recycle=3600: Recycles connections every hour

    SQLite (used by the test suite) ignores the pool sizing options.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from author_api.config import DatabaseSettings


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object, which Alembic reads for migrations and
    the test suite uses to create the schema.
    """
    pass


class Database:
    """
    Engine and session factory bound to one ``DatabaseSettings``.

    Attributes:
        engine:           The pooled ``AsyncEngine``
        session_factory:  ``async_sessionmaker`` producing ``AsyncSession``s
    """

    def __init__(
        self,
        settings: DatabaseSettings,
        logger: Optional[logging.Logger] = None,
    ):
        self.logger = logger or logging.getLogger(__name__)
        url = settings.sqlalchemy_url()

        engine_kwargs = {
            "echo": settings.echo,
            "pool_pre_ping": settings.pool_pre_ping,
            # Keep bound values out of DBAPI error messages
            "hide_parameters": True,
        }
        if url.get_backend_name() != "sqlite":
            engine_kwargs.update(
                pool_size=settings.pool_size,
                max_overflow=settings.max_overflow,
                pool_recycle=3600,
            )

        self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)

        # expire_on_commit=False: rows stay readable after the request commits
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Provide a request-scoped session.

        How it works:
            1. Creates a new session from the factory
            2. Hands it to the ``async with`` body (the repository executes and commits)
            3. On error: rolls back and re-raises
            4. Always: closes the session (returns connection to pool)
        """
        async with self.session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def ping(self) -> bool:
        """Run ``SELECT 1``; False when the database cannot be reached."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as e:
            self.logger.warning("Database ping failed: %s", str(e))
            return False
        return True

    async def create_all(self) -> None:
        """Create every table registered on ``Base.metadata``."""
        # Models must be imported so their tables are registered
        from author_api.models import author  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def dispose(self) -> None:
        """Close all connections in the pool (application shutdown)."""
        await self.engine.dispose()
