"""Database Session Manager — pooled async engine, one session per request.

Invariants:
    - A session that sees any exception is rolled back before the exception propagates
    - The exception itself is never rewritten here: the task services have already
      classified store failures into TaskBoardErrors (core/classify_errors.py)
    - pool_pre_ping on every checkout; connections recycled hourly

Design Decisions:
    - Module-level db_manager set by the FastAPI lifespan; get_db and the readiness
      route read it at call time
    - expire_on_commit=False: records are converted to dicts after commit
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

logger = logging.getLogger(__name__)


class DatabaseSessionManager:
    """Owns the engine and hands out rollback-on-error sessions."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        self.engine = create_async_engine(
            database_url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_pre_ping=True,
            pool_recycle=3600,
        )
        self._session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        async with self._session_factory() as session:
            try:
                yield session
            except Exception as e:
                await session.rollback()
                logger.warning(
                    f"Session rolled back after {type(e).__name__}",
                    extra={"operation": "session"},
                )
                raise

    async def health_check(self) -> bool:
        """True if a connection can be checked out and answers SELECT 1."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
