"""Database Session Manager — async sessions scoped to a single request, with rollback and health checks.

Invariants:
    - Every session is closed on every exit path (success or failure)
    - Every session auto-rolls-back on exception (no partial commits leak)
    - SQLAlchemy exceptions that escape an operation are mapped to DatabaseError (core/errors.py)

Design Decisions:
    - null_pool=True for Lambda entry points: one physical connection per invocation,
      nothing survives between asyncio.run() calls
    - Pooled engine for the FastAPI dev server, created in the lifespan hook
    - expire_on_commit=False: mapped rows stay readable after commit
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)
from sqlalchemy.pool import NullPool

from sanitas.core.errors import DatabaseError

logger = logging.getLogger(__name__)

_PG_UNIQUE_VIOLATION = "23505"


class DatabaseSessionManager:
    """Manages async database sessions with rollback and health checks."""

    def __init__(
        self,
        database_url: str,
        pool_size: int = 5,
        max_overflow: int = 5,
        null_pool: bool = False,
    ):
        if null_pool:
            self.engine = create_async_engine(database_url, poolclass=NullPool)
        else:
            self.engine = create_async_engine(
                database_url,
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_pre_ping=True,
                pool_recycle=3600,
            )
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except IntegrityError as e:
            await session.rollback()
            logger.error(f"DB integrity error: {e}")
            raise DatabaseError("Integrity constraint violated", "commit")
        except OperationalError as e:
            await session.rollback()
            logger.error(f"DB operational error: {e}")
            raise DatabaseError("Connection or operational error", "execute")
        except DBAPIError as e:
            await session.rollback()
            logger.error(f"DB driver error: {e}")
            raise DatabaseError("Database driver error", "query")
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"SQLAlchemy error: {e}")
            raise DatabaseError("Database operation failed", "unknown")
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


def is_unique_violation(exc: IntegrityError) -> bool:
    """True when the integrity error comes from a UNIQUE constraint."""
    orig = exc.orig
    if getattr(orig, "sqlstate", None) == _PG_UNIQUE_VIOLATION:
        return True
    if getattr(orig, "pgcode", None) == _PG_UNIQUE_VIOLATION:
        return True
    # sqlite reports constraint kind only in the message
    return "UNIQUE constraint failed" in str(orig)


# Dev-server singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


def get_db_manager() -> DatabaseSessionManager:
    """FastAPI dependency for the session manager."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    return db_manager
