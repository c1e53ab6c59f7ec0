"""Database Session Manager - pooled async engine shared by every repository.

Invariants:
    - A session that raises is rolled back and closed; nothing half-written commits
    - Every SQLAlchemy failure leaves this module as DatabaseError (HTTP 503),
      including waiting too long for a pooled connection
    - Driver/storage text goes to the log only; callers see a fixed message

Design Decisions:
    - One manager per process (init_db at startup, dispose at shutdown);
      repositories receive it, not a session
    - expire_on_commit=False: repositories convert rows to records after commit
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
    TimeoutError as PoolTimeoutError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

from coupon_exchange.core.errors import DatabaseError

logger = logging.getLogger(__name__)

# Most specific first: IntegrityError and OperationalError are DBAPIErrors.
_FAILURE_MAP: tuple[tuple[type[SQLAlchemyError], str, str], ...] = (
    (IntegrityError, "commit", "Integrity constraint violated"),
    (PoolTimeoutError, "connect", "Timed out waiting for a connection"),
    (OperationalError, "execute", "Connection or operational error"),
    (DBAPIError, "query", "Database driver error"),
    (SQLAlchemyError, "unknown", "Database operation failed"),
)


def to_database_error(exc: SQLAlchemyError) -> DatabaseError:
    """Translate a SQLAlchemy exception into the client-safe DatabaseError."""
    for exc_type, operation, message in _FAILURE_MAP:
        if isinstance(exc, exc_type):
            return DatabaseError(message, operation)
    return DatabaseError("Database operation failed", "unknown")


class DatabaseSessionManager:
    """Owns the engine and hands out short-lived sessions."""

    def __init__(
        self,
        database_url: str,
        pool_size: int = 20,
        max_overflow: int = 10,
        pool_timeout: int = 10,
    ):
        self.engine = create_async_engine(
            database_url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_timeout=pool_timeout,
            pool_pre_ping=True,
            pool_recycle=3600,
        )
        self._session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            error = to_database_error(e)
            logger.error(
                f"{type(e).__name__} during {error.operation}: {e}",
                extra={"error_code": error.code},
            )
            raise error from e
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """SELECT 1 through the pool; False on any database failure."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
        except (DatabaseError, OSError) as e:
            logger.error(f"DB health check failed: {e}")
            return False
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    """Create the process-wide manager (FastAPI lifespan, maintenance entry point)."""
    return DatabaseSessionManager(database_url, **kwargs)
