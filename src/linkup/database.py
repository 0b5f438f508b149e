"""Database connection and session management."""

import asyncio
import logging
from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from linkup.config import settings
from linkup.errors import StoreError

logger = logging.getLogger(__name__)

engine = create_async_engine(settings.database_url, echo=False, pool_pre_ping=True)
async_session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def acquire_connection(
    session: AsyncSession,
    retries: int | None = None,
    delay: float | None = None,
) -> None:
    """
    Check out a connection for the session, retrying transient failures.

    Args:
        session: Session that needs a live connection
        retries: Number of attempts (defaults to settings.db_connect_retries)
        delay: Base delay between attempts in seconds, grows linearly

    Raises:
        StoreError: If no connection could be acquired
    """
    attempts = max(1, retries if retries is not None else settings.db_connect_retries)
    base_delay = delay if delay is not None else settings.db_connect_retry_delay_seconds

    for attempt in range(attempts):
        try:
            await session.connection()
            return
        except OperationalError as e:
            if attempt < attempts - 1:
                logger.warning(
                    "Database connection failed (attempt %d/%d): %s. Retrying...",
                    attempt + 1,
                    attempts,
                    e,
                )
                await asyncio.sleep(base_delay * (attempt + 1))
            else:
                logger.error("Database unavailable after %d attempts: %s", attempts, e)
                raise StoreError() from e


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency for getting database sessions."""
    async with async_session_maker() as session:
        await acquire_connection(session)
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


@asynccontextmanager
async def atomic(db: AsyncSession) -> AsyncIterator[AsyncSession]:
    """Run a block of statements as one unit: commit on success, roll back on failure."""
    try:
        yield db
        await db.commit()
    except Exception:
        await db.rollback()
        raise
