"""
Database engine and session management for the snapshot store.

The API gets sessions through the `get_session` dependency; jobs open one
with `session_scope()`. Both commit on success and roll back on failure.
"""

import logging
from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from stockcheck.config import settings
from stockcheck.models.db import Base

logger = logging.getLogger(__name__)

engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    pool_pre_ping=True,
)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


@asynccontextmanager
async def session_scope() -> AsyncIterator[AsyncSession]:
    """Open a session that commits on exit and rolls back on database errors."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except SQLAlchemyError:
            await session.rollback()
            raise


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency providing a snapshot store session per request."""
    async with session_scope() as session:
        yield session


async def init_db() -> None:
    """
    Create the snapshot tables if they do not exist.

    Called at application startup and before jobs write snapshots.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Snapshot store ready at %s", engine.url.render_as_string(hide_password=True))

