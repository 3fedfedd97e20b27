"""Database engine, session factory and transaction scope."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from smartpark.services.exceptions import StorageFailure

logger = logging.getLogger(__name__)


def create_engine(url: str, echo: bool = False) -> AsyncEngine:
    """Create the async engine.

    SQLite transactions are opened with ``BEGIN IMMEDIATE`` so that writers
    queue on the database lock instead of racing, standing in for the row
    locks PostgreSQL takes on ``SELECT ... FOR UPDATE``.
    """
    engine = create_async_engine(url, echo=echo)

    if engine.dialect.name == "sqlite":

        @event.listens_for(engine.sync_engine, "connect")
        def _disable_driver_begin(dbapi_connection, connection_record):
            dbapi_connection.isolation_level = None

        @event.listens_for(engine.sync_engine, "begin")
        def _begin_immediate(conn):
            conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the session factory bound to ``engine``."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@asynccontextmanager
async def atomic(session: AsyncSession) -> AsyncIterator[AsyncSession]:
    """Run the enclosed block as one transaction.

    Commits when the block exits cleanly and rolls back on every other exit
    path. Storage errors are re-raised as ``StorageFailure``; domain errors
    propagate unchanged. After a rollback every object held by the session
    is expired, so callers must re-read it instead of using the old instance.
    """
    try:
        yield session
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.exception("Transaction rolled back after storage error")
        raise StorageFailure(str(exc.__class__.__name__)) from exc
    except BaseException:
        await session.rollback()
        raise
