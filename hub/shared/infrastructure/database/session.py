# 📄 File: hub/shared/infrastructure/database/session.py
#
# 🧭 Purpose (Layman Explanation):
# Hands out database "conversations" (sessions) to the services. A write conversation is
# saved only if every step in it succeeded; otherwise everything in it is undone.
#
# 🧪 Purpose (Technical Summary):
# Async SQLAlchemy session factory over an injected DatabaseConnectionManager with two
# explicit scopes: an owned transaction (commit on success, rollback and re-raise the
# original exception on failure) and a read-only session (never commits).
#
# 🔗 Dependencies:
# - sqlalchemy.ext.asyncio (AsyncSession, async_sessionmaker)
# - hub/shared/infrastructure/database/connection.py (engine owner)
#
# 🔄 Connected Modules / Calls From:
# - hub/shared/core/dependencies.py (FastAPI dependencies)
# - Entity, account and auth domain services

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from hub.shared.infrastructure.database.connection import DatabaseConnectionManager

logger = logging.getLogger(__name__)


class DatabaseSessionManager:
    """
    Opens sessions against the connection manager's engine.

    Services that offer a participating variant of an operation take the
    ``AsyncSession`` yielded by ``transaction()`` and never finalize it.
    """

    def __init__(self, connection_manager: DatabaseConnectionManager):
        self._connection_manager = connection_manager
        self._session_factory = async_sessionmaker(
            connection_manager.engine,
            class_=AsyncSession,
            expire_on_commit=False,  # Keep objects accessible after commit
            autoflush=True,
        )

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Open, run and finalize a new transaction.

        Yields:
            AsyncSession: Session bound to the new transaction
        """
        session: AsyncSession = self._session_factory()

        try:
            yield session

            await session.commit()
            logger.debug("Database transaction committed successfully")

        except Exception as e:
            await session.rollback()
            logger.debug(f"Transaction rolled back: {type(e).__name__}")
            raise

        finally:
            await session.close()

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Get a read-only database session (no automatic commit).

        Yields:
            AsyncSession: Read-only database session
        """
        session: AsyncSession = self._session_factory()

        try:
            yield session
        finally:
            await session.close()
