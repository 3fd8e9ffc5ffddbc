# 📄 File: hub/shared/infrastructure/database/connection.py
#
# 🧭 Purpose (Layman Explanation):
# Manages the connection to the back-office database: opening it when the service starts,
# making sure all tables exist, checking it is reachable, and closing it on shutdown.
#
# 🧪 Purpose (Technical Summary):
# Explicit async SQLAlchemy engine owner constructed once per application and passed to
# the session manager (no module-level globals). Performs connectivity checks and the
# startup schema sync (metadata.create_all).
#
# 🔗 Dependencies:
# - sqlalchemy (async engine)
# - hub/shared/config (settings, engine options, declarative metadata)
# - asyncpg / aiosqlite drivers
#
# 🔄 Connected Modules / Calls From:
# - hub/main.py (lifespan startup/shutdown)
# - hub/shared/infrastructure/database/session.py (session factory)
# - hub/api/v1/router.py (health endpoint)

import logging
from typing import Any, Dict, Optional

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from hub.shared.config.database import DatabaseBase, DatabaseConfig
from hub.shared.config.settings import Settings
from hub.shared.core.exceptions import DatabaseError
from hub.shared.utils.helpers import utc_now

logger = logging.getLogger(__name__)


class DatabaseConnectionManager:
    """
    Owns the async engine for one application instance.

    Lifecycle: ``initialize()`` then ``sync_schema()`` at startup,
    ``close()`` at shutdown.
    """

    def __init__(self, settings: Settings):
        self._settings = settings
        self._config = DatabaseConfig(settings)
        self._engine: Optional[AsyncEngine] = None
        self._health_check_query = text("SELECT 1")

    async def initialize(self) -> None:
        """Create the engine and verify connectivity."""
        if self._engine is not None:
            logger.warning("Database engine already initialized")
            return

        logger.info("Initializing database connection pool...")
        self._engine = create_async_engine(self._config.database_url, **self._config.engine_kwargs)
        self._register_connection_events()

        try:
            async with self._engine.connect() as conn:
                await conn.execute(self._health_check_query)
        except Exception as e:
            logger.error(f"Failed to initialize database connection: {e}")
            await self._engine.dispose()
            self._engine = None
            raise

        logger.info(f"Database connection initialized ({self._engine.url.get_backend_name()})")

    def _register_connection_events(self) -> None:
        """Register SQLAlchemy connection event listeners."""
        if self._engine is None or not self._settings.is_sqlite:
            return

        @event.listens_for(self._engine.sync_engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            """SQLite only enforces foreign keys when asked to, per connection."""
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    async def sync_schema(self) -> None:
        """Create every registered table that does not exist yet."""
        engine = self.engine
        async with engine.begin() as conn:
            await conn.run_sync(DatabaseBase.metadata.create_all)
        logger.info(f"Database schema synchronized ({len(DatabaseBase.metadata.tables)} tables)")

    async def health_check(self) -> Dict[str, Any]:
        """
        Perform database health check and return structured status.
        """
        if self._engine is None:
            return {
                "status": "unhealthy",
                "error": "Database engine not initialized",
                "timestamp": utc_now().isoformat()
            }

        try:
            async with self._engine.connect() as conn:
                result = await conn.execute(self._health_check_query)
                result.scalar()
        except Exception as e:
            logger.warning(f"Database health check failed: {e}")
            return {
                "status": "unhealthy",
                "error": type(e).__name__,
                "timestamp": utc_now().isoformat()
            }

        return {
            "status": "healthy",
            "timestamp": utc_now().isoformat()
        }

    async def close(self) -> None:
        """Close database engine and all connections."""
        if self._engine is None:
            logger.warning("Database engine not initialized, nothing to close")
            return

        logger.info("Closing database connection pool...")
        await self._engine.dispose()
        self._engine = None
        logger.info("Database connection pool closed successfully")

    @property
    def engine(self) -> AsyncEngine:
        """Get the SQLAlchemy async engine."""
        if self._engine is None:
            raise DatabaseError("Database engine not initialized", operation="engine")
        return self._engine

    @property
    def is_initialized(self) -> bool:
        """Check if database engine is initialized."""
        return self._engine is not None
