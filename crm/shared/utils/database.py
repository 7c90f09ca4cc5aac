"""
Database utilities for the CRM services

Wraps a bounded asyncpg pool. Connections are only ever handed out through
an async context manager, so they go back to the pool on every exit path.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import asyncpg
import structlog
from asyncpg import Connection, Pool

from crm.shared.config import DatabaseSettings
from crm.shared.utils.errors import StorageError
from crm.shared.utils.timing import ServerTiming

logger = structlog.get_logger(__name__)

# Failures that mean the store could not serve the request
STORAGE_EXCEPTIONS = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    OSError,
    asyncio.TimeoutError,
)


class Database:
    """Database connection pool shared by the handlers of one service"""

    def __init__(self, settings: DatabaseSettings):
        self.settings = settings
        self.pool: Optional[Pool] = None

    async def initialize(self):
        """Initialize database connection pool"""
        try:
            self.pool = await asyncpg.create_pool(
                dsn=self.settings.database_url,
                min_size=min(self.settings.db_pool_min_size, self.settings.db_pool_max_size),
                max_size=self.settings.db_pool_max_size,
                command_timeout=self.settings.db_command_timeout,
            )
            logger.info(
                "Database pool created",
                database=self.settings.database_name,
                max_size=self.settings.db_pool_max_size,
            )
        except STORAGE_EXCEPTIONS as e:
            logger.error("Failed to initialize database", error=str(e))
            raise StorageError() from e

    async def close(self):
        """Close database connection pool"""
        if self.pool:
            await self.pool.close()
            self.pool = None
            logger.info("Database pool closed")

    @asynccontextmanager
    async def connection(self, timing: Optional[ServerTiming] = None) -> AsyncIterator[Connection]:
        """
        Acquire a pooled connection for the duration of the block.

        Records the acquire time as the 'conn' stage. Store failures raised
        inside the block surface as StorageError.
        """
        if not self.pool:
            raise StorageError("Database pool not initialized")

        started_at = ServerTiming.now()
        try:
            async with self.pool.acquire(timeout=self.settings.db_acquire_timeout) as conn:
                if timing is not None:
                    timing.record("conn", started_at)
                yield conn
        except STORAGE_EXCEPTIONS as e:
            logger.error("Database operation failed", error=str(e), error_type=type(e).__name__)
            raise StorageError() from e

    @asynccontextmanager
    async def query(self, timing: Optional[ServerTiming] = None) -> AsyncIterator[None]:
        """Time the enclosed statement as the 'query' stage"""
        if timing is None:
            yield
            return
        with timing.measure("query"):
            yield

    async def ping(self, timing: Optional[ServerTiming] = None) -> None:
        """Run a trivial statement to probe acquire and round-trip latency"""
        async with self.connection(timing) as conn:
            async with self.query(timing):
                await conn.execute("SELECT 1")
