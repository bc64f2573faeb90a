"""
Database connection management using asyncpg for neo-quotas.
"""
import asyncio
import logging
import os
from contextlib import asynccontextmanager
from typing import Any, List, Optional

import asyncpg
from asyncpg import Connection, Pool, Record

from ..core.exceptions import DatabaseError, LockTimeoutError, TransientStoreError

logger = logging.getLogger(__name__)


# Errors that mean "try again later", never "quota exceeded"
LOCK_TIMEOUT_ERRORS = (
    asyncpg.exceptions.LockNotAvailableError,
    asyncpg.exceptions.QueryCanceledError,
)

TRANSIENT_ERRORS = (
    asyncpg.exceptions.SerializationError,
    asyncpg.exceptions.DeadlockDetectedError,
    asyncpg.exceptions.PostgresConnectionError,
    asyncpg.exceptions.TooManyConnectionsError,
    asyncpg.exceptions.CannotConnectNowError,
    asyncpg.exceptions.InterfaceError,
    asyncio.TimeoutError,
    OSError,
)


@asynccontextmanager
async def translate_errors(operation: str, lock_key: Optional[str] = None, lock_timeout_ms: Optional[int] = None):
    """Translate asyncpg failures raised inside the block into neo-quotas errors.

    Args:
        operation: Operation name used in error messages
        lock_key: Key of the per-key lock held or awaited, if any
        lock_timeout_ms: Lock timeout reported on LockTimeoutError
    """
    try:
        yield
    except LOCK_TIMEOUT_ERRORS as e:
        logger.warning(f"Lock timeout during {operation} (key={lock_key}): {e}")
        raise LockTimeoutError(lock_key or operation, lock_timeout_ms) from e
    except TRANSIENT_ERRORS as e:
        logger.warning(f"Transient store failure during {operation}: {e}")
        raise TransientStoreError(operation, str(e)) from e
    except asyncpg.PostgresError as e:
        logger.error(f"Database error during {operation}: {e}")
        raise DatabaseError(f"Failed to {operation}: {e}") from e


class DatabaseManager:
    """Manages the asyncpg pool and transactions for quota storage."""

    def __init__(self, database_url: Optional[str] = None, **pool_config):
        """Initialize DatabaseManager.

        Args:
            database_url: Database URL (defaults to DATABASE_URL env var)
            **pool_config: Additional pool configuration options
        """
        self.pool: Optional[Pool] = None
        self.dsn = database_url or os.getenv("DATABASE_URL", "")
        if "+asyncpg" in self.dsn:
            self.dsn = self.dsn.replace("+asyncpg", "")

        self.pool_config = {
            "min_size": 5,
            "max_size": 20,
            "max_inactive_connection_lifetime": 300,
            "command_timeout": 30,
            **pool_config
        }
        self._pool_lock = asyncio.Lock()

    async def create_pool(self) -> Pool:
        """Create and return a connection pool."""
        async with self._pool_lock:
            if self.pool is None:
                logger.info(f"Creating database pool with size {self.pool_config['max_size']}")

                app_name = os.getenv("APP_NAME", "neo-quotas")
                async with translate_errors("create database pool"):
                    self.pool = await asyncpg.create_pool(
                        self.dsn,
                        server_settings={"application_name": app_name},
                        **self.pool_config
                    )
                logger.info("Database pool created successfully")
        return self.pool

    async def close_pool(self):
        """Close the connection pool."""
        if self.pool:
            await self.pool.close()
            self.pool = None
            logger.info("Database pool closed")

    @asynccontextmanager
    async def acquire(self):
        """Acquire a connection from the pool."""
        if not self.pool:
            await self.create_pool()

        async with self.pool.acquire() as connection:
            yield connection

    @asynccontextmanager
    async def transaction(
        self,
        lock_timeout_ms: Optional[int] = None,
        statement_timeout_ms: Optional[int] = None,
    ):
        """Create a transaction context.

        Timeouts are applied with ``SET LOCAL`` so they end with the
        transaction and bound how long a lock can be waited for or held.
        """
        async with self.acquire() as connection:
            async with connection.transaction():
                if lock_timeout_ms is not None:
                    await connection.execute(f"SET LOCAL lock_timeout = '{int(lock_timeout_ms)}ms'")
                if statement_timeout_ms is not None:
                    await connection.execute(f"SET LOCAL statement_timeout = '{int(statement_timeout_ms)}ms'")
                yield connection

    async def execute(self, query: str, *args, timeout: float = None) -> str:
        """Execute a query without returning results."""
        async with self.acquire() as connection:
            return await connection.execute(query, *args, timeout=timeout)

    async def fetch(self, query: str, *args, timeout: float = None) -> List[Record]:
        """Fetch multiple rows."""
        async with self.acquire() as connection:
            return await connection.fetch(query, *args, timeout=timeout)

    async def fetchrow(self, query: str, *args, timeout: float = None) -> Optional[Record]:
        """Fetch a single row."""
        async with self.acquire() as connection:
            return await connection.fetchrow(query, *args, timeout=timeout)

    async def fetchval(self, query: str, *args, column: int = 0, timeout: float = None) -> Any:
        """Fetch a single value."""
        async with self.acquire() as connection:
            return await connection.fetchval(query, *args, column=column, timeout=timeout)

    async def health_check(self) -> bool:
        """Check database health."""
        try:
            async with self.acquire() as connection:
                result = await connection.fetchval("SELECT 1")
                return result == 1
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return False

