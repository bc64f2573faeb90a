"""Usage counter repository backed by PostgreSQL.

Mutations run inside one transaction per call:

1. ``SET LOCAL lock_timeout`` and ``statement_timeout`` bound lock wait and hold time.
2. ``pg_advisory_xact_lock`` on ``organization_id:quota_type`` serializes
   writers for the key, including before the first row exists.
3. The row is read and written back with an upsert, then the transaction
   commits and the advisory lock is released.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional

from asyncpg import Connection

from ....core.value_objects import OrganizationId
from ....database import DatabaseManager, translate_errors
from ..entities.usage_record import UsageRecord
from ..utils.queries import (
    USAGE_ADVISORY_LOCK,
    USAGE_GET,
    USAGE_LIST_BY_ORGANIZATION,
    USAGE_UPSERT,
)

logger = logging.getLogger(__name__)


def usage_lock_key(organization_id: OrganizationId, quota_type: str) -> str:
    """Key used for the per-record lock."""
    return f"{organization_id}:{quota_type}"


def map_row_to_usage(row) -> UsageRecord:
    return UsageRecord(
        organization_id=OrganizationId(row["organization_id"]),
        quota_type=row["quota_type"],
        current_usage=row["current_usage"],
        period_start=row["period_start"],
        period_end=row["period_end"],
        updated_at=row["updated_at"],
    )


class DatabaseUsageUnit:
    """Usage record access bound to a locked transaction."""

    def __init__(self, connection: Connection, schema: str, organization_id: OrganizationId, quota_type: str):
        self._connection = connection
        self._schema = schema
        self.organization_id = organization_id
        self.quota_type = quota_type

    async def load(self) -> Optional[UsageRecord]:
        query = USAGE_GET.format(schema=self._schema)
        row = await self._connection.fetchrow(query, str(self.organization_id), self.quota_type)
        return map_row_to_usage(row) if row else None

    async def store(self, record: UsageRecord) -> None:
        query = USAGE_UPSERT.format(schema=self._schema)
        await self._connection.execute(
            query,
            str(record.organization_id),
            record.quota_type,
            record.current_usage,
            record.period_start,
            record.period_end,
            record.updated_at,
        )


class UsageDatabaseRepository:
    """Database repository for usage counters."""

    def __init__(
        self,
        database: DatabaseManager,
        schema: str = "quotas",
        lock_timeout_ms: int = 5000,
        statement_timeout_ms: int = 10000,
    ):
        self._db = database
        self._schema = schema
        self._lock_timeout_ms = lock_timeout_ms
        self._statement_timeout_ms = statement_timeout_ms

    async def find(self, organization_id: OrganizationId, quota_type: str) -> Optional[UsageRecord]:
        """Read a record without locking."""
        query = USAGE_GET.format(schema=self._schema)
        async with translate_errors("read quota usage"):
            row = await self._db.fetchrow(query, str(organization_id), quota_type)
        return map_row_to_usage(row) if row else None

    async def find_by_organization(self, organization_id: OrganizationId) -> List[UsageRecord]:
        """Read all records of an organization without locking."""
        query = USAGE_LIST_BY_ORGANIZATION.format(schema=self._schema)
        async with translate_errors("list quota usage"):
            rows = await self._db.fetch(query, str(organization_id))
        return [map_row_to_usage(row) for row in rows]

    @asynccontextmanager
    async def lock(self, organization_id: OrganizationId, quota_type: str) -> AsyncIterator[DatabaseUsageUnit]:
        """Open a transaction holding the advisory lock for the key.

        The transaction commits when the block exits normally and rolls
        back on any exception, so a failed unit leaves no partial write.
        """
        lock_key = usage_lock_key(organization_id, quota_type)
        async with translate_errors("update quota usage", lock_key=lock_key, lock_timeout_ms=self._lock_timeout_ms):
            async with self._db.transaction(
                lock_timeout_ms=self._lock_timeout_ms,
                statement_timeout_ms=self._statement_timeout_ms,
            ) as connection:
                await connection.execute(USAGE_ADVISORY_LOCK, lock_key)
                logger.debug(f"Acquired usage lock {lock_key}")
                yield DatabaseUsageUnit(connection, self._schema, organization_id, quota_type)
