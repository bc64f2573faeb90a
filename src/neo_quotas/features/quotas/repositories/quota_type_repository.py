"""Quota type repository backed by PostgreSQL."""

import logging
from typing import List, Optional

from ....core.value_objects import limit_from_storage, limit_to_storage
from ....database import DatabaseManager, translate_errors
from ..entities.quota_type import QuotaType
from ..utils.queries import (
    QUOTA_TYPE_GET_BY_NAME,
    QUOTA_TYPE_LIST_ALL,
    QUOTA_TYPE_UPSERT,
)

logger = logging.getLogger(__name__)


class QuotaTypeDatabaseRepository:
    """Database repository for the quota type catalog."""

    def __init__(self, database: DatabaseManager, schema: str = "quotas"):
        """Initialize with a database manager.

        Args:
            database: Database manager owning the asyncpg pool
            schema: Database schema name
        """
        self._db = database
        self._schema = schema

    async def list_all(self) -> List[QuotaType]:
        """List all registered quota types."""
        query = QUOTA_TYPE_LIST_ALL.format(schema=self._schema)
        async with translate_errors("list quota types"):
            rows = await self._db.fetch(query)
        return [self._map_row_to_quota_type(row) for row in rows]

    async def find_by_name(self, name: str) -> Optional[QuotaType]:
        """Find a quota type by name."""
        query = QUOTA_TYPE_GET_BY_NAME.format(schema=self._schema)
        async with translate_errors("get quota type"):
            row = await self._db.fetchrow(query, name)
        return self._map_row_to_quota_type(row) if row else None

    async def save(self, quota_type: QuotaType) -> QuotaType:
        """Insert or update a quota type."""
        query = QUOTA_TYPE_UPSERT.format(schema=self._schema)
        async with translate_errors("save quota type"):
            row = await self._db.fetchrow(
                query,
                quota_type.name,
                quota_type.description,
                limit_to_storage(quota_type.default_limit),
                quota_type.is_time_windowed,
                quota_type.window_seconds,
            )
        logger.debug(f"Saved quota type '{quota_type.name}'")
        return self._map_row_to_quota_type(row) if row else quota_type

    @staticmethod
    def _map_row_to_quota_type(row) -> QuotaType:
        return QuotaType(
            name=row["name"],
            description=row["description"] or "",
            default_limit=limit_from_storage(row["default_limit"]),
            is_time_windowed=row["is_time_windowed"],
            window_seconds=row["window_seconds"],
        )
