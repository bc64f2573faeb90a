"""Quota limit override repository backed by PostgreSQL."""

import logging
from typing import List, Optional

from ....core.value_objects import OrganizationId, limit_from_storage, limit_to_storage
from ....database import DatabaseManager, translate_errors
from ..entities.quota_limit import QuotaLimit
from ..utils.queries import (
    QUOTA_LIMIT_GET,
    QUOTA_LIMIT_LIST_BY_ORGANIZATION,
    QUOTA_LIMIT_UPSERT,
)

logger = logging.getLogger(__name__)


class QuotaLimitDatabaseRepository:
    """Database repository for per-organization limit overrides.

    Unbounded limits are stored as NULL.
    """

    def __init__(self, database: DatabaseManager, schema: str = "quotas"):
        self._db = database
        self._schema = schema

    async def find(self, organization_id: OrganizationId, quota_type: str) -> Optional[QuotaLimit]:
        """Find the override for one quota type."""
        query = QUOTA_LIMIT_GET.format(schema=self._schema)
        async with translate_errors("get quota limit"):
            row = await self._db.fetchrow(query, str(organization_id), quota_type)
        return self._map_row_to_limit(row) if row else None

    async def find_by_organization(self, organization_id: OrganizationId) -> List[QuotaLimit]:
        """Find all overrides for an organization."""
        query = QUOTA_LIMIT_LIST_BY_ORGANIZATION.format(schema=self._schema)
        async with translate_errors("list quota limits"):
            rows = await self._db.fetch(query, str(organization_id))
        return [self._map_row_to_limit(row) for row in rows]

    async def upsert(self, quota_limit: QuotaLimit) -> QuotaLimit:
        """Insert or replace an override."""
        query = QUOTA_LIMIT_UPSERT.format(schema=self._schema)
        async with translate_errors("set quota limit"):
            row = await self._db.fetchrow(
                query,
                str(quota_limit.organization_id),
                quota_limit.quota_type,
                limit_to_storage(quota_limit.limit_value),
                quota_limit.updated_at,
            )
        return self._map_row_to_limit(row) if row else quota_limit

    @staticmethod
    def _map_row_to_limit(row) -> QuotaLimit:
        return QuotaLimit(
            organization_id=OrganizationId(row["organization_id"]),
            quota_type=row["quota_type"],
            limit_value=limit_from_storage(row["limit_value"]),
            updated_at=row["updated_at"],
        )
