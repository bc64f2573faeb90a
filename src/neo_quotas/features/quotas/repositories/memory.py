"""In-memory quota repositories.

Used for tests and single-process deployments without PostgreSQL. Usage
writes are serialized with one ``asyncio.Lock`` per (organization, quota
type) key.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from dataclasses import replace
from typing import AsyncIterator, Dict, List, Optional, Tuple

from ....core.exceptions import LockTimeoutError
from ....core.value_objects import OrganizationId
from ..entities.quota_limit import QuotaLimit
from ..entities.quota_type import QuotaType
from ..entities.usage_record import UsageRecord
from .usage_repository import usage_lock_key

logger = logging.getLogger(__name__)

UsageKey = Tuple[str, str]


class InMemoryQuotaTypeRepository:
    """Quota type catalog held in a dict."""

    def __init__(self):
        self._types: Dict[str, QuotaType] = {}

    async def list_all(self) -> List[QuotaType]:
        return [self._types[name] for name in sorted(self._types)]

    async def find_by_name(self, name: str) -> Optional[QuotaType]:
        return self._types.get(name)

    async def save(self, quota_type: QuotaType) -> QuotaType:
        self._types[quota_type.name] = quota_type
        return quota_type


class InMemoryQuotaLimitRepository:
    """Limit overrides held in a dict."""

    def __init__(self):
        self._limits: Dict[UsageKey, QuotaLimit] = {}

    async def find(self, organization_id: OrganizationId, quota_type: str) -> Optional[QuotaLimit]:
        return self._limits.get((str(organization_id), quota_type))

    async def find_by_organization(self, organization_id: OrganizationId) -> List[QuotaLimit]:
        org = str(organization_id)
        return [limit for (owner, _), limit in sorted(self._limits.items()) if owner == org]

    async def upsert(self, quota_limit: QuotaLimit) -> QuotaLimit:
        self._limits[(str(quota_limit.organization_id), quota_limit.quota_type)] = quota_limit
        return quota_limit


class MemoryUsageUnit:
    """Usage record access while the key's lock is held."""

    def __init__(self, repository: "InMemoryUsageRepository", key: UsageKey):
        self._repository = repository
        self._key = key

    async def load(self) -> Optional[UsageRecord]:
        record = self._repository._records.get(self._key)
        return replace(record) if record else None

    async def store(self, record: UsageRecord) -> None:
        self._repository._records[self._key] = replace(record)


class InMemoryUsageRepository:
    """Usage counters held in a dict.

    Records are copied on the way in and out so callers never share
    mutable state with the store.
    """

    def __init__(self, lock_timeout_ms: int = 5000):
        self._records: Dict[UsageKey, UsageRecord] = {}
        self._locks: Dict[UsageKey, asyncio.Lock] = {}
        self._lock_users: Dict[UsageKey, int] = {}
        self._lock_timeout_ms = lock_timeout_ms

    async def find(self, organization_id: OrganizationId, quota_type: str) -> Optional[UsageRecord]:
        record = self._records.get((str(organization_id), quota_type))
        return replace(record) if record else None

    async def find_by_organization(self, organization_id: OrganizationId) -> List[UsageRecord]:
        org = str(organization_id)
        return [replace(record) for (owner, _), record in sorted(self._records.items()) if owner == org]

    @asynccontextmanager
    async def lock(self, organization_id: OrganizationId, quota_type: str) -> AsyncIterator[MemoryUsageUnit]:
        """Hold the key's lock for the lifetime of the block."""
        key = (str(organization_id), quota_type)
        key_lock = self._locks.setdefault(key, asyncio.Lock())
        self._lock_users[key] = self._lock_users.get(key, 0) + 1

        try:
            try:
                await asyncio.wait_for(key_lock.acquire(), timeout=self._lock_timeout_ms / 1000)
            except asyncio.TimeoutError:
                lock_key = usage_lock_key(organization_id, quota_type)
                logger.warning(f"Timed out waiting for usage lock {lock_key}")
                raise LockTimeoutError(lock_key, self._lock_timeout_ms)

            try:
                yield MemoryUsageUnit(self, key)
            finally:
                key_lock.release()
        finally:
            self._release_lock_entry(key)

    def _release_lock_entry(self, key: UsageKey) -> None:
        """Forget the key's lock once no caller holds or awaits it."""
        self._lock_users[key] -= 1
        if not self._lock_users[key]:
            del self._lock_users[key]
            del self._locks[key]
