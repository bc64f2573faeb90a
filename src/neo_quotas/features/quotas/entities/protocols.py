"""Protocol interfaces for quota persistence.

Defines contracts for the quota type catalog, per-organization limit
overrides and usage counters. Database and in-memory implementations live
in ``repositories``.
"""

from abc import abstractmethod
from typing import AsyncContextManager, List, Optional, Protocol, runtime_checkable

from ....core.value_objects import OrganizationId
from .quota_type import QuotaType
from .quota_limit import QuotaLimit
from .usage_record import UsageRecord


@runtime_checkable
class QuotaTypeRepository(Protocol):
    """Protocol for quota type catalog persistence."""

    @abstractmethod
    async def list_all(self) -> List[QuotaType]:
        """List all registered quota types."""
        ...

    @abstractmethod
    async def find_by_name(self, name: str) -> Optional[QuotaType]:
        """Find a quota type by name."""
        ...

    @abstractmethod
    async def save(self, quota_type: QuotaType) -> QuotaType:
        """Insert or update a quota type."""
        ...


@runtime_checkable
class QuotaLimitRepository(Protocol):
    """Protocol for per-organization limit overrides."""

    @abstractmethod
    async def find(self, organization_id: OrganizationId, quota_type: str) -> Optional[QuotaLimit]:
        """Find the override for one quota type."""
        ...

    @abstractmethod
    async def find_by_organization(self, organization_id: OrganizationId) -> List[QuotaLimit]:
        """Find all overrides for an organization."""
        ...

    @abstractmethod
    async def upsert(self, quota_limit: QuotaLimit) -> QuotaLimit:
        """Insert or replace an override."""
        ...


@runtime_checkable
class UsageUnit(Protocol):
    """Read-modify-write access to one usage record while its key is locked."""

    @abstractmethod
    async def load(self) -> Optional[UsageRecord]:
        """Load the record, None when absent."""
        ...

    @abstractmethod
    async def store(self, record: UsageRecord) -> None:
        """Persist the record in place."""
        ...


@runtime_checkable
class UsageRepository(Protocol):
    """Protocol for usage counters.

    ``lock`` is the only path to mutate a record. It holds an exclusive
    per-key lock for the lifetime of the context, including when no record
    exists yet, and raises LockTimeoutError when the lock is not granted
    in time.
    """

    @abstractmethod
    async def find(self, organization_id: OrganizationId, quota_type: str) -> Optional[UsageRecord]:
        """Read a record without locking."""
        ...

    @abstractmethod
    async def find_by_organization(self, organization_id: OrganizationId) -> List[UsageRecord]:
        """Read all records of an organization without locking."""
        ...

    @abstractmethod
    def lock(self, organization_id: OrganizationId, quota_type: str) -> AsyncContextManager[UsageUnit]:
        """Acquire the per-key lock and yield a unit bound to the record."""
        ...
