"""Quota guard service.

Stateless decision layer over the limit store and the usage ledger. Business
features enforce quotas with ``check_and_reserve`` (or ``reserve``), which
checks and consumes in one locked unit. ``is_limit_reached`` and
``would_exceed`` read without locking and are advisory only.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator, Callable, List

from ....core.exceptions import QuotaExceededError
from ....core.value_objects import OrganizationId, exceeds, is_unbounded
from ..entities.quota_status import QuotaStatus
from ..utils.error_handling import quota_error_handler
from ..utils.validation import QuotaValidationRules
from .limit_store import QuotaLimitStore
from .usage_ledger import UsageLedger

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class QuotaGuard:
    """Answers "reached?" and "would exceed?" and performs check-then-consume."""

    def __init__(self, limit_store: QuotaLimitStore, ledger: UsageLedger, clock: Clock = utc_now):
        """Initialize with injected dependencies.

        Args:
            limit_store: Effective limit lookup
            ledger: Usage ledger owning the increment protocol
            clock: Returns the current time, injectable for tests
        """
        self._limit_store = limit_store
        self._ledger = ledger
        self._clock = clock

    async def is_limit_reached(self, organization_id: OrganizationId, quota_type: str) -> bool:
        """Check whether usage is at or over the limit. Never true for UNBOUNDED."""
        limit = await self._limit_store.get_effective_limit(organization_id, quota_type)
        if is_unbounded(limit):
            return False
        usage = await self._ledger.read_usage(organization_id, quota_type, self._clock())
        return usage >= limit

    async def would_exceed(self, organization_id: OrganizationId, quota_type: str, amount: int) -> bool:
        """Advisory pre-check for UI hints. Races with concurrent increments."""
        QuotaValidationRules.validate_amount(amount)
        limit = await self._limit_store.get_effective_limit(organization_id, quota_type)
        if is_unbounded(limit):
            return False
        usage = await self._ledger.read_usage(organization_id, quota_type, self._clock())
        return exceeds(usage + amount, limit)

    @quota_error_handler("check and reserve quota")
    async def check_and_reserve(self, organization_id: OrganizationId, quota_type: str, amount: int = 1) -> int:
        """Consume ``amount`` if it fits under the effective limit.

        Returns:
            Usage after the reservation

        Raises:
            QuotaExceededError: If the reservation would exceed the limit
            InvalidAmountError: If amount is not a positive integer
            UnknownQuotaTypeError: If the quota type is not registered
            LockTimeoutError: If the usage lock was not granted in time
            TransientStoreError: If the store failed in a retryable way
        """
        QuotaValidationRules.validate_amount(amount)
        limit = await self._limit_store.get_effective_limit(organization_id, quota_type)
        result = await self._ledger.try_increment(organization_id, quota_type, amount, limit, self._clock())

        if not result.applied:
            raise QuotaExceededError(
                quota_type,
                organization_id=str(organization_id),
                current_usage=result.new_usage,
                limit=limit,
                requested=amount,
            )
        return result.new_usage

    async def release(self, organization_id: OrganizationId, quota_type: str, amount: int = 1) -> int:
        """Give back a reservation after the business operation failed."""
        return await self._ledger.release(organization_id, quota_type, amount, self._clock())

    @asynccontextmanager
    async def reserve(self, organization_id: OrganizationId, quota_type: str, amount: int = 1) -> AsyncIterator[int]:
        """Reserve on entry and release if the block raises.

        Usage:
            async with guard.reserve(org_id, "max_users") as usage:
                await create_user(...)
        """
        new_usage = await self.check_and_reserve(organization_id, quota_type, amount)
        try:
            yield new_usage
        except BaseException:
            try:
                await asyncio.shield(self.release(organization_id, quota_type, amount))
            except Exception as e:
                logger.error(f"Failed to release {amount} of {quota_type} for organization {organization_id}: {e}")
            raise

    async def get_quota_status(self, organization_id: OrganizationId, quota_type: str) -> QuotaStatus:
        """Effective limit and current usage of one quota type."""
        quota_type_entry = self._ledger.catalog.get(quota_type)
        limit = await self._limit_store.get_effective_limit(organization_id, quota_type_entry.name)
        usage = await self._ledger.read_usage(organization_id, quota_type_entry.name, self._clock())
        return QuotaStatus(
            name=quota_type_entry.name,
            description=quota_type_entry.description,
            effective_limit=limit,
            current_usage=usage,
            is_time_windowed=quota_type_entry.is_time_windowed,
            window_seconds=quota_type_entry.window_seconds,
        )

    async def get_quota_statuses(self, organization_id: OrganizationId) -> List[QuotaStatus]:
        """Effective limit and current usage of every catalog type."""
        now = self._clock()
        limits = await self._limit_store.get_effective_limits(organization_id)
        usage = await self._ledger.read_all_usage(organization_id, now)
        return [
            QuotaStatus(
                name=quota_type.name,
                description=quota_type.description,
                effective_limit=limits[quota_type.name],
                current_usage=usage.get(quota_type.name, 0),
                is_time_windowed=quota_type.is_time_windowed,
                window_seconds=quota_type.window_seconds,
            )
            for quota_type in self._ledger.catalog.list_types()
        ]
