"""Usage ledger service.

Owns the increment protocol for usage counters. Each (organization, quota
type) record is in one of three states:

- Absent: no record yet, reads as 0
- Active: record exists and, if windowed, ``now`` is within its window
- Expired: windowed record whose ``period_end`` has passed, reads as 0

Every mutation runs as one unit under the repository's per-key lock:
load (or synthesize), reset an expired window, check the projected usage
against the limit and persist. A unit can be abandoned while it waits for
the lock. Once the lock is held it runs to completion even if the caller
is cancelled, so a write is either fully committed or not made at all.
"""

import asyncio
import logging
from datetime import datetime
from typing import Awaitable, Callable, Dict, Optional, TypeVar

from ....core.value_objects import LimitValue, OrganizationId, exceeds
from ..entities.protocols import UsageRepository, UsageUnit
from ..entities.quota_type import QuotaType
from ..entities.usage_record import IncrementOutcome, IncrementResult, UsageRecord
from ..utils.validation import QuotaValidationRules
from ..utils.windows import ensure_utc, window_bounds
from .quota_catalog import QuotaCatalog

logger = logging.getLogger(__name__)

T = TypeVar("T")


class UsageLedger:
    """Per-(organization, quota type) usage counters with window rollover."""

    def __init__(self, catalog: QuotaCatalog, repository: UsageRepository):
        self._catalog = catalog
        self._repository = repository

    @property
    def catalog(self) -> QuotaCatalog:
        return self._catalog

    async def read_usage(self, organization_id: OrganizationId, quota_type: str, now: datetime) -> int:
        """Current usage; absent and expired records read as 0. Never writes."""
        quota_type_entry = self._catalog.get(quota_type)
        record = await self._repository.find(organization_id, quota_type_entry.name)
        if record is None:
            return 0
        return record.usage_at(ensure_utc(now))

    async def read_all_usage(self, organization_id: OrganizationId, now: datetime) -> Dict[str, int]:
        """Current usage of every recorded quota type of an organization."""
        now = ensure_utc(now)
        records = await self._repository.find_by_organization(organization_id)
        return {
            record.quota_type: record.usage_at(now)
            for record in records
            if record.quota_type in self._catalog
        }

    async def try_increment(
        self,
        organization_id: OrganizationId,
        quota_type: str,
        amount: int,
        effective_limit: LimitValue,
        now: datetime,
    ) -> IncrementResult:
        """Atomically add ``amount`` unless it would push usage over ``effective_limit``.

        Args:
            organization_id: Organization consuming the quota
            quota_type: Quota type name
            amount: Positive amount to consume
            effective_limit: Limit to enforce, or UNBOUNDED
            now: Current time, decides window membership

        Returns:
            APPLIED with the new usage, or REJECTED with the unchanged usage

        Raises:
            InvalidAmountError: If amount is not a positive integer
            UnknownQuotaTypeError: If the quota type is not registered
            LockTimeoutError: If the per-key lock was not granted in time
            TransientStoreError: If the store failed in a retryable way
        """
        QuotaValidationRules.validate_amount(amount)
        quota_type_entry = self._catalog.get(quota_type)
        now = ensure_utc(now)

        async def increment(unit: UsageUnit) -> IncrementResult:
            record = self._current_record(await unit.load(), organization_id, quota_type_entry, now)
            projected = record.current_usage + amount

            if exceeds(projected, effective_limit):
                logger.info(
                    f"Rejected {quota_type_entry.name} increment for organization {organization_id}: "
                    f"{record.current_usage} + {amount} > {effective_limit}"
                )
                return IncrementResult(
                    outcome=IncrementOutcome.REJECTED,
                    new_usage=record.current_usage,
                    limit=effective_limit,
                    period_start=record.period_start,
                    period_end=record.period_end,
                )

            record.current_usage = projected
            record.updated_at = now
            await unit.store(record)
            logger.info(
                f"Applied {quota_type_entry.name} increment of {amount} for organization "
                f"{organization_id}: usage now {projected}"
            )
            return IncrementResult(
                outcome=IncrementOutcome.APPLIED,
                new_usage=projected,
                limit=effective_limit,
                period_start=record.period_start,
                period_end=record.period_end,
            )

        return await self._run_locked(organization_id, quota_type_entry.name, increment)

    async def release(self, organization_id: OrganizationId, quota_type: str, amount: int, now: datetime) -> int:
        """Give back ``amount`` previously reserved, flooring usage at 0.

        Absent and expired records are left untouched since there is
        nothing to give back in a window that has rolled over.

        Returns:
            Usage after the release
        """
        QuotaValidationRules.validate_amount(amount)
        quota_type_entry = self._catalog.get(quota_type)
        now = ensure_utc(now)

        async def decrement(unit: UsageUnit) -> int:
            record = await unit.load()
            if record is None or record.is_expired(now):
                return 0

            record.current_usage = max(0, record.current_usage - amount)
            record.updated_at = now
            await unit.store(record)
            logger.info(
                f"Released {amount} of {quota_type_entry.name} for organization "
                f"{organization_id}: usage now {record.current_usage}"
            )
            return record.current_usage

        return await self._run_locked(organization_id, quota_type_entry.name, decrement)

    @staticmethod
    def _current_record(
        record: Optional[UsageRecord],
        organization_id: OrganizationId,
        quota_type: QuotaType,
        now: datetime,
    ) -> UsageRecord:
        """Return the record as it stands at ``now``.

        Absent records are synthesized with zero usage. Expired windows are
        reset to zero in a fresh window containing ``now``. Nothing is
        persisted here.
        """
        if record is None:
            record = UsageRecord(organization_id=organization_id, quota_type=quota_type.name)
        elif record.is_expired(now):
            logger.debug(
                f"Usage window for {quota_type.name} of organization {organization_id} "
                f"ended at {record.period_end.isoformat()}, starting a new one"
            )
            record.current_usage = 0
            record.period_start = None
            record.period_end = None

        if quota_type.is_time_windowed and record.period_end is None:
            record.period_start, record.period_end = window_bounds(now, quota_type.window_seconds)
        return record

    async def _run_locked(
        self,
        organization_id: OrganizationId,
        quota_type: str,
        operation: Callable[[UsageUnit], Awaitable[T]],
    ) -> T:
        """Run ``operation`` under the per-key lock.

        The locked unit runs in its own task. Cancelling the caller cancels
        the task only while it is still waiting for the lock.
        """
        acquired = asyncio.Event()

        async def locked_unit() -> T:
            async with self._repository.lock(organization_id, quota_type) as unit:
                acquired.set()
                return await operation(unit)

        task = asyncio.ensure_future(locked_unit())
        try:
            return await asyncio.shield(task)
        except asyncio.CancelledError:
            if acquired.is_set():
                task.add_done_callback(_log_detached_failure)
            else:
                task.cancel()
            raise


def _log_detached_failure(task: "asyncio.Task") -> None:
    """Report failures of units that finished after their caller was cancelled."""
    if task.cancelled():
        return
    error = task.exception()
    if error is not None:
        logger.error(f"Usage update failed after caller was cancelled: {error}")
