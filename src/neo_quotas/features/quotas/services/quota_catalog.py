"""Quota catalog service.

Read-only mapping from quota type name to description and default limit,
loaded once at bootstrap.
"""

import logging
from types import MappingProxyType
from typing import Iterable, List, Optional, Tuple

from ....core.exceptions import UnknownQuotaTypeError
from ....core.value_objects import LimitValue
from ..entities.protocols import QuotaTypeRepository
from ..entities.quota_type import QuotaType

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60

DEFAULT_QUOTA_TYPES: Tuple[QuotaType, ...] = (
    QuotaType("max_users", "Maximum number of users in the organization", 100),
    QuotaType(
        "max_messages_per_day",
        "Maximum number of messages sent per day",
        10000,
        is_time_windowed=True,
        window_seconds=SECONDS_PER_DAY,
    ),
    QuotaType("max_storage_mb", "Maximum total storage in megabytes", 10240),
    QuotaType("max_groups", "Maximum number of groups", 50),
    QuotaType("max_file_size_mb", "Maximum size of a single file in megabytes", 100),
)


class QuotaCatalog:
    """Immutable view of the registered quota types."""

    def __init__(self, quota_types: Iterable[QuotaType] = DEFAULT_QUOTA_TYPES):
        self._types = MappingProxyType({quota_type.name: quota_type for quota_type in quota_types})

    @classmethod
    async def load(cls, repository: QuotaTypeRepository) -> "QuotaCatalog":
        """Build the catalog from persisted quota types."""
        quota_types = await repository.list_all()
        logger.info(f"Loaded {len(quota_types)} quota types into catalog")
        return cls(quota_types)

    def get_default(self, name: str) -> Tuple[Optional[LimitValue], bool]:
        """Return ``(default_limit, found)``. Unknown names give ``(None, False)``."""
        quota_type = self._types.get(name)
        if quota_type is None:
            return None, False
        return quota_type.default_limit, True

    def get(self, name: str) -> QuotaType:
        """Get a quota type by name.

        Raises:
            UnknownQuotaTypeError: If the name is not registered
        """
        quota_type = self._types.get(name)
        if quota_type is None:
            raise UnknownQuotaTypeError(name)
        return quota_type

    def list_types(self) -> List[QuotaType]:
        """All quota types ordered by name."""
        return [self._types[name] for name in sorted(self._types)]

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def __len__(self) -> int:
        return len(self._types)


async def seed_defaults(
    repository: QuotaTypeRepository,
    quota_types: Iterable[QuotaType] = DEFAULT_QUOTA_TYPES,
) -> int:
    """Insert the default quota types that are not registered yet.

    Types already present are left untouched so administrative edits to
    descriptions or defaults survive restarts.

    Returns:
        Number of quota types created
    """
    created = 0
    for quota_type in quota_types:
        if await repository.find_by_name(quota_type.name) is None:
            await repository.save(quota_type)
            created += 1
    if created:
        logger.info(f"Seeded {created} default quota types")
    return created
