"""Quota limit store.

Resolves the effective limit for an organization: its override when one
exists, otherwise the catalog default. Effective limits are cached per
organization, tagged with a per-organization generation that every
successful ``set_limit`` bumps, so a map loaded before a change is never
served after it.
"""

import logging
from typing import Dict, Optional

from ....core.exceptions import CacheError
from ....core.value_objects import (
    LimitValue,
    OrganizationId,
    limit_from_storage,
    limit_to_storage,
)
from ...cache.entities.protocols import Cache
from ..entities.protocols import QuotaLimitRepository
from ..entities.quota_limit import QuotaLimit
from ..utils.error_handling import quota_error_handler
from ..utils.validation import QuotaValidationRules
from .quota_catalog import QuotaCatalog

logger = logging.getLogger(__name__)


class QuotaLimitStore:
    """Per-organization limit overrides with catalog fallback."""

    CACHE_KEY_PREFIX = "quota_limits"

    def __init__(
        self,
        catalog: QuotaCatalog,
        repository: QuotaLimitRepository,
        cache: Optional[Cache] = None,
        cache_ttl: int = 600,
    ):
        """Initialize with injected dependencies.

        Args:
            catalog: Quota catalog providing defaults
            repository: Limit override repository
            cache: Optional cache for effective limits
            cache_ttl: TTL in seconds for cached limits
        """
        self._catalog = catalog
        self._repository = repository
        self._cache = cache
        self._cache_ttl = cache_ttl

    @classmethod
    def cache_key(cls, organization_id: OrganizationId) -> str:
        return f"{cls.CACHE_KEY_PREFIX}:{organization_id}"

    @classmethod
    def generation_key(cls, organization_id: OrganizationId) -> str:
        return f"{cls.CACHE_KEY_PREFIX}:gen:{organization_id}"

    async def get_effective_limit(self, organization_id: OrganizationId, quota_type: str) -> LimitValue:
        """Get the override if present, else the catalog default.

        Raises:
            UnknownQuotaTypeError: If the quota type is not registered
        """
        quota_type_entry = self._catalog.get(quota_type)
        limits = await self.get_effective_limits(organization_id)
        return limits[quota_type_entry.name]

    @quota_error_handler("get effective quota limits")
    async def get_effective_limits(self, organization_id: OrganizationId) -> Dict[str, LimitValue]:
        """Get the effective limit of every catalog type for an organization.

        Cached maps are tagged with the organization's limit generation,
        read before the store is. A map loaded before a concurrent
        ``set_limit`` carries an older generation and is never served.
        """
        generation = await self._get_generation(organization_id)
        if generation is not None:
            cached = await self._get_cached(organization_id, generation)
            if cached is not None:
                return cached

        limits: Dict[str, LimitValue] = {
            quota_type.name: quota_type.default_limit for quota_type in self._catalog.list_types()
        }
        for override in await self._repository.find_by_organization(organization_id):
            if override.quota_type in limits:
                limits[override.quota_type] = override.limit_value

        if generation is not None:
            await self._set_cached(organization_id, limits, generation)
        return limits

    @quota_error_handler("set quota limit")
    async def set_limit(self, organization_id: OrganizationId, quota_type: str, new_limit: LimitValue) -> QuotaLimit:
        """Upsert an organization's override and invalidate its cached limits.

        Raises:
            UnknownQuotaTypeError: If the quota type is not registered
            InvalidLimitError: If the limit is negative or not an integer
            CacheError: If the cached limits could not be invalidated
        """
        quota_type_entry = self._catalog.get(quota_type)
        QuotaValidationRules.validate_limit(new_limit)

        saved = await self._repository.upsert(
            QuotaLimit(
                organization_id=organization_id,
                quota_type=quota_type_entry.name,
                limit_value=new_limit,
            )
        )
        logger.info(f"Set quota limit {quota_type_entry.name}={new_limit!r} for organization {organization_id}")

        await self.invalidate(organization_id)
        return saved

    async def invalidate(self, organization_id: OrganizationId) -> None:
        """Bump the organization's limit generation and drop its cached limits."""
        if self._cache is None:
            return
        key = self.cache_key(organization_id)
        try:
            await self._cache.increment(self.generation_key(organization_id))
            await self._cache.delete(key)
        except CacheError as e:
            logger.error(f"Failed to invalidate cached quota limits {key}: {e}")
            raise CacheError(f"Failed to invalidate cached quota limits for organization {organization_id}: {e}") from e

    async def _get_generation(self, organization_id: OrganizationId) -> Optional[int]:
        """Current limit generation, 0 before any change, None when unreadable."""
        if self._cache is None:
            return None
        key = self.generation_key(organization_id)
        try:
            generation = await self._cache.get(key)
        except CacheError as e:
            logger.warning(f"Failed to read quota limit generation {key}, bypassing cache: {e}")
            return None
        if generation is None:
            return 0
        if not isinstance(generation, int) or isinstance(generation, bool):
            logger.warning(f"Ignoring malformed quota limit generation {key}: {generation!r}")
            return None
        return generation

    async def _get_cached(self, organization_id: OrganizationId, generation: int) -> Optional[Dict[str, LimitValue]]:
        key = self.cache_key(organization_id)
        try:
            payload = await self._cache.get(key)
        except CacheError as e:
            logger.warning(f"Failed to read cached quota limits {key}, loading from store: {e}")
            return None

        if not isinstance(payload, dict) or payload.get("generation") != generation:
            return None
        limits = payload.get("limits")
        if not isinstance(limits, dict):
            return None
        if any(quota_type.name not in limits for quota_type in self._catalog.list_types()):
            return None
        return {name: limit_from_storage(value) for name, value in limits.items() if name in self._catalog}

    async def _set_cached(self, organization_id: OrganizationId, limits: Dict[str, LimitValue], generation: int) -> None:
        """Cache ``limits`` unless the generation moved while they were loaded."""
        if await self._get_generation(organization_id) != generation:
            logger.debug(f"Quota limits of organization {organization_id} changed while loading, not caching")
            return

        key = self.cache_key(organization_id)
        payload = {
            "generation": generation,
            "limits": {name: limit_to_storage(value) for name, value in limits.items()},
        }
        try:
            await self._cache.set(key, payload, ttl=self._cache_ttl)
        except CacheError as e:
            logger.warning(f"Failed to cache quota limits {key}: {e}")
