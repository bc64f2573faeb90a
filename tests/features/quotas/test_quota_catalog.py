"""Tests for the quota catalog."""

import pytest

from neo_quotas.core.exceptions import UnknownQuotaTypeError
from neo_quotas.core.value_objects import UNBOUNDED
from neo_quotas.features.quotas.entities import QuotaType
from neo_quotas.features.quotas.services import DEFAULT_QUOTA_TYPES, QuotaCatalog, seed_defaults


class TestQuotaCatalog:

    def test_get_default_found(self, catalog):
        limit, found = catalog.get_default("max_users")

        assert found is True
        assert limit == 100

    def test_get_default_unknown(self, catalog):
        limit, found = catalog.get_default("max_widgets")

        assert found is False
        assert limit is None

    def test_get_unknown_raises(self, catalog):
        with pytest.raises(UnknownQuotaTypeError) as exc_info:
            catalog.get("max_widgets")

        assert exc_info.value.quota_type == "max_widgets"

    def test_default_types(self, catalog):
        names = [quota_type.name for quota_type in catalog.list_types()]

        assert names == sorted([
            "max_users", "max_messages_per_day", "max_storage_mb", "max_groups", "max_file_size_mb"
        ])
        messages = catalog.get("max_messages_per_day")
        assert messages.is_time_windowed
        assert messages.window_seconds == 86400
        assert not catalog.get("max_users").is_time_windowed

    def test_catalog_is_read_only(self, catalog):
        with pytest.raises(TypeError):
            catalog._types["max_widgets"] = QuotaType("max_widgets", "", 1)

    @pytest.mark.asyncio
    async def test_load_from_repository(self, quota_type_repository):
        await quota_type_repository.save(QuotaType("max_projects", "Projects", UNBOUNDED))

        catalog = await QuotaCatalog.load(quota_type_repository)

        assert len(catalog) == 1
        assert "max_projects" in catalog
        assert catalog.get_default("max_projects") == (UNBOUNDED, True)


class TestSeedDefaults:

    @pytest.mark.asyncio
    async def test_seeds_missing_types(self, quota_type_repository):
        created = await seed_defaults(quota_type_repository)

        assert created == len(DEFAULT_QUOTA_TYPES)
        assert len(await quota_type_repository.list_all()) == len(DEFAULT_QUOTA_TYPES)

    @pytest.mark.asyncio
    async def test_keeps_existing_edits(self, quota_type_repository):
        await quota_type_repository.save(QuotaType("max_users", "Seats", 25))

        created = await seed_defaults(quota_type_repository)

        assert created == len(DEFAULT_QUOTA_TYPES) - 1
        edited = await quota_type_repository.find_by_name("max_users")
        assert edited.default_limit == 25
        assert edited.description == "Seats"

    @pytest.mark.asyncio
    async def test_is_idempotent(self, quota_type_repository):
        await seed_defaults(quota_type_repository)

        assert await seed_defaults(quota_type_repository) == 0
