"""Tests for identifiers and limit values."""

import pytest

from neo_quotas.core.value_objects import (
    UNBOUNDED,
    OrganizationId,
    QuotaTypeName,
    exceeds,
    is_unbounded,
    is_valid_limit,
    limit_from_storage,
    limit_to_storage,
)


class TestIdentifiers:

    def test_organization_id(self):
        org_id = OrganizationId("org-1")

        assert str(org_id) == "org-1"
        assert org_id == OrganizationId("org-1")

    @pytest.mark.parametrize("value", ["", "   ", "\t\n", None, 42])
    def test_blank_organization_id_rejected(self, value):
        with pytest.raises(ValueError):
            OrganizationId(value)

    @pytest.mark.parametrize("name", ["max_users", "max_messages_per_day", "a"])
    def test_valid_quota_type_names(self, name):
        assert QuotaTypeName(name).value == name

    @pytest.mark.parametrize("name", ["", "Max_Users", "1users", "max-users", "x" * 101])
    def test_invalid_quota_type_names(self, name):
        with pytest.raises(ValueError):
            QuotaTypeName(name)


class TestLimits:

    @pytest.mark.parametrize("limit, valid", [
        (0, True),
        (10, True),
        (UNBOUNDED, True),
        (-1, False),
        (True, False),
        (2.5, False),
        ("5", False),
        (None, False),
    ])
    def test_is_valid_limit(self, limit, valid):
        assert is_valid_limit(limit) is valid

    def test_unbounded_persisted_as_null(self):
        assert limit_to_storage(UNBOUNDED) is None
        assert limit_from_storage(None) is UNBOUNDED
        assert limit_to_storage(7) == 7
        assert limit_from_storage(7) == 7

    def test_exceeds(self):
        assert exceeds(6, 5) is True
        assert exceeds(5, 5) is False
        assert exceeds(10 ** 12, UNBOUNDED) is False

    def test_is_unbounded(self):
        assert is_unbounded(UNBOUNDED)
        assert not is_unbounded(0)
        assert repr(UNBOUNDED) == "UNBOUNDED"
