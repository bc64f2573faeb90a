"""Tests for the quota routers with overridden dependencies."""

import pytest
from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient

from neo_quotas.api import register_exception_handlers
from neo_quotas.features.quotas.routers import (
    get_limit_store,
    get_quota_guard,
    quota_admin_router,
    quota_router,
    require_quota_admin,
    require_quota_reader,
)


def allow():
    return None


def deny():
    raise HTTPException(status_code=403, detail="Forbidden")


@pytest.fixture
def app(guard, limit_store):
    app = FastAPI()
    register_exception_handlers(app, is_production=True)
    app.include_router(quota_router, prefix="/api/v1")
    app.include_router(quota_admin_router, prefix="/api/v1")
    app.dependency_overrides.update({
        get_quota_guard: lambda: guard,
        get_limit_store: lambda: limit_store,
        require_quota_reader: allow,
        require_quota_admin: allow,
    })
    return app


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client


def quotas_by_name(response):
    return {quota["name"]: quota for quota in response.json()["quotas"]}


class TestListOrganizationQuotas:

    def test_lists_every_catalog_type(self, client):
        response = client.get("/api/v1/organizations/org-1/quotas")

        assert response.status_code == 200
        body = response.json()
        assert body["organization_id"] == "org-1"
        quotas = quotas_by_name(response)
        assert set(quotas) == {
            "max_users", "max_messages_per_day", "max_storage_mb", "max_groups", "max_file_size_mb",
        }
        assert quotas["max_users"]["effective_limit"] == 100
        assert quotas["max_users"]["current_usage"] == 0
        assert quotas["max_messages_per_day"]["is_time_windowed"] is True
        assert quotas["max_messages_per_day"]["window_seconds"] == 86400

    def test_reader_authorization_is_enforced(self, app, client):
        app.dependency_overrides[require_quota_reader] = deny

        response = client.get("/api/v1/organizations/org-1/quotas")

        assert response.status_code == 403


class TestUpdateOrganizationQuotaLimit:

    def test_sets_limit(self, client):
        response = client.put("/api/v1/admin/organizations/org-1/quotas/max_users", json={"limit": 10})

        assert response.status_code == 200
        assert response.json()["effective_limit"] == 10
        assert response.json()["is_unbounded"] is False

        listed = quotas_by_name(client.get("/api/v1/organizations/org-1/quotas"))
        assert listed["max_users"]["effective_limit"] == 10

    def test_other_organizations_keep_defaults(self, client):
        client.put("/api/v1/admin/organizations/org-1/quotas/max_users", json={"limit": 10})

        listed = quotas_by_name(client.get("/api/v1/organizations/org-2/quotas"))

        assert listed["max_users"]["effective_limit"] == 100

    def test_sets_unbounded(self, client):
        response = client.put("/api/v1/admin/organizations/org-1/quotas/max_groups", json={"unbounded": True})

        assert response.status_code == 200
        assert response.json()["effective_limit"] is None
        assert response.json()["is_unbounded"] is True

    def test_negative_limit_is_rejected(self, client):
        response = client.put("/api/v1/admin/organizations/org-1/quotas/max_users", json={"limit": -1})

        assert response.status_code == 400
        assert response.json()["errors"][0]["code"] == "INVALID_QUOTA_LIMIT"

    def test_unknown_quota_type(self, client):
        response = client.put("/api/v1/admin/organizations/org-1/quotas/max_widgets", json={"limit": 5})

        assert response.status_code == 404
        assert response.json()["errors"][0]["code"] == "UNKNOWN_QUOTA_TYPE"

    @pytest.mark.parametrize("payload", [{}, {"limit": 5, "unbounded": True}])
    def test_limit_or_unbounded_required(self, client, payload):
        response = client.put("/api/v1/admin/organizations/org-1/quotas/max_users", json=payload)

        assert response.status_code == 422

    def test_admin_authorization_is_enforced(self, app, client):
        app.dependency_overrides[require_quota_admin] = deny

        response = client.put("/api/v1/admin/organizations/org-1/quotas/max_users", json={"limit": 10})

        assert response.status_code == 403
