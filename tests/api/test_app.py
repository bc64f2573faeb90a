"""Tests for the neo-quotas application wiring."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from neo_quotas.api import create_app, register_exception_handlers
from neo_quotas.config import QuotaSettings
from neo_quotas.core.exceptions import (
    CacheError,
    LockTimeoutError,
    QuotaExceededError,
    TransientStoreError,
)


def allow():
    return None


@pytest.fixture
def settings():
    return QuotaSettings(quota_store_backend="memory", redis_url=None, environment="testing")


class TestCreateApp:

    def test_health(self, settings):
        with TestClient(create_app(settings, allow, allow)) as client:
            response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "checks": {"database": True, "cache": True}}

    def test_serves_quota_routes(self, settings):
        with TestClient(create_app(settings, allow, allow)) as client:
            client.put("/api/v1/admin/organizations/org-1/quotas/max_users", json={"limit": 3})
            response = client.get("/api/v1/organizations/org-1/quotas")

        quotas = {quota["name"]: quota for quota in response.json()["quotas"]}
        assert quotas["max_users"]["effective_limit"] == 3

    def test_denies_without_authorization_dependencies(self, settings):
        with TestClient(create_app(settings)) as client:
            read = client.get("/api/v1/organizations/org-1/quotas")
            update = client.put("/api/v1/admin/organizations/org-1/quotas/max_users", json={"limit": 3})

        assert read.status_code == 403
        assert update.status_code == 403


class TestExceptionHandlers:

    @pytest.fixture
    def client(self):
        app = FastAPI()
        register_exception_handlers(app, is_production=True)

        @app.get("/exceeded")
        async def exceeded():
            raise QuotaExceededError("max_users", organization_id="org-1", current_usage=5, limit=5, requested=1)

        @app.get("/lock-timeout")
        async def lock_timeout():
            raise LockTimeoutError("org-1:max_users", 500)

        @app.get("/transient")
        async def transient():
            raise TransientStoreError("update quota usage", "connection reset")

        @app.get("/cache")
        async def cache():
            raise CacheError("Failed to invalidate cached quota limits")

        @app.get("/unexpected")
        async def unexpected():
            raise RuntimeError("secret internals")

        return TestClient(app, raise_server_exceptions=False)

    def test_quota_exceeded_hides_numbers(self, client):
        response = client.get("/exceeded")

        assert response.status_code == 403
        body = response.json()
        assert body["success"] is False
        assert body["errors"][0]["code"] == "QUOTA_EXCEEDED"
        assert body["errors"][0]["details"] == {"quota_type": "max_users"}
        assert "5" not in body["message"]
        assert body["metadata"] == {"retryable": False}
        assert "retry-after" not in response.headers

    @pytest.mark.parametrize("path", ["/lock-timeout", "/transient"])
    def test_retryable_errors_are_service_unavailable(self, client, path):
        response = client.get(path)

        assert response.status_code == 503
        assert response.headers["retry-after"] == "1"
        assert response.json()["metadata"] == {"retryable": True}

    def test_cache_error(self, client):
        response = client.get("/cache")

        assert response.status_code == 500
        assert "retry-after" not in response.headers

    def test_unexpected_error_hides_message_in_production(self, client):
        response = client.get("/unexpected")

        assert response.status_code == 500
        assert response.json()["message"] == "An unexpected error occurred"
