"""neo-quotas FastAPI application.

The lifespan bootstraps the quota services and the routers' placeholder
dependencies are overridden to serve them, the same way hosting services
wire the feature routers.
"""

import logging
from contextlib import asynccontextmanager
from typing import Callable, Optional

from fastapi import FastAPI, HTTPException, Request, status

from ..__version__ import __version__
from ..config import QuotaSettings, get_settings
from ..features.quotas.routers import (
    get_limit_store,
    get_quota_guard,
    quota_admin_router,
    quota_router,
    require_quota_admin,
    require_quota_reader,
)
from .exception_handlers import register_exception_handlers
from .services import QuotaServices, bootstrap_quota_services

logger = logging.getLogger(__name__)


def deny_unconfigured_authorization() -> None:
    """Reject every request when no authorization dependency was supplied."""
    raise HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="Quota authorization is not configured"
    )


def get_quota_services(request: Request) -> QuotaServices:
    return request.app.state.quota_services


def get_app_quota_guard(request: Request):
    return get_quota_services(request).guard


def get_app_limit_store(request: Request):
    return get_quota_services(request).limit_store


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    settings: QuotaSettings = app.state.settings
    services = await bootstrap_quota_services(settings)
    app.state.quota_services = services
    logger.info(f"{settings.app_name} started in {settings.environment} mode")

    yield

    await services.close()


def create_app(
    settings: Optional[QuotaSettings] = None,
    reader_dependency: Optional[Callable] = None,
    admin_dependency: Optional[Callable] = None,
) -> FastAPI:
    """Create the neo-quotas API.

    Args:
        settings: Settings to use, defaults to environment settings
        reader_dependency: Authorization check for the read endpoint
        admin_dependency: Authorization check for the admin endpoint

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Neo Quotas API",
        version=__version__,
        description="Per-organization quota limits and usage tracking",
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings

    if reader_dependency is None or admin_dependency is None:
        logger.warning("No quota authorization dependency supplied, protected endpoints will return 403")

    app.dependency_overrides.update({
        get_quota_guard: get_app_quota_guard,
        get_limit_store: get_app_limit_store,
        require_quota_reader: reader_dependency or deny_unconfigured_authorization,
        require_quota_admin: admin_dependency or deny_unconfigured_authorization,
    })

    register_exception_handlers(app, is_production=settings.is_production)

    app.include_router(quota_router, prefix="/api/v1")
    app.include_router(quota_admin_router, prefix="/api/v1")

    @app.get("/health", tags=["System"])
    async def health(request: Request):
        checks = await get_quota_services(request).health_check()
        return {"status": "healthy" if all(checks.values()) else "degraded", "checks": checks}

    return app
