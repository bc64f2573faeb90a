"""Quota routers.

Ready-to-use FastAPI routers for reading an organization's quotas and for
administrative limit changes. Domain errors propagate to the exception
handlers registered by ``neo_quotas.api``.
"""

import logging

from fastapi import APIRouter, Depends, Path

from ....core.value_objects import OrganizationId
from ..models.requests import UpdateQuotaLimitRequest
from ..models.responses import OrganizationQuotasResponse, QuotaStatusResponse
from ..services.limit_store import QuotaLimitStore
from ..services.quota_guard import QuotaGuard
from .dependencies import (
    get_limit_store,
    get_quota_guard,
    require_quota_admin,
    require_quota_reader,
)

logger = logging.getLogger(__name__)


router = APIRouter(
    prefix="/organizations",
    tags=["Quotas"],
    responses={
        403: {"description": "Insufficient permissions"},
        503: {"description": "Quota store temporarily unavailable"},
    },
)

admin_router = APIRouter(
    prefix="/admin/organizations",
    tags=["Quota Management"],
    responses={
        400: {"description": "Invalid limit"},
        403: {"description": "Insufficient permissions"},
        404: {"description": "Unknown quota type"},
        503: {"description": "Quota store temporarily unavailable"},
    },
)


@router.get(
    "/{organization_id}/quotas",
    response_model=OrganizationQuotasResponse,
    summary="List organization quotas",
    description="Effective limit and current usage of every quota type for an organization",
    dependencies=[Depends(require_quota_reader)],
)
async def list_organization_quotas(
    organization_id: str = Path(..., min_length=1, description="Organization ID"),
    guard: QuotaGuard = Depends(get_quota_guard),
) -> OrganizationQuotasResponse:
    """List all quotas of an organization."""
    statuses = await guard.get_quota_statuses(OrganizationId(organization_id))
    return OrganizationQuotasResponse.from_entities(organization_id, statuses)


@admin_router.put(
    "/{organization_id}/quotas/{quota_type}",
    response_model=QuotaStatusResponse,
    summary="Update organization quota limit",
    description="Set an organization's limit for one quota type. Negative limits are rejected.",
    dependencies=[Depends(require_quota_admin)],
)
async def update_organization_quota_limit(
    request: UpdateQuotaLimitRequest,
    organization_id: str = Path(..., min_length=1, description="Organization ID"),
    quota_type: str = Path(..., description="Quota type name"),
    limit_store: QuotaLimitStore = Depends(get_limit_store),
    guard: QuotaGuard = Depends(get_quota_guard),
) -> QuotaStatusResponse:
    """Update one quota limit of an organization."""
    org_id = OrganizationId(organization_id)
    await limit_store.set_limit(org_id, quota_type, request.to_limit_value())
    status = await guard.get_quota_status(org_id, quota_type)
    return QuotaStatusResponse.from_entity(status)
