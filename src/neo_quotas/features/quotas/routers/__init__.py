"""Quota routers.

Ready-to-use FastAPI routers that services include after overriding the
placeholder dependencies.
"""

from .quota_router import router as quota_router
from .quota_router import admin_router as quota_admin_router
from .dependencies import (
    get_limit_store,
    get_quota_guard,
    require_quota_admin,
    require_quota_reader,
)

__all__ = [
    # Main routers
    "quota_router",
    "quota_admin_router",

    # Dependencies
    "get_quota_guard",
    "get_limit_store",
    "require_quota_reader",
    "require_quota_admin",
]
