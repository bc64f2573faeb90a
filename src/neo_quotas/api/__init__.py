"""FastAPI application layer for neo-quotas."""

from .exception_handlers import ExceptionHandlerRegistry, register_exception_handlers
from .services import QuotaServices, bootstrap_quota_services
from .app import create_app, lifespan

__all__ = [
    "ExceptionHandlerRegistry",
    "register_exception_handlers",
    "QuotaServices",
    "bootstrap_quota_services",
    "create_app",
    "lifespan",
]
