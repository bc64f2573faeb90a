"""HTTP status code mapping for exceptions.

Maps neo-quotas exceptions to HTTP status codes. Lookups walk the
exception's MRO so subclasses inherit the status of their closest mapped
ancestor, and results are cached per exception type.
"""

from typing import Any, Dict, Optional, Type

from .base import NeoQuotasError
from .domain import (
    ConfigurationError,
    InvalidAmountError,
    InvalidLimitError,
    QuotaError,
    QuotaExceededError,
    UnknownQuotaTypeError,
    ValidationError,
)
from .infrastructure import (
    CacheError,
    DatabaseError,
    LockTimeoutError,
    TransientStoreError,
)


HTTP_STATUS_MAP: Dict[Type[Exception], int] = {
    # 400 Bad Request
    ValidationError: 400,
    InvalidLimitError: 400,
    InvalidAmountError: 400,

    # 403 Forbidden
    QuotaExceededError: 403,

    # 404 Not Found
    UnknownQuotaTypeError: 404,

    # 500 Internal Server Error
    QuotaError: 500,
    ConfigurationError: 500,
    DatabaseError: 500,
    CacheError: 500,

    # 503 Service Unavailable
    LockTimeoutError: 503,
    TransientStoreError: 503,

    # Default for NeoQuotasError
    NeoQuotasError: 500,
}


class HttpStatusMapper:
    """HTTP status mapper with optional per-exception overrides."""

    def __init__(self, overrides: Optional[Dict[Type[Exception], int]] = None):
        self._overrides = overrides or {}
        self._cache: Dict[Type[Exception], int] = {}

    def get_status_code(self, exception: Exception) -> int:
        """Get HTTP status code for exception.

        Args:
            exception: The exception instance

        Returns:
            HTTP status code (cached per exception type)
        """
        exception_type = type(exception)
        if exception_type in self._cache:
            return self._cache[exception_type]

        status_code = 500
        for base_class in exception_type.__mro__:
            if base_class in self._overrides:
                status_code = self._overrides[base_class]
                break
            if base_class in HTTP_STATUS_MAP:
                status_code = HTTP_STATUS_MAP[base_class]
                break

        self._cache[exception_type] = status_code
        return status_code

    def clear_cache(self) -> None:
        """Clear the status code cache."""
        self._cache.clear()

    def get_mapping_stats(self) -> Dict[str, Any]:
        """Get statistics about current mappings."""
        return {
            "cached_mappings": len(self._cache),
            "default_mappings": len(HTTP_STATUS_MAP),
            "override_mappings": len(self._overrides),
        }


# Global mapper instance
_global_mapper: Optional[HttpStatusMapper] = None


def get_mapper() -> HttpStatusMapper:
    """Get or create the global HTTP status mapper."""
    global _global_mapper
    if _global_mapper is None:
        _global_mapper = HttpStatusMapper()
    return _global_mapper


def set_status_overrides(overrides: Dict[Type[Exception], int]) -> None:
    """Replace the global mapper with one that applies ``overrides`` first."""
    global _global_mapper
    _global_mapper = HttpStatusMapper(overrides)


def get_http_status_code(exception: Exception) -> int:
    """Get HTTP status code for exception using the global mapper."""
    return get_mapper().get_status_code(exception)
