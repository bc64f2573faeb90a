"""Infrastructure exceptions for neo-quotas.

This module defines exceptions related to the backing store and the
limit cache. Lock timeouts and transient store failures are retryable and
must never be read as "quota exceeded".
"""

from typing import Optional

from .base import NeoQuotasError


# Database Errors
class DatabaseError(NeoQuotasError):
    """Base class for database-related errors."""
    pass


class TransientStoreError(DatabaseError):
    """Raised when the store is unreachable or a transaction must be retried."""

    retryable = True

    def __init__(self, operation: str, reason: str = ""):
        self.operation = operation
        self.reason = reason
        message = f"Store temporarily unavailable during {operation}"
        if reason:
            message += f": {reason}"
        super().__init__(message, error_code="TRANSIENT_STORE_FAILURE", details={"operation": operation})


class LockTimeoutError(DatabaseError):
    """Raised when the per-key usage lock could not be acquired in time."""

    retryable = True

    def __init__(self, key: str, timeout_ms: Optional[int] = None):
        self.key = key
        self.timeout_ms = timeout_ms
        message = f"Timed out waiting for usage lock on '{key}'"
        if timeout_ms is not None:
            message += f" after {timeout_ms}ms"
        super().__init__(message, error_code="LOCK_TIMEOUT", details={"key": key})


# Cache Errors
class CacheError(NeoQuotasError):
    """Base class for cache-related errors."""
    pass


class CacheConnectionError(CacheError):
    """Raised when cache connection fails."""
    pass


class CacheSerializationError(CacheError):
    """Raised when cache value serialization/deserialization fails."""
    pass
