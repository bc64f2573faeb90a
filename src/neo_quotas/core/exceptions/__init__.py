"""Exception hierarchy for neo-quotas.

Domain errors (unknown type, invalid input, quota exceeded) are not
retryable. Infrastructure errors flagged ``retryable`` (lock timeouts,
transient store failures) may be retried with backoff.
"""

from .base import NeoQuotasError, create_error_response
from .domain import (
    ConfigurationError,
    ValidationError,
    InvalidLimitError,
    InvalidAmountError,
    QuotaError,
    UnknownQuotaTypeError,
    QuotaExceededError,
)
from .infrastructure import (
    DatabaseError,
    TransientStoreError,
    LockTimeoutError,
    CacheError,
    CacheConnectionError,
    CacheSerializationError,
)
from .http_mapping import (
    HTTP_STATUS_MAP,
    HttpStatusMapper,
    get_http_status_code,
    set_status_overrides,
)

__all__ = [
    # Base
    "NeoQuotasError",
    "create_error_response",

    # Domain
    "ConfigurationError",
    "ValidationError",
    "InvalidLimitError",
    "InvalidAmountError",
    "QuotaError",
    "UnknownQuotaTypeError",
    "QuotaExceededError",

    # Infrastructure
    "DatabaseError",
    "TransientStoreError",
    "LockTimeoutError",
    "CacheError",
    "CacheConnectionError",
    "CacheSerializationError",

    # HTTP mapping
    "HTTP_STATUS_MAP",
    "HttpStatusMapper",
    "get_http_status_code",
    "set_status_overrides",
]
