"""neo-quotas: per-organization quota enforcement for NeoMultiTenant services.

Business features enforce quotas through ``QuotaGuard.check_and_reserve``
(or the ``QuotaGuard.reserve`` context manager).
"""

from .__version__ import __version__
from .core.exceptions import (
    InvalidAmountError,
    InvalidLimitError,
    LockTimeoutError,
    NeoQuotasError,
    QuotaExceededError,
    TransientStoreError,
    UnknownQuotaTypeError,
)
from .core.value_objects import UNBOUNDED, OrganizationId
from .features.quotas import (
    IncrementOutcome,
    IncrementResult,
    QuotaCatalog,
    QuotaGuard,
    QuotaLimitStore,
    UsageLedger,
)

__all__ = [
    "__version__",
    "UNBOUNDED",
    "OrganizationId",
    "QuotaCatalog",
    "QuotaLimitStore",
    "UsageLedger",
    "QuotaGuard",
    "IncrementOutcome",
    "IncrementResult",
    "NeoQuotasError",
    "UnknownQuotaTypeError",
    "InvalidLimitError",
    "InvalidAmountError",
    "QuotaExceededError",
    "LockTimeoutError",
    "TransientStoreError",
]
