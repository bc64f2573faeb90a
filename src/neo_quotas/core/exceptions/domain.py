"""Domain exceptions for neo-quotas.

Errors a caller can act on: unknown quota types, malformed limits or
amounts, and the authoritative "quota exceeded" outcome.
"""

from typing import Any, Dict, Optional

from .base import NeoQuotasError


# Configuration Errors
class ConfigurationError(NeoQuotasError):
    """Raised when there's a configuration issue."""
    pass


# Validation Errors
class ValidationError(NeoQuotasError):
    """Raised when input validation fails."""
    pass


class InvalidLimitError(ValidationError):
    """Raised when a quota limit is negative or not an integer."""

    def __init__(self, limit: Any, reason: str = "limit must be a non-negative integer or UNBOUNDED"):
        self.limit = limit
        super().__init__(
            f"Invalid quota limit {limit!r}: {reason}",
            error_code="INVALID_QUOTA_LIMIT",
            details={"limit": repr(limit)},
        )


class InvalidAmountError(ValidationError):
    """Raised when an increment or release amount is not a positive integer."""

    def __init__(self, amount: Any):
        self.amount = amount
        super().__init__(
            f"Invalid quota amount {amount!r}: amount must be a positive integer",
            error_code="INVALID_QUOTA_AMOUNT",
            details={"amount": repr(amount)},
        )


# Quota Errors
class QuotaError(NeoQuotasError):
    """Base class for quota-related errors."""
    pass


class UnknownQuotaTypeError(QuotaError):
    """Raised when a quota type name is not registered in the catalog.

    This is a caller or configuration error, never a zero limit.
    """

    def __init__(self, quota_type: str):
        self.quota_type = quota_type
        super().__init__(
            f"Unknown quota type '{quota_type}'",
            error_code="UNKNOWN_QUOTA_TYPE",
            details={"quota_type": quota_type},
        )


class QuotaExceededError(QuotaError):
    """Raised when a reservation would push usage over the effective limit.

    The numeric values are kept on the instance for logging and privileged
    callers. The public message and details only name the quota type.
    """

    def __init__(
        self,
        quota_type: str,
        organization_id: Optional[str] = None,
        current_usage: Optional[int] = None,
        limit: Optional[int] = None,
        requested: Optional[int] = None,
    ):
        self.quota_type = quota_type
        self.organization_id = organization_id
        self.current_usage = current_usage
        self.limit = limit
        self.requested = requested

        details: Dict[str, Any] = {"quota_type": quota_type}
        if organization_id is not None:
            details["organization_id"] = organization_id
        if current_usage is not None:
            details["current_usage"] = current_usage
        if limit is not None:
            details["limit"] = limit
        if requested is not None:
            details["requested"] = requested

        message = f"Quota exceeded for '{quota_type}'"
        if limit is not None and current_usage is not None and requested is not None:
            message += f": {current_usage} + {requested} > {limit}"

        super().__init__(
            message,
            error_code="QUOTA_EXCEEDED",
            details=details,
        )

    @property
    def public_message(self) -> str:
        return f"Limit reached for '{self.quota_type}'"

    @property
    def public_details(self) -> Dict[str, Any]:
        return {"quota_type": self.quota_type}
