"""Base exceptions for neo-quotas.

This module defines the root of the neo-quotas exception hierarchy.
All exceptions inherit from NeoQuotasError and carry an error code and a
details dictionary used when rendering API error responses.
"""

from typing import Any, Dict, Optional


class NeoQuotasError(Exception):
    """Base exception for all neo-quotas errors.

    Carries structured error information for logging and API responses.
    ``retryable`` tells callers whether repeating the same call may succeed.
    """

    retryable: bool = False

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}

    @property
    def public_message(self) -> str:
        """Message that is safe to show to non-privileged callers."""
        return self.message

    @property
    def public_details(self) -> Dict[str, Any]:
        """Details that are safe to show to non-privileged callers."""
        return self.details

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the public view of this error."""
        return {
            "code": self.error_code,
            "message": self.public_message,
            "details": self.public_details,
            "type": self.__class__.__name__,
        }


def create_error_response(exception: NeoQuotasError) -> Dict[str, Any]:
    """Create standardized error response from exception.

    Args:
        exception: The neo-quotas exception

    Returns:
        Error response dictionary
    """
    return {"error": exception.to_dict()}
