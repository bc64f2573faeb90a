"""Quota validation utilities.

Centralized checks shared by services and request models.
"""

from typing import Any

from ....core.exceptions import InvalidAmountError, InvalidLimitError
from ....core.value_objects import LimitValue, is_valid_limit


class QuotaValidationRules:
    """Centralized validation rules for quota inputs."""

    @staticmethod
    def validate_amount(amount: Any) -> int:
        """Validate an increment or release amount.

        Raises:
            InvalidAmountError: If amount is not a positive integer
        """
        if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
            raise InvalidAmountError(amount)
        return amount

    @staticmethod
    def validate_limit(limit: Any) -> LimitValue:
        """Validate a limit value.

        Raises:
            InvalidLimitError: If limit is negative or not an integer
        """
        if not is_valid_limit(limit):
            if isinstance(limit, int) and not isinstance(limit, bool) and limit < 0:
                raise InvalidLimitError(limit, "negative limits are not allowed, use UNBOUNDED for no limit")
            raise InvalidLimitError(limit)
        return limit
